"""
Sales service — recording sales and querying them.

Amounts:
    subtotal     = Σ quantity × unit_price
    discounted   = subtotal − subtotal × discount%
    final_amount = discounted + discounted × tax%
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from fastapi import HTTPException, status

from spherical.inventory import InventoryService
from spherical.utils import Logger, parse_object_id, serialize_mongo_doc

logger = Logger("sales")


def compute_totals(items: list[dict], discount: float = 0, tax: float = 0) -> dict:
    subtotal = sum(i["quantity"] * i["unit_price"] for i in items)
    discount_amount = subtotal * discount / 100
    after_discount = subtotal - discount_amount
    tax_amount = after_discount * tax / 100
    return {
        "total_amount": round(subtotal, 2),
        "discount_amount": round(discount_amount, 2),
        "tax_amount": round(tax_amount, 2),
        "final_amount": round(after_discount + tax_amount, 2),
    }


class SalesService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.sales = db["sales"]
        self.products = db["products"]

    async def create_sale(self, data: dict, user: dict) -> dict:
        """Record a sale and take the sold units out of inventory."""
        lines = []
        for item in data["items"]:
            oid = parse_object_id(item["product_id"], "product ID")
            product = await self.products.find_one({"_id": oid, "is_deleted": {"$ne": True}})
            if not product:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=f"Product {item['product_id']} not found",
                )
            lines.append({
                **item,
                "product_name": product.get("name"),
                "category": product.get("category"),
            })

        now = datetime.now(timezone.utc)
        sale_doc = {
            **data,
            "items": lines,
            **compute_totals(lines, data.get("discount", 0), data.get("tax", 0)),
            "created_by": {
                "id": user.get("sub"),
                "name": user.get("name"),
                "email": user.get("email"),
            },
            "created_at": now,
        }
        result = await self.sales.insert_one(sale_doc)
        sale_doc["_id"] = result.inserted_id

        inventory = InventoryService(self.db)
        for line in lines:
            await inventory.decrement(line["product_id"], line["quantity"])

        logger.info(f"Sale {result.inserted_id} recorded, final {sale_doc['final_amount']}")
        return serialize_mongo_doc(sale_doc)

    async def list_sales(self, limit: int = 50, offset: int = 0) -> tuple[list[dict], int]:
        total = await self.sales.count_documents({})
        cursor = self.sales.find({}).sort("created_at", -1).skip(offset).limit(limit)
        sales = [serialize_mongo_doc(doc) async for doc in cursor]
        return sales, total

    async def sales_by_date(self, start: Optional[date], end: Optional[date]) -> list[dict]:
        """Sales from the start of `start` through the whole of `end`."""
        if start is None or end is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Start date and end date are required",
            )
        if end < start:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="End date must not be before start date",
            )
        # naive bounds; the driver reads them as UTC
        lower = datetime.combine(start, time.min)
        upper = datetime.combine(end + timedelta(days=1), time.min)
        cursor = self.sales.find(
            {"created_at": {"$gte": lower, "$lt": upper}}
        ).sort("created_at", -1)
        return [serialize_mongo_doc(doc) async for doc in cursor]
