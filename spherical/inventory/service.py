"""
Inventory service — stock levels per product and location.

Collection: inventory
    { product_id, location, quantity, min_stock_level, last_updated }
(product_id, location) is unique; posting an existing pair updates it.
"""

from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase
from fastapi import HTTPException, status
from pymongo import ReturnDocument

from spherical.utils import Logger, parse_object_id, serialize_mongo_doc

logger = Logger("inventory")


def is_low_stock(item: dict) -> bool:
    return item.get("quantity", 0) <= item.get("min_stock_level", 0)


class InventoryService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.inventory = db["inventory"]
        self.products = db["products"]

    async def _attach_products(self, items: list[dict]) -> list[dict]:
        """Embed a product summary into each stock record."""
        ids = {item["product_id"] for item in items}
        oids = [parse_object_id(pid, "product ID") for pid in ids]
        products = {}
        async for p in self.products.find({"_id": {"$in": oids}}):
            products[str(p["_id"])] = {
                "_id": str(p["_id"]),
                "name": p.get("name"),
                "sku": p.get("sku"),
                "category": p.get("category"),
            }
        out = []
        for item in items:
            data = serialize_mongo_doc(item)
            data["product"] = products.get(item["product_id"])
            out.append(data)
        return out

    async def list_items(self) -> list[dict]:
        items = [doc async for doc in self.inventory.find({})]
        result = await self._attach_products(items)
        return sorted(result, key=lambda i: ((i["product"] or {}).get("name") or "", i["location"]))

    async def upsert_item(self, data: dict) -> tuple[dict, bool]:
        """Create or update the record for (product, location). Returns (item, created)."""
        oid = parse_object_id(data["product_id"], "product ID")
        product = await self.products.find_one({"_id": oid, "is_deleted": {"$ne": True}})
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
            )

        now = datetime.now(timezone.utc)
        key = {"product_id": data["product_id"], "location": data["location"]}
        existing = await self.inventory.find_one(key)
        if existing:
            item = await self.inventory.find_one_and_update(
                key,
                {"$set": {
                    "quantity": data["quantity"],
                    "min_stock_level": data["min_stock_level"],
                    "last_updated": now,
                }},
                return_document=ReturnDocument.AFTER,
            )
            created = False
        else:
            item = {**key, "quantity": data["quantity"],
                    "min_stock_level": data["min_stock_level"], "last_updated": now}
            result = await self.inventory.insert_one(item)
            item["_id"] = result.inserted_id
            created = True

        (enriched,) = await self._attach_products([item])
        return enriched, created

    async def update_item(self, item_id: str, update_data: dict) -> dict:
        oid = parse_object_id(item_id, "inventory item ID")
        clean = {k: v for k, v in update_data.items() if v is not None}
        clean["last_updated"] = datetime.now(timezone.utc)
        item = await self.inventory.find_one_and_update(
            {"_id": oid},
            {"$set": clean},
            return_document=ReturnDocument.AFTER,
        )
        if not item:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found"
            )
        (enriched,) = await self._attach_products([item])
        return enriched

    async def low_stock(self) -> list[dict]:
        """Records at or below their minimum stock level, lowest first."""
        cursor = self.inventory.find({}).sort("quantity", 1)
        items = [doc async for doc in cursor if is_low_stock(doc)]
        return await self._attach_products(items)

    async def decrement(self, product_id: str, quantity: int) -> None:
        """Take sold units out of the first stock record of a product."""
        item = await self.inventory.find_one({"product_id": product_id})
        if item is None:
            logger.warning(f"No inventory record for product {product_id}")
            return
        await self.inventory.update_one(
            {"_id": item["_id"]},
            {
                "$inc": {"quantity": -quantity},
                "$set": {"last_updated": datetime.now(timezone.utc)},
            },
        )
