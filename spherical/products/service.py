"""
Product service — CRUD on the product catalog.

Every write bumps the product's `revision` and publishes a ProductEvent
on the `products` topic so the catalog cache follows along.
"""

from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from fastapi import HTTPException, status
from pymongo import ReturnDocument

from spherical.catalog import PRODUCTS_TOPIC, ProductAction, ProductEvent
from spherical.events import EventChannel
from spherical.utils import parse_object_id, serialize_mongo_doc

_ALIVE = {"is_deleted": {"$ne": True}}


class ProductService:
    def __init__(self, db: AsyncIOMotorDatabase, channel: EventChannel | None = None):
        self.db = db
        self.products = db["products"]
        self.channel = channel

    async def _publish(self, action: ProductAction, product: dict) -> None:
        if self.channel is None:
            return
        await self.channel.publish(
            PRODUCTS_TOPIC,
            ProductEvent(
                action=action,
                product_id=product["_id"],
                revision=product.get("revision", 0),
                product=None if action == ProductAction.DELETED else product,
            ),
        )

    async def _check_sku(self, sku: str, exclude=None) -> None:
        filters = {"sku": sku, **_ALIVE}
        if exclude is not None:
            filters["_id"] = {"$ne": exclude}
        if await self.products.find_one(filters):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Product with SKU '{sku}' already exists",
            )

    async def create_product(self, data: dict, created_by: str | None = None) -> dict:
        """Create a product. SKUs are unique among live products."""
        await self._check_sku(data["sku"])

        now = datetime.now(timezone.utc)
        doc = {
            **data,
            "revision": 1,
            "is_deleted": False,
            "created_by": created_by,
            "created_at": now,
            "updated_at": now,
        }
        result = await self.products.insert_one(doc)
        doc["_id"] = result.inserted_id

        product = serialize_mongo_doc(doc)
        await self._publish(ProductAction.CREATED, product)
        return product

    async def get_product(self, product_id: str) -> dict:
        oid = parse_object_id(product_id, "product ID")
        product = await self.products.find_one({"_id": oid, **_ALIVE})
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
            )
        return serialize_mongo_doc(product)

    async def list_products(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        in_stock: Optional[bool] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[dict], int]:
        """List products with search (name, SKU, description) and filters."""
        filters: dict = dict(_ALIVE)
        if query:
            filters["$or"] = [
                {"name": {"$regex": query, "$options": "i"}},
                {"sku": {"$regex": query, "$options": "i"}},
                {"description": {"$regex": query, "$options": "i"}},
            ]
        if category:
            filters["category"] = category
        if in_stock is not None:
            filters["in_stock"] = in_stock

        total = await self.products.count_documents(filters)
        cursor = self.products.find(filters).sort("name", 1).skip(offset).limit(limit)
        products = [serialize_mongo_doc(doc) async for doc in cursor]
        return products, total

    async def all_products(self) -> list[dict]:
        cursor = self.products.find(dict(_ALIVE))
        return [serialize_mongo_doc(doc) async for doc in cursor]

    async def update_product(self, product_id: str, update_data: dict) -> dict:
        """Update product fields. Only non-None fields are updated."""
        oid = parse_object_id(product_id, "product ID")
        clean = {k: v for k, v in update_data.items() if v is not None}
        if "sku" in clean:
            await self._check_sku(clean["sku"], exclude=oid)
        clean["updated_at"] = datetime.now(timezone.utc)

        result = await self.products.find_one_and_update(
            {"_id": oid, **_ALIVE},
            {"$set": clean, "$inc": {"revision": 1}},
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
            )
        product = serialize_mongo_doc(result)
        await self._publish(ProductAction.UPDATED, product)
        return product

    async def rename_category(self, old: str, new: str) -> int:
        """Move every live product of category `old` to `new`; returns how many moved."""
        cursor = self.products.find({"category": old, **_ALIVE}, {"_id": 1})
        ids = [doc["_id"] async for doc in cursor]
        for oid in ids:
            result = await self.products.find_one_and_update(
                {"_id": oid},
                {
                    "$set": {"category": new, "updated_at": datetime.now(timezone.utc)},
                    "$inc": {"revision": 1},
                },
                return_document=ReturnDocument.AFTER,
            )
            await self._publish(ProductAction.UPDATED, serialize_mongo_doc(result))
        return len(ids)

    async def delete_product(self, product_id: str) -> dict:
        """Soft-delete a product."""
        oid = parse_object_id(product_id, "product ID")
        result = await self.products.find_one_and_update(
            {"_id": oid, **_ALIVE},
            {
                "$set": {"is_deleted": True, "deleted_at": datetime.now(timezone.utc)},
                "$inc": {"revision": 1},
            },
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found or already deleted",
            )
        await self._publish(ProductAction.DELETED, serialize_mongo_doc(result))
        return {"message": "Product deleted successfully"}
