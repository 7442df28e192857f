"""
Category service — the named product categories of the catalog.

Products carry their category by name, so renaming a category renames
it on every live product and deleting one is refused while any live
product still uses it.
"""

import re
from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase
from fastapi import HTTPException, status
from pymongo import ReturnDocument

from spherical.events import EventChannel
from spherical.products import ProductService
from spherical.utils import Logger, parse_object_id, serialize_mongo_doc

logger = Logger("categories")

_ALIVE = {"is_deleted": {"$ne": True}}


def _name_filter(name: str) -> dict:
    return {"$regex": f"^{re.escape(name.strip())}$", "$options": "i"}


class CategoryService:
    def __init__(self, db: AsyncIOMotorDatabase, channel: EventChannel | None = None):
        self.db = db
        self.categories = db["product_categories"]
        self.products = db["products"]
        self.channel = channel

    async def _check_name(self, name: str, exclude=None) -> None:
        filters = {"name": _name_filter(name)}
        if exclude is not None:
            filters["_id"] = {"$ne": exclude}
        if await self.categories.find_one(filters):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Category with this name already exists",
            )

    async def _find(self, category_id: str) -> dict:
        oid = parse_object_id(category_id, "category ID")
        category = await self.categories.find_one({"_id": oid})
        if not category:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Category not found"
            )
        return category

    async def list_categories(self) -> list[dict]:
        cursor = self.categories.find({}).sort("name", 1)
        return [serialize_mongo_doc(doc) async for doc in cursor]

    async def get_category(self, category_id: str) -> dict:
        """The category with a summary of the live products filed under it."""
        category = serialize_mongo_doc(await self._find(category_id))
        cursor = self.products.find(
            {"category": category["name"], **_ALIVE},
            {"name": 1, "sku": 1, "price": 1, "in_stock": 1},
        ).sort("name", 1)
        category["products"] = [serialize_mongo_doc(doc) async for doc in cursor]
        return category

    async def create_category(self, data: dict) -> dict:
        name = data["name"].strip()
        if not name:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Category name is required"
            )
        await self._check_name(name)

        now = datetime.now(timezone.utc)
        doc = {
            "name": name,
            "description": data.get("description"),
            "created_at": now,
            "updated_at": now,
        }
        result = await self.categories.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info(f"Category '{name}' created")
        return serialize_mongo_doc(doc)

    async def update_category(self, category_id: str, update_data: dict) -> dict:
        existing = await self._find(category_id)
        clean = {k: v for k, v in update_data.items() if v is not None}

        renamed = False
        if "name" in clean:
            clean["name"] = clean["name"].strip()
            if not clean["name"]:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Category name cannot be empty",
                )
            if clean["name"] != existing["name"]:
                await self._check_name(clean["name"], exclude=existing["_id"])
                renamed = True

        clean["updated_at"] = datetime.now(timezone.utc)
        category = await self.categories.find_one_and_update(
            {"_id": existing["_id"]},
            {"$set": clean},
            return_document=ReturnDocument.AFTER,
        )
        if renamed:
            moved = await ProductService(self.db, self.channel).rename_category(
                existing["name"], clean["name"]
            )
            logger.info(
                f"Category '{existing['name']}' renamed to '{clean['name']}', {moved} products moved"
            )
        return serialize_mongo_doc(category)

    async def delete_category(self, category_id: str) -> dict:
        category = await self._find(category_id)
        in_use = await self.products.count_documents({"category": category["name"], **_ALIVE})
        if in_use:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot delete category with associated products",
            )
        await self.categories.delete_one({"_id": category["_id"]})
        return {"message": "Category deleted successfully"}
