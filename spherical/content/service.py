"""
Content service — ordered CMS records for the public pages.

One class serves every content collection; each record has `order`,
`is_active` and usually a `page` it belongs to. Public reads return
active records only, sorted by `order` then newest first.
"""

from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from fastapi import HTTPException, status
from pymongo import ReturnDocument

from spherical.utils import parse_object_id, serialize_mongo_doc

COLLECTIONS = {
    "carousel": "carousel_items",
    "page-sections": "page_sections",
    "training-programs": "training_programs",
    "featured-products": "featured_products",
}

LABELS = {
    "carousel": "Carousel item",
    "page-sections": "Page section",
    "training-programs": "Training program",
    "featured-products": "Featured product",
}


def _order_key(doc: dict):
    created = doc.get("created_at")
    # newest first within the same order
    newest_first = -created.timestamp() if isinstance(created, datetime) else 0
    return (doc.get("order", 0), newest_first)


class ContentService:
    def __init__(self, db: AsyncIOMotorDatabase, kind: str):
        if kind not in COLLECTIONS:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Unknown content type '{kind}'",
            )
        self.db = db
        self.kind = kind
        self.label = LABELS[kind]
        self.collection = db[COLLECTIONS[kind]]

    async def list_items(
        self,
        page: Optional[str] = None,
        section: Optional[str] = None,
        active_only: bool = False,
    ) -> list[dict]:
        filters: dict = {}
        if page:
            filters["page"] = page
        if section:
            filters["section"] = section
        if active_only:
            filters["is_active"] = True
        docs = [doc async for doc in self.collection.find(filters)]
        docs.sort(key=_order_key)
        if self.kind == "featured-products":
            docs = await self._attach_products(docs)
        return [serialize_mongo_doc(d) for d in docs]

    async def _attach_products(self, docs: list[dict]) -> list[dict]:
        products = self.db["products"]
        out = []
        for doc in docs:
            product = None
            if ObjectId.is_valid(doc.get("product_id") or ""):
                product = await products.find_one(
                    {"_id": ObjectId(doc["product_id"]), "is_deleted": {"$ne": True}},
                    {"name": 1, "description": 1, "price": 1, "image_url": 1, "category": 1},
                )
            out.append({**doc, "product": product})
        return out

    async def create(self, data: dict) -> dict:
        if self.kind == "featured-products":
            oid = parse_object_id(data["product_id"], "product ID")
            if not await self.db["products"].find_one({"_id": oid, "is_deleted": {"$ne": True}}):
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
                )
        now = datetime.now(timezone.utc)
        doc = {**data, "created_at": now, "updated_at": now}
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_mongo_doc(doc)

    async def update(self, item_id: str, update_data: dict) -> dict:
        oid = parse_object_id(item_id)
        clean = {k: v for k, v in update_data.items() if v is not None}
        clean["updated_at"] = datetime.now(timezone.utc)
        result = await self.collection.find_one_and_update(
            {"_id": oid}, {"$set": clean}, return_document=ReturnDocument.AFTER
        )
        if not result:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=f"{self.label} not found"
            )
        return serialize_mongo_doc(result)

    async def delete(self, item_id: str) -> dict:
        oid = parse_object_id(item_id)
        result = await self.collection.delete_one({"_id": oid})
        if result.deleted_count == 0:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=f"{self.label} not found"
            )
        return {"message": f"{self.label} deleted successfully"}

    async def reorder(self, ids: list[str]) -> list[dict]:
        """Assign `order` 0..n-1 following the given id sequence."""
        if len(set(ids)) != len(ids):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Duplicate ids in order"
            )
        oids = [parse_object_id(i) for i in ids]
        found = await self.collection.count_documents({"_id": {"$in": oids}})
        if found != len(oids):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{self.label} not found",
            )
        now = datetime.now(timezone.utc)
        for position, oid in enumerate(oids):
            await self.collection.update_one(
                {"_id": oid}, {"$set": {"order": position, "updated_at": now}}
            )
        return await self.list_items()
