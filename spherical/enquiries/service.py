"""
Enquiry service — contact messages and quote requests from the public site.

Submissions are validated by the form engine before they reach here.
"""

from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from fastapi import HTTPException, status

from spherical.utils import Logger, serialize_mongo_doc

logger = Logger("enquiries")

COLLECTIONS = {
    "contact": "contact_requests",
    "quote": "quote_requests",
}


class EnquiryService:
    def __init__(self, db: AsyncIOMotorDatabase, kind: str):
        if kind not in COLLECTIONS:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Unknown enquiry type '{kind}'",
            )
        self.kind = kind
        self.collection = db[COLLECTIONS[kind]]

    async def submit(self, values: dict) -> dict:
        now = datetime.now(timezone.utc)
        doc = {
            **values,
            "email": (values.get("email") or "").lower(),
            "status": "new",
            "created_at": now,
            "updated_at": now,
        }
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info(f"New {self.kind} request from {doc['email']}")
        return serialize_mongo_doc(doc)

    async def list_requests(self, status_filter: Optional[str] = None, limit: int = 50, offset: int = 0):
        filters = {"status": status_filter} if status_filter else {}
        total = await self.collection.count_documents(filters)
        cursor = (
            self.collection.find(filters).sort("created_at", -1).skip(offset).limit(limit)
        )
        items = [serialize_mongo_doc(doc) async for doc in cursor]
        return items, total
