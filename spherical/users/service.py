"""User service — CRUD on the staff user collection."""

from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from fastapi import HTTPException, status
from pymongo import ReturnDocument

from spherical.auth.helpers import hash_password
from spherical.rbac import Role
from spherical.utils import Logger, parse_object_id, serialize_mongo_doc

logger = Logger("users")

_ALIVE = {"is_deleted": {"$ne": True}}


def _safe(user: dict) -> dict:
    data = serialize_mongo_doc(user)
    data.pop("password", None)
    return data


class UserService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.users = db["users"]

    async def create_user(self, data: dict, created_by: str | None = None) -> dict:
        """Create a new user. Hashes password and checks email uniqueness."""
        email = data["email"].lower()
        existing = await self.users.find_one({"email": email})
        if existing:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User with this email already exists",
            )

        now = datetime.now(timezone.utc)
        role = Role.parse(data.get("role")) or Role.REPORT_VIEWER
        user_doc = {
            **data,
            "email": email,
            "role": role.value,
            "password": hash_password(data["password"]),
            "is_active": data.get("is_active", True),
            "is_deleted": False,
            "created_by": created_by,
            "created_at": now,
            "updated_at": now,
        }

        result = await self.users.insert_one(user_doc)
        user_doc["_id"] = result.inserted_id
        return _safe(user_doc)

    async def get_user(self, user_id: str) -> dict:
        """Get a single user by ID (excludes password from response)."""
        oid = parse_object_id(user_id, "user ID")
        user = await self.users.find_one({"_id": oid, **_ALIVE})
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
            )
        return _safe(user)

    async def list_users(
        self,
        query: Optional[str] = None,
        role: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[dict], int]:
        """List users with optional search by name or email."""
        filters: dict = dict(_ALIVE)
        if query:
            filters["$or"] = [
                {"name": {"$regex": query, "$options": "i"}},
                {"email": {"$regex": query, "$options": "i"}},
            ]
        if role:
            filters["role"] = role

        total = await self.users.count_documents(filters)
        cursor = self.users.find(filters).sort("created_at", -1).skip(offset).limit(limit)
        users = [_safe(u) async for u in cursor]
        return users, total

    async def _ensure_other_director(self, user: dict) -> None:
        """Refuse to remove the last active managing director."""
        if user.get("role") != Role.MANAGING_DIRECTOR.value or not user.get("is_active", True):
            return
        active_directors = await self.users.count_documents(
            {"role": Role.MANAGING_DIRECTOR.value, "is_active": True, **_ALIVE}
        )
        if active_directors <= 1:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot deactivate the last active managing director",
            )

    async def _load(self, user_id: str) -> dict:
        oid = parse_object_id(user_id, "user ID")
        user = await self.users.find_one({"_id": oid, **_ALIVE})
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
            )
        return user

    async def update_user(self, user_id: str, update_data: dict) -> dict:
        """Update user fields. Only non-None fields are updated."""
        user = await self._load(user_id)
        clean = {k: v for k, v in update_data.items() if v is not None}

        demoted = "role" in clean and clean["role"] != Role.MANAGING_DIRECTOR.value
        deactivated = clean.get("is_active") is False
        if demoted or deactivated:
            await self._ensure_other_director(user)

        if "password" in clean:
            clean["password"] = hash_password(clean["password"])
        if "email" in clean:
            clean["email"] = clean["email"].lower()
            clash = await self.users.find_one(
                {"email": clean["email"], "_id": {"$ne": user["_id"]}}
            )
            if clash:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="User with this email already exists",
                )
        clean["updated_at"] = datetime.now(timezone.utc)

        result = await self.users.find_one_and_update(
            {"_id": user["_id"]},
            {"$set": clean},
            return_document=ReturnDocument.AFTER,
        )
        return _safe(result)

    async def toggle_active(self, user_id: str) -> dict:
        """Flip is_active; the last active managing director stays active."""
        user = await self._load(user_id)
        await self._ensure_other_director(user)

        new_state = not user.get("is_active", True)
        result = await self.users.find_one_and_update(
            {"_id": user["_id"]},
            {"$set": {"is_active": new_state, "updated_at": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        logger.info(f"User {user['email']} is_active → {new_state}")
        return _safe(result)

    async def delete_user(self, user_id: str) -> dict:
        """Soft-delete a user (sets is_deleted=True, preserves data)."""
        user = await self._load(user_id)
        await self._ensure_other_director(user)

        await self.users.update_one(
            {"_id": user["_id"]},
            {"$set": {"is_deleted": True, "deleted_at": datetime.now(timezone.utc)}},
        )
        return {"message": "User deleted successfully"}
