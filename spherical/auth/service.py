"""Authentication service — login and public registration."""

from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase
from fastapi import HTTPException, status

from spherical.config import Settings
from spherical.rbac import AccessPolicy, Role
from spherical.utils import Logger, serialize_mongo_doc
from .helpers import create_access_token, hash_password, verify_password

logger = Logger("auth")


class AuthService:
    def __init__(self, db: AsyncIOMotorDatabase, settings: Settings, policy: AccessPolicy):
        self.db = db
        self.settings = settings
        self.policy = policy
        self.users = db["users"]

    async def authenticate(self, email: str, password: str) -> dict:
        """
        1. Look up the user by email.
        2. Refuse deactivated accounts.
        3. Verify password and return JWT + user data.
        """
        user = await self.users.find_one(
            {"email": email.lower(), "is_deleted": {"$ne": True}}
        )
        if not user:
            logger.warning(f"Login failed, unknown email {email}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="No user found with this email",
            )

        if not user.get("is_active", True):
            logger.warning(f"Login refused, account {email} is deactivated")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="This account has been deactivated",
            )

        if not verify_password(password, user.get("password", "")):
            logger.warning(f"Login failed, bad password for {email}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid password",
            )

        role = user.get("role", self.settings.default_signup_role)
        token_payload = {
            "sub": str(user["_id"]),
            "email": user["email"],
            "name": user.get("name"),
            "role": role,
            "permissions": self.policy.permissions_for(role),
        }
        token = create_access_token(token_payload, self.settings)

        now = datetime.now(timezone.utc)
        await self.users.update_one({"_id": user["_id"]}, {"$set": {"last_login": now}})
        user["last_login"] = now

        user_data = serialize_mongo_doc(user)
        user_data.pop("password", None)
        return {
            "access_token": token,
            "token_type": "bearer",
            "user": user_data,
        }

    async def register(self, values: dict) -> dict:
        """Create a self-registered account with the default signup role."""
        email = values["email"].lower()
        existing = await self.users.find_one({"email": email})
        if existing:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User with this email already exists",
            )

        role = Role.parse(self.settings.default_signup_role) or Role.REPORT_VIEWER
        now = datetime.now(timezone.utc)
        user_doc = {
            "name": values["name"],
            "email": email,
            "password": hash_password(values["password"]),
            "role": role.value,
            "is_active": True,
            "is_deleted": False,
            "created_at": now,
            "updated_at": now,
        }
        result = await self.users.insert_one(user_doc)
        user_doc["_id"] = result.inserted_id
        logger.info(f"Registered {email} as {role.value}")

        safe = serialize_mongo_doc(user_doc)
        safe.pop("password", None)
        return safe
