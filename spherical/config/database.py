from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from starlette.requests import Request

from spherical.utils import Logger
from .settings import Settings

logger = Logger("database")

# collection → [(keys, options), ...]
INDEXES = {
    "users": [([("email", ASCENDING)], {"unique": True})],
    "products": [([("sku", ASCENDING)], {}), ([("category", ASCENDING)], {})],
    "product_categories": [([("name", ASCENDING)], {"unique": True})],
    "inventory": [
        ([("product_id", ASCENDING), ("location", ASCENDING)], {"unique": True}),
    ],
    "sales": [([("created_at", DESCENDING)], {})],
    "carousel_items": [([("page", ASCENDING), ("order", ASCENDING)], {})],
    "page_sections": [([("page", ASCENDING), ("section", ASCENDING)], {})],
    "contact_requests": [([("status", ASCENDING), ("created_at", DESCENDING)], {})],
    "quote_requests": [([("status", ASCENDING), ("created_at", DESCENDING)], {})],
}


class DatabaseManager:
    """Owns the Motor client of one application instance."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._client: AsyncIOMotorClient | None = None
        self._database: AsyncIOMotorDatabase | None = None

    async def connect(self) -> None:
        if self._database is not None:
            return
        client = AsyncIOMotorClient(self.settings.mongodb_uri)
        try:
            await client.admin.command("ping")
        except Exception as e:
            client.close()
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise
        self._client = client
        self._database = client[self.settings.database_name]
        logger.info(f"Connected to MongoDB [{self.settings.database_name}]")

    async def ensure_indexes(self) -> None:
        for name, indexes in INDEXES.items():
            for keys, options in indexes:
                await self.database[name].create_index(keys, **options)
        logger.debug(f"Indexes ensured on {len(INDEXES)} collections")

    def close(self) -> None:
        if self._client is None:
            return
        self._client.close()
        self._client = None
        self._database = None
        logger.info("MongoDB connection closed")

    @property
    def database(self) -> AsyncIOMotorDatabase:
        if self._database is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._database

    @property
    def is_connected(self) -> bool:
        return self._database is not None


async def get_database(request: Request) -> AsyncIOMotorDatabase:
    """FastAPI dependency — the database of the running app."""
    db_manager: DatabaseManager = request.app.state.db_manager
    await db_manager.connect()
    return db_manager.database
