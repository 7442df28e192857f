from .settings import Settings
from .database import DatabaseManager, get_database
from .dependencies import (
    get_access_policy,
    get_channel,
    get_catalog_cache,
)

__all__ = [
    "Settings",
    "DatabaseManager",
    "get_database",
    "get_access_policy",
    "get_channel",
    "get_catalog_cache",
]
