from .routes import inventory_router
from .service import InventoryService, is_low_stock

__all__ = ["inventory_router", "InventoryService", "is_low_stock"]
