from .routes import categories_router
from .service import CategoryService

__all__ = ["categories_router", "CategoryService"]
