from .routes import products_router, public_products_router
from .service import ProductService

__all__ = ["products_router", "public_products_router", "ProductService"]
