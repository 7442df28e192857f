from .cache import (
    CatalogCache,
    ProductAction,
    ProductEvent,
    PRODUCTS_TOPIC,
    PUBLIC_FIELDS,
    public_view,
)

__all__ = [
    "CatalogCache",
    "ProductAction",
    "ProductEvent",
    "PRODUCTS_TOPIC",
    "PUBLIC_FIELDS",
    "public_view",
]
