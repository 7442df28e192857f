"""
Catalog cache — the public product listing's view of the catalog.

Kept current by ProductEvents from the `products` topic. Each product
carries a revision; an event older than what the cache holds is dropped,
so the last write wins regardless of delivery order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from spherical.events import EventChannel, Subscription
from spherical.utils import Logger

logger = Logger("catalog")

PRODUCTS_TOPIC = "products"

# Fields the public catalog may show; cost price and bookkeeping stay internal.
PUBLIC_FIELDS = (
    "_id",
    "name",
    "description",
    "category",
    "price",
    "image_url",
    "specifications",
    "features",
    "in_stock",
)


def public_view(product: dict) -> dict:
    return {key: product[key] for key in PUBLIC_FIELDS if key in product}


class ProductAction(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


@dataclass(frozen=True)
class ProductEvent:
    action: ProductAction
    product_id: str
    revision: int
    product: Optional[dict] = None


class CatalogCache:
    def __init__(self):
        self._products: dict[str, dict] = {}
        self._revisions: dict[str, int] = {}
        self._subscription: Subscription | None = None

    def attach(self, channel: EventChannel) -> Subscription:
        self._subscription = channel.subscribe(PRODUCTS_TOPIC, self.apply)
        return self._subscription

    def detach(self, channel: EventChannel) -> None:
        if self._subscription is not None:
            channel.unsubscribe(self._subscription)
            self._subscription = None

    def load(self, products: list[dict]) -> None:
        """Replace the cache with a fresh snapshot (e.g. from the database)."""
        self._products = {}
        self._revisions = {}
        for product in products:
            pid = str(product["_id"])
            self._products[pid] = product
            self._revisions[pid] = int(product.get("revision", 0))
        logger.info(f"Catalog cache loaded with {len(self._products)} products")

    def apply(self, event: ProductEvent) -> bool:
        """Apply one event; returns False if it was stale and ignored."""
        current = self._revisions.get(event.product_id)
        if current is not None and event.revision < current:
            logger.debug(
                f"Stale event for {event.product_id}: rev {event.revision} < {current}"
            )
            return False

        if event.action == ProductAction.DELETED:
            self._products.pop(event.product_id, None)
        elif event.product is not None:
            self._products[event.product_id] = event.product
        self._revisions[event.product_id] = event.revision
        return True

    def get(self, product_id: str) -> Optional[dict]:
        return self._products.get(product_id)

    def list_products(
        self, category: Optional[str] = None, in_stock: Optional[bool] = None
    ) -> list[dict]:
        products = sorted(self._products.values(), key=lambda p: p.get("name", ""))
        if category:
            products = [p for p in products if p.get("category") == category]
        if in_stock is not None:
            products = [p for p in products if bool(p.get("in_stock")) == in_stock]
        return products

    def __len__(self) -> int:
        return len(self._products)
