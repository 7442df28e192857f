import pytest

from spherical.catalog import CatalogCache, ProductAction, ProductEvent, public_view
from spherical.events import EventChannel


def product(pid, name, revision=1, **extra):
    return {"_id": pid, "name": name, "revision": revision, **extra}


@pytest.fixture
def cache():
    c = CatalogCache()
    c.load([
        product("p1", "Theodolite", category="Survey", in_stock=True),
        product("p2", "Battery", category="Solar", in_stock=False),
    ])
    return c


def test_load_and_list_sorted_by_name(cache):
    assert len(cache) == 2
    assert [p["name"] for p in cache.list_products()] == ["Battery", "Theodolite"]
    assert [p["_id"] for p in cache.list_products(category="Solar")] == ["p2"]
    assert [p["_id"] for p in cache.list_products(in_stock=True)] == ["p1"]


def test_newer_update_replaces_product(cache):
    event = ProductEvent(ProductAction.UPDATED, "p1", 2, product("p1", "Total station", 2))
    assert cache.apply(event)
    assert cache.get("p1")["name"] == "Total station"


def test_stale_update_is_ignored(cache):
    cache.apply(ProductEvent(ProductAction.UPDATED, "p1", 3, product("p1", "New", 3)))
    assert not cache.apply(ProductEvent(ProductAction.UPDATED, "p1", 2, product("p1", "Old", 2)))
    assert cache.get("p1")["name"] == "New"


def test_delete_keeps_revision_so_late_update_cannot_revive(cache):
    cache.apply(ProductEvent(ProductAction.DELETED, "p2", 2))
    assert cache.get("p2") is None
    assert not cache.apply(ProductEvent(ProductAction.UPDATED, "p2", 1, product("p2", "Battery")))
    assert cache.get("p2") is None


async def test_attached_cache_follows_channel():
    channel = EventChannel()
    cache = CatalogCache()
    cache.attach(channel)

    await channel.publish("products", ProductEvent(ProductAction.CREATED, "p9", 1, product("p9", "Drone")))
    assert cache.get("p9")["name"] == "Drone"

    cache.detach(channel)
    await channel.publish("products", ProductEvent(ProductAction.DELETED, "p9", 2))
    assert cache.get("p9") is not None


def test_public_view_keeps_only_catalog_fields():
    stored = product("p9", "Panel", price=180.0, cost_price=120.0, created_by="u1", is_deleted=False)
    assert public_view(stored) == {"_id": "p9", "name": "Panel", "price": 180.0}
