import pytest

from spherical.catalog import PUBLIC_FIELDS
from spherical.rbac import Role

from .conftest import API

PANEL = {
    "name": "Solar panel 300W",
    "description": "Monocrystalline panel for off-grid installations.",
    "category": "Solar",
    "price": 180.0,
    "cost_price": 120.0,
    "sku": "SP-300",
}


@pytest.fixture
def manager(auth_headers):
    return auth_headers(Role.INVENTORY_MANAGER)


async def create_product(client, headers, **overrides):
    resp = await client.post(f"{API}/products/", json={**PANEL, **overrides}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def test_product_crud_feeds_public_catalog(client, manager):
    product = await create_product(client, manager)
    assert product["revision"] == 1

    resp = await client.get(f"{API}/public/products")
    assert resp.status_code == 200
    assert [p["name"] for p in resp.json()["data"]["products"]] == ["Solar panel 300W"]

    resp = await client.put(
        f"{API}/products/{product['_id']}", json={"price": 175.0}, headers=manager
    )
    assert resp.json()["data"]["revision"] == 2

    resp = await client.get(f"{API}/public/products/{product['_id']}")
    assert resp.json()["data"]["price"] == 175.0

    resp = await client.delete(f"{API}/products/{product['_id']}", headers=manager)
    assert resp.status_code == 200

    resp = await client.get(f"{API}/public/products/{product['_id']}")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Product not found"


async def test_public_catalog_hides_internal_fields(client, manager):
    product = await create_product(client, manager, image_url="/img/panel.jpg")
    assert product["cost_price"] == 120.0

    resp = await client.get(f"{API}/public/products")
    (listed,) = resp.json()["data"]["products"]
    assert set(listed) <= set(PUBLIC_FIELDS)
    for hidden in ("cost_price", "created_by", "is_deleted", "revision", "sku"):
        assert hidden not in listed
    assert listed["price"] == 180.0

    resp = await client.get(f"{API}/public/products/{product['_id']}")
    assert "cost_price" not in resp.json()["data"]
    assert resp.json()["data"]["image_url"] == "/img/panel.jpg"


async def test_duplicate_sku_conflicts(client, manager):
    await create_product(client, manager)
    resp = await client.post(f"{API}/products/", json=PANEL, headers=manager)
    assert resp.status_code == 409


async def test_cashier_cannot_create_products(client, auth_headers):
    resp = await client.post(
        f"{API}/products/", json=PANEL, headers=auth_headers(Role.CASHIER)
    )
    assert resp.status_code == 403


async def test_public_catalog_filters(client, manager):
    await create_product(client, manager)
    await create_product(
        client, manager, name="Drone", sku="DR-1", category="Survey", in_stock=False
    )
    resp = await client.get(f"{API}/public/products", params={"category": "Survey"})
    assert [p["name"] for p in resp.json()["data"]["products"]] == ["Drone"]
    resp = await client.get(f"{API}/public/products", params={"in_stock": "true"})
    assert [p["name"] for p in resp.json()["data"]["products"]] == ["Solar panel 300W"]


async def test_inventory_upsert_and_sale_decrements(client, manager, auth_headers):
    product = await create_product(client, manager)

    stock = {"product_id": product["_id"], "quantity": 10, "location": "Nairobi", "min_stock_level": 2}
    resp = await client.post(f"{API}/inventory/", json=stock, headers=manager)
    assert resp.status_code == 201
    assert resp.json()["data"]["product"]["name"] == "Solar panel 300W"

    resp = await client.post(
        f"{API}/inventory/", json={**stock, "quantity": 8}, headers=manager
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["quantity"] == 8

    sale = {
        "items": [{"product_id": product["_id"], "quantity": 3, "unit_price": 180.0}],
        "payment_method": "cash",
        "discount": 10,
        "tax": 16,
    }
    resp = await client.post(f"{API}/sales/", json=sale, headers=auth_headers(Role.CASHIER))
    assert resp.status_code == 201, resp.text
    recorded = resp.json()["data"]
    assert recorded["total_amount"] == 540.0
    assert recorded["final_amount"] == 563.76
    assert recorded["items"][0]["product_name"] == "Solar panel 300W"

    resp = await client.get(f"{API}/inventory/", headers=manager)
    assert resp.json()["data"]["items"][0]["quantity"] == 5


async def test_inventory_for_missing_product(client, manager):
    stock = {"product_id": "0" * 24, "quantity": 1, "location": "Nairobi"}
    resp = await client.post(f"{API}/inventory/", json=stock, headers=manager)
    assert resp.status_code == 404


async def test_sale_for_missing_product(client, auth_headers):
    sale = {
        "items": [{"product_id": "0" * 24, "quantity": 1, "unit_price": 10}],
        "payment_method": "card",
    }
    resp = await client.post(f"{API}/sales/", json=sale, headers=auth_headers(Role.CASHIER))
    assert resp.status_code == 404


async def test_sales_by_date_requires_both_dates(client, auth_headers):
    resp = await client.get(
        f"{API}/sales/by-date",
        params={"start_date": "2024-01-01"},
        headers=auth_headers(Role.ADMIN),
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Start date and end date are required"
