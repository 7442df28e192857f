from datetime import datetime, timezone

from bson import ObjectId

from spherical.rbac import Role

from .conftest import API


async def insert_product(db, name, **extra):
    result = await db["products"].insert_one(
        {"name": name, "sku": name.upper(), "category": "Solar", "is_deleted": False, **extra}
    )
    return str(result.inserted_id)


async def test_sales_by_date_includes_whole_end_day(client, db, auth_headers):
    await db["sales"].insert_many([
        {"reference": "first-morning", "created_at": datetime(2024, 3, 1, 0, 0)},
        {"reference": "last-evening", "created_at": datetime(2024, 3, 3, 23, 59, 59)},
        {"reference": "day-after", "created_at": datetime(2024, 3, 4, 0, 0)},
        {"reference": "day-before", "created_at": datetime(2024, 2, 29, 23, 59)},
    ])

    resp = await client.get(
        f"{API}/sales/by-date",
        params={"start_date": "2024-03-01", "end_date": "2024-03-03"},
        headers=auth_headers(Role.ADMIN),
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["total"] == 2
    assert [s["reference"] for s in data["sales"]] == ["last-evening", "first-morning"]


async def test_sales_by_date_rejects_reversed_range(client, auth_headers):
    resp = await client.get(
        f"{API}/sales/by-date",
        params={"start_date": "2024-03-03", "end_date": "2024-03-01"},
        headers=auth_headers(Role.ADMIN),
    )
    assert resp.status_code == 400


async def test_low_stock_lists_lowest_first(client, db, auth_headers):
    panel = await insert_product(db, "Panel")
    drone = await insert_product(db, "Drone")
    battery = await insert_product(db, "Battery")
    await db["inventory"].insert_many([
        {"product_id": panel, "location": "Nairobi", "quantity": 3, "min_stock_level": 3},
        {"product_id": drone, "location": "Nairobi", "quantity": 10, "min_stock_level": 2},
        {"product_id": battery, "location": "Mombasa", "quantity": 1, "min_stock_level": 5},
    ])

    resp = await client.get(
        f"{API}/inventory/low-stock", headers=auth_headers(Role.INVENTORY_MANAGER)
    )
    assert resp.status_code == 200
    items = resp.json()["data"]["items"]
    assert [i["product"]["name"] for i in items] == ["Battery", "Panel"]
    assert [i["quantity"] for i in items] == [1, 3]


async def test_sales_summary_totals_and_categories(client, db, auth_headers):
    await db["sales"].insert_many([
        {
            "final_amount": 100.0,
            "items": [
                {"quantity": 2, "unit_price": 30.0, "category": "Solar"},
                {"quantity": 1, "unit_price": 40.0, "category": "Survey"},
            ],
            "created_at": datetime(2024, 3, 1, 9, 0),
        },
        {
            "final_amount": 50.0,
            "items": [{"quantity": 1, "unit_price": 50.0, "category": "Solar"}],
            "created_at": datetime(2024, 3, 2, 9, 0),
        },
    ])

    resp = await client.get(f"{API}/reports/sales-summary", headers=auth_headers(Role.ADMIN))
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["total_sales"] == 2
    assert data["total_revenue"] == 150.0
    assert data["average_sale_value"] == 75.0
    assert data["sales_by_category"] == [
        {"category": "Solar", "count": 2, "amount": 110.0},
        {"category": "Survey", "count": 1, "amount": 40.0},
    ]


async def test_sales_summary_without_sales(client, auth_headers):
    resp = await client.get(f"{API}/reports/sales-summary", headers=auth_headers(Role.ADMIN))
    data = resp.json()["data"]
    assert data["total_sales"] == 0
    assert data["average_sale_value"] == 0
    assert data["sales_by_category"] == []


async def test_dashboard_counts(client, db, auth_headers, insert_user):
    await insert_product(db, "Panel")
    await insert_product(db, "Old panel", is_deleted=True)
    await db["inventory"].insert_many([
        {"product_id": str(ObjectId()), "location": "Nairobi", "quantity": 0, "min_stock_level": 1},
        {"product_id": str(ObjectId()), "location": "Nairobi", "quantity": 9, "min_stock_level": 1},
    ])
    await insert_user("md@example.com", role=Role.MANAGING_DIRECTOR)
    await insert_user("till@example.com", role=Role.CASHIER)
    await insert_user("gone@example.com", is_active=False)
    await db["quote_requests"].insert_many([{"status": "new"}, {"status": "contacted"}])
    await db["contact_requests"].insert_one({"status": "new"})
    await db["sales"].insert_many([
        {"final_amount": 99.5, "created_at": datetime.now(timezone.utc).replace(tzinfo=None)},
        {"final_amount": 10.0, "created_at": datetime(2020, 1, 1, 12, 0)},
    ])

    resp = await client.get(f"{API}/reports/dashboard", headers=auth_headers(Role.CASHIER))
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["today"] == {"count": 1, "revenue": 99.5}
    assert data["total_products"] == 1
    assert data["low_stock_items"] == 1
    assert data["active_users"] == 2
    assert data["open_quote_requests"] == 1
    assert data["open_contact_requests"] == 1
