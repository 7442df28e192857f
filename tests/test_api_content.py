import pytest

from spherical.rbac import Role

from .conftest import API


@pytest.fixture
def admin(auth_headers):
    return auth_headers(Role.ADMIN)


async def add_slide(client, headers, title, order=0, is_active=True):
    resp = await client.post(
        f"{API}/content/carousel",
        json={"title": title, "page": "home", "order": order, "is_active": is_active,
              "media_url": f"/img/{title}.jpg"},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]["_id"]


async def test_public_carousel_shows_active_slides_in_order(client, admin):
    await add_slide(client, admin, "second", order=2)
    await add_slide(client, admin, "first", order=1)
    await add_slide(client, admin, "hidden", order=0, is_active=False)

    resp = await client.get(f"{API}/public/carousel", params={"page": "home"})
    slides = resp.json()["data"]
    assert [s["title"] for s in slides] == ["first", "second"]
    assert slides[0]["src"] == "/img/first.jpg"
    assert slides[0]["alt"] == "first"

    resp = await client.get(f"{API}/content/carousel", headers=admin)
    assert len(resp.json()["data"]) == 3


async def test_reorder_carousel(client, admin):
    a = await add_slide(client, admin, "a", order=0)
    b = await add_slide(client, admin, "b", order=1)

    resp = await client.put(f"{API}/content/carousel/reorder", json={"ids": [b, a]}, headers=admin)
    assert resp.status_code == 200
    assert [s["title"] for s in resp.json()["data"]] == ["b", "a"]

    resp = await client.put(f"{API}/content/carousel/reorder", json={"ids": [a, a]}, headers=admin)
    assert resp.status_code == 400


async def test_content_requires_manage_content(client, auth_headers):
    resp = await client.get(
        f"{API}/content/carousel", headers=auth_headers(Role.INVENTORY_MANAGER)
    )
    assert resp.status_code == 403


async def test_update_and_delete_page_section(client, admin):
    resp = await client.post(
        f"{API}/content/page-sections",
        json={"page": "about", "section": "hero", "title": "About us"},
        headers=admin,
    )
    section_id = resp.json()["data"]["_id"]

    resp = await client.put(
        f"{API}/content/page-sections/{section_id}", json={"title": "Who we are"}, headers=admin
    )
    assert resp.json()["data"]["title"] == "Who we are"

    resp = await client.get(
        f"{API}/public/page-sections", params={"page": "about", "section": "hero"}
    )
    assert [s["title"] for s in resp.json()["data"]] == ["Who we are"]

    resp = await client.delete(f"{API}/content/page-sections/{section_id}", headers=admin)
    assert resp.status_code == 200
    resp = await client.delete(f"{API}/content/page-sections/{section_id}", headers=admin)
    assert resp.status_code == 404


async def test_featured_product_needs_existing_product(client, admin):
    resp = await client.post(
        f"{API}/content/featured-products", json={"product_id": "0" * 24}, headers=admin
    )
    assert resp.status_code == 404


async def test_unknown_content_kind(client, admin):
    resp = await client.get(f"{API}/content/banners", headers=admin)
    assert resp.status_code == 404
    assert resp.json()["success"] is False
