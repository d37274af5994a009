"""HTTP surface: status codes and error envelopes"""
import pytest

API = "/api/v1"


async def create_category(client, slug, parent_id=None, **extra):
    payload = {"name": slug.title(), "slug": slug, "parent_id": parent_id, **extra}
    response = await client.post(f"{API}/categories", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
async def test_category_lifecycle(client):
    tech = await create_category(client, "tech")
    programming = await create_category(client, "programming", tech["id"])
    web = await create_category(client, "web", programming["id"])

    assert tech["path"] == "tech"
    assert web["path"] == "tech/programming/web"

    response = await client.put(f"{API}/categories/{programming['id']}/move", json={"parent_id": None})
    assert response.status_code == 200
    assert response.json()["path"] == "programming"

    response = await client.get(f"{API}/categories/{web['id']}")
    assert response.json()["path"] == "programming/web"

    response = await client.put(f"{API}/categories/{tech['id']}", json={"slug": "technology"})
    assert response.status_code == 200
    assert response.json()["path"] == "technology"

    response = await client.get(f"{API}/categories", params={"path_prefix": "programming"})
    body = response.json()
    assert body["total"] == 2
    assert {item["slug"] for item in body["items"]} == {"programming", "web"}


@pytest.mark.asyncio
async def test_cycle_error_envelope(client):
    tech = await create_category(client, "tech")
    programming = await create_category(client, "programming", tech["id"])

    response = await client.put(f"{API}/categories/{tech['id']}/move", json={"parent_id": programming["id"]})

    assert response.status_code == 409
    error = response.json()["error"]
    assert error["code"] == "CATEGORY_CYCLE"
    assert error["request_id"]

    response = await client.get(f"{API}/categories/{tech['id']}")
    assert response.json()["parent_id"] is None


@pytest.mark.asyncio
async def test_self_parent_and_not_found(client):
    tech = await create_category(client, "tech")

    response = await client.put(f"{API}/categories/{tech['id']}/move", json={"parent_id": tech["id"]})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "CATEGORY_SELF_PARENT"

    response = await client.put(f"{API}/categories/{tech['id']}/move", json={"parent_id": 999})
    assert response.status_code == 404

    response = await client.get(f"{API}/categories/999")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "CATEGORY_NOT_FOUND"


@pytest.mark.asyncio
async def test_tree_and_reorder(client):
    tech = await create_category(client, "tech", order=1)
    news = await create_category(client, "news", order=0)
    web = await create_category(client, "web", tech["id"])

    response = await client.get(f"{API}/categories/tree")
    roots = response.json()["categories"]
    assert [r["slug"] for r in roots] == ["news", "tech"]
    assert roots[1]["children"][0]["slug"] == "web"

    response = await client.put(f"{API}/categories/reorder", json={"items": [
        {"id": web["id"], "parent_id": news["id"], "order": 0},
    ]})
    assert response.status_code == 200
    assert response.json() == {"success": True, "updated": 1, "paths_rewritten": 1}

    response = await client.get(f"{API}/categories/{web['id']}")
    assert response.json()["path"] == "news/web"

    response = await client.put(f"{API}/categories/reorder", json={"items": []})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "REORDER_EMPTY"


@pytest.mark.asyncio
async def test_delete(client):
    tech = await create_category(client, "tech")
    web = await create_category(client, "web", tech["id"])

    response = await client.delete(f"{API}/categories/{tech['id']}")
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CATEGORY_HAS_CHILDREN"

    response = await client.delete(f"{API}/categories/{web['id']}")
    assert response.status_code == 204

    response = await client.get(f"{API}/categories/{web['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_check_slug(client):
    response = await client.get(f"{API}/validation/check-slug", params={"slug": "admin", "type": "page"})
    assert response.status_code == 200
    assert response.json() == {"valid": False, "reason": "'admin' is a reserved system word", "code": "SLUG_RESERVED"}

    response = await client.get(f"{API}/validation/check-slug", params={"slug": "about", "type": "category"})
    assert response.json()["valid"] is True

    response = await client.get(f"{API}/validation/check-slug", params={"slug": "about", "type": "product"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "SLUG_UNKNOWN_TYPE"


@pytest.mark.asyncio
async def test_page_and_category_share_namespace(client):
    response = await client.post(f"{API}/pages", json={"title": "About", "slug": "about", "content": "..."})
    assert response.status_code == 201
    page = response.json()

    response = await client.post(f"{API}/categories", json={"name": "About", "slug": "about"})
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "SLUG_CONFLICT"

    response = await client.get(f"{API}/pages/slug/about")
    assert response.json()["id"] == page["id"]

    response = await client.put(f"{API}/pages/{page['id']}", json={"slug": "api"})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "SLUG_RESERVED"


@pytest.mark.asyncio
async def test_articles_and_tags(client):
    first = await client.post(f"{API}/articles", json={"title": "My Article"})
    second = await client.post(f"{API}/articles", json={"title": "My Article"})

    assert first.json()["slug"] == "my-article"
    assert second.status_code == 201
    assert second.json()["slug"].startswith("my-article-")

    response = await client.put(f"{API}/articles/{first.json()['id']}", json={"status": "published"})
    assert response.json()["status"] == "published"

    response = await client.post(f"{API}/tags", json={"name": "Python"})
    assert response.status_code == 201
    tag = response.json()

    response = await client.post(f"{API}/tags", json={"name": "Python"})
    assert response.status_code == 409

    response = await client.put(f"{API}/tags/{tag['id']}", json={"slug": "py"})
    assert response.json()["slug"] == "py"


@pytest.mark.asyncio
async def test_request_body_validation(client):
    response = await client.post(f"{API}/categories", json={"slug": "tech"})
    assert response.status_code == 422
