"""
End-to-end tests for the demo host API.
"""

import pytest
from fastapi.testclient import TestClient

from unitofwork.core.settings import Settings
from host.main import create_app


@pytest.fixture
def client():
    settings = Settings(
        _env_file=None,
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        DEFAULT_PAGE_SIZE=5,
        MAX_PAGE_SIZE=10,
    )
    with TestClient(create_app(settings)) as client:
        yield client


def create_blogs(client, n):
    ids = []
    for i in range(n):
        res = client.post(
            "/api/blogs/create",
            json={"url": f"https://blogs.example.com/{i}", "title": f"blog-{i:02d}"},
        )
        assert res.status_code == 201, res.text
        ids.append(res.json()["id"])
    return ids


def test_ready(client):
    res = client.get("/api/ready")
    assert res.status_code == 200
    assert res.json()["message"] == "ready"
    assert res.json()["database"] == "ok"


def test_create_and_get_blog_with_posts(client):
    res = client.post(
        "/api/blogs/create",
        json={
            "url": "https://blogs.example.com/uow",
            "title": "Unit of work",
            "posts": [{"title": "Paging", "content": "offset/limit"}, {"title": "Repositories"}],
        },
    )
    assert res.status_code == 201, res.text
    created = res.json()
    assert created["id"] > 0
    assert [p["title"] for p in created["posts"]] == ["Paging", "Repositories"]

    res = client.get(f"/api/blogs/by-id/{created['id']}")
    assert res.status_code == 200
    assert res.json()["title"] == "Unit of work"
    assert len(res.json()["posts"]) == 2


def test_missing_blog_is_404(client):
    assert client.get("/api/blogs/by-id/999").status_code == 404


def test_list_uses_default_page_size(client):
    create_blogs(client, 12)

    body = client.get("/api/blogs").json()

    assert body["page_index"] == 1
    assert body["page_size"] == 5
    assert body["index_from"] == 1
    assert body["total_count"] == 12
    assert body["total_pages"] == 3
    assert body["has_previous_page"] is False
    assert body["has_next_page"] is True
    # más recientes primero
    assert [b["title"] for b in body["items"]] == [f"blog-{i:02d}" for i in range(11, 6, -1)]


def test_list_last_and_past_the_end_pages(client):
    create_blogs(client, 12)

    last = client.get("/api/blogs", params={"page_index": 3}).json()
    assert [b["title"] for b in last["items"]] == ["blog-01", "blog-00"]
    assert last["has_next_page"] is False

    beyond = client.get("/api/blogs", params={"page_index": 4}).json()
    assert beyond["items"] == []
    assert beyond["total_count"] == 12
    assert beyond["has_previous_page"] is True


def test_page_size_is_capped(client):
    create_blogs(client, 12)

    body = client.get("/api/blogs", params={"page_size": 50}).json()

    assert body["page_size"] == 10
    assert len(body["items"]) == 10


def test_page_index_below_origin_is_rejected(client):
    assert client.get("/api/blogs", params={"page_index": 0}).status_code == 422


def test_search_through_custom_repository(client):
    create_blogs(client, 12)

    body = client.get("/api/blogs/search", params={"title": "blog-1", "page_size": 2}).json()

    assert body["total_count"] == 2
    assert [b["title"] for b in body["items"]] == ["blog-10", "blog-11"]
    assert body["has_next_page"] is False


def test_delete_blog(client):
    (blog_id,) = create_blogs(client, 1)

    assert client.delete(f"/api/blogs/by-id/{blog_id}").status_code == 204
    assert client.get(f"/api/blogs/by-id/{blog_id}").status_code == 404
    assert client.delete(f"/api/blogs/by-id/{blog_id}").status_code == 404
