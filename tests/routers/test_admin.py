from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from app import dependencies as deps
from app.errors import DuplicateSlugError
from app.routers import admin
from app.security import API_KEY_NAME, get_api_key
from app.settings import Settings
from tests.conftest import FakePostsService


def make_app(fake_service: FakePostsService, monkeypatch, key="secret"):
    monkeypatch.setattr("app.security.settings", Settings(BLOG_API_KEY=key))
    app = FastAPI()
    app.dependency_overrides[deps.get_posts_service] = lambda: fake_service
    app.include_router(admin.router, dependencies=[Depends(get_api_key)])
    return app


def test_reload_requires_api_key(monkeypatch):
    client = TestClient(make_app(FakePostsService(reload_return=3), monkeypatch))

    assert client.post("/admin/reload").status_code == 403
    assert (
        client.post("/admin/reload", headers={API_KEY_NAME: "wrong"}).status_code
        == 403
    )


def test_reload_returns_post_count(monkeypatch):
    client = TestClient(make_app(FakePostsService(reload_return=3), monkeypatch))

    res = client.post("/admin/reload", headers={API_KEY_NAME: "secret"})

    assert res.status_code == 200
    assert res.json() == {"posts": 3}


def test_reload_conflict_on_content_error(monkeypatch):
    error = DuplicateSlugError("hello", "a/hello.md", "b/hello.md")
    client = TestClient(make_app(FakePostsService(reload_error=error), monkeypatch))

    res = client.post("/admin/reload", headers={API_KEY_NAME: "secret"})

    assert res.status_code == 409
    assert "Duplicate slug 'hello'" in res.json()["detail"]


def test_reload_500_on_unexpected_error(monkeypatch):
    service = FakePostsService(reload_error=RuntimeError("boom"))
    client = TestClient(make_app(service, monkeypatch))

    res = client.post("/admin/reload", headers={API_KEY_NAME: "secret"})

    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to reload posts"
