import os
from typing import Any, Callable, Iterator

# Point the app at a private in-memory database before anything imports it.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_ITEMS"] = "false"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from app import database
from app.main import app


@pytest.fixture(autouse=True)
def _clean_db() -> Iterator[None]:
    database.drop_db_and_tables()
    database.create_db_and_tables()
    yield


@pytest.fixture()
def session() -> Iterator[Session]:
    with Session(database.engine) as s:
        yield s


@pytest.fixture()
def client() -> Iterator[TestClient]:
    with TestClient(app) as c:
        yield c


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def signup(client: TestClient) -> Callable[..., dict[str, Any]]:
    def _signup(email: str = "ada@example.com", name: str = "Ada", password: str = "secret") -> dict[str, Any]:
        resp = client.post(
            "/api/auth/signup",
            json={"name": name, "email": email, "password": password},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _signup


@pytest.fixture()
def headers(signup: Callable[..., dict[str, Any]]) -> dict[str, str]:
    return auth_headers(signup()["token"])


@pytest.fixture()
def make_item(client: TestClient, headers: dict[str, str]) -> Callable[..., dict[str, Any]]:
    def _make_item(**fields: Any) -> dict[str, Any]:
        body = {"name": "Widget", "price": 10.0}
        body.update(fields)
        resp = client.post("/api/items", json=body, headers=headers)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make_item


@pytest.fixture()
def seeded_prices(make_item: Callable[..., dict[str, Any]]) -> list[dict[str, Any]]:
    """Six items priced like the default catalog, inserted in this order."""
    specs = [
        ("Wireless Headphones", 99.99, "electronics"),
        ("Smartwatch Series 5", 149.00, "electronics"),
        ("Modern Desk Lamp", 39.50, "home"),
        ("Cotton T-Shirt", 19.99, "clothing"),
        ("Cooking Essentials Cookbook", 24.99, "books"),
        ("Ergonomic Mouse", 29.99, "electronics"),
    ]
    return [make_item(name=name, price=price, category=category) for name, price, category in specs]
