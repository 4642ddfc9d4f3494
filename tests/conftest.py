import mongomock
import pytest
from fastapi.testclient import TestClient

import auth
from main import app, get_notifier, get_store
from notifications import FakeEmailAdapter, OrderNotifier
from schemas import Product
from store import Store


@pytest.fixture()
def store():
    """A fresh in-memory database per test."""
    return Store(mongomock.MongoClient()["storefront_test"])


@pytest.fixture()
def email():
    return FakeEmailAdapter()


@pytest.fixture()
def client(store, email):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_notifier] = lambda: OrderNotifier(email)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def make_product(store):
    def _make(**overrides) -> Product:
        data = {
            "name": "Classic Cotton T-Shirt",
            "description": "100% cotton crew neck t-shirt.",
            "price": 19.99,
            "image_url": "https://example.com/tshirt.jpg",
            "category": "Men",
            "sizes": ["S", "M", "L", "XL"],
            "stock": 50,
            "rating": 4.5,
            "reviews": 120,
        }
        data.update(overrides)
        return store.products.get(store.products.add(Product(**data)))

    return _make


@pytest.fixture()
def make_user(store):
    def _make(name="Alice", email="alice@example.com", password="secret123"):
        return auth.signup(store, name, email, password)

    return _make


@pytest.fixture()
def headers_for():
    def _headers(user):
        return {"Authorization": f"Bearer {auth.create_token(user)}"}

    return _headers
