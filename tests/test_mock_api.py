import pytest
import requests
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from database import Base, get_db
from main import app
from products_api import ProductsApiClient
from routes import product_page
from services.page_sessions import PageSessionStore
from services.product_sync import ProductPage
from conftest import API_URL


@pytest.fixture
def api_client():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _get_test_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield TestClient(app)
    app.dependency_overrides.clear()
    engine.dispose()


class AppBackedSession:
    """Sends the page's `requests` calls to the development API in-process."""

    def __init__(self, client):
        self.client = client

    def request(self, method, url, headers=None, json=None, timeout=None):
        r = self.client.request(method, "/api/products", headers=headers, json=json)
        resp = requests.Response()
        resp.status_code = r.status_code
        resp.reason = r.reason_phrase
        resp.url = url
        resp._content = r.content
        resp.headers.update(r.headers)
        return resp

    def close(self):
        self.client.close()


def _create(client, **fields):
    body = {"name": "Pen", "price": 1.5, "quantity": 12}
    body.update(fields)
    return client.post("/api/products", json=body)


def test_list_starts_empty(api_client):
    r = api_client.get("/api/products")
    assert r.status_code == 200
    assert r.json() == {"products": []}

def test_create_returns_created_product(api_client):
    r = _create(api_client)
    assert r.status_code == 201
    body = r.json()
    assert body["id"]
    assert (body["name"], body["price"], body["quantity"]) == ("Pen", 1.5, 12)
    assert api_client.get("/api/products").json()["products"] == [body]

@pytest.mark.parametrize("fields,field_name", [
    ({"name": ""}, "name"),
    ({"price": -1}, "price"),
    ({"quantity": -3}, "quantity"),
    ({"quantity": "many"}, "quantity"),
])
def test_create_validation_answers_400_message(api_client, fields, field_name):
    r = _create(api_client, **fields)
    assert r.status_code == 400
    assert field_name in r.json()["message"]

def test_create_without_body_is_rejected(api_client):
    r = api_client.post("/api/products")
    assert r.status_code == 400
    assert "message" in r.json()

def test_update_changes_fields(api_client):
    product_id = _create(api_client).json()["id"]
    r = api_client.put("/api/products", json={"id": product_id, "name": "Fountain Pen", "price": 12, "quantity": 2})
    assert r.status_code == 200
    assert r.json()["name"] == "Fountain Pen"
    [stored] = api_client.get("/api/products").json()["products"]
    assert (stored["name"], stored["price"], stored["quantity"]) == ("Fountain Pen", 12, 2)

def test_update_unknown_product_is_404(api_client):
    r = api_client.put("/api/products", json={"id": "nope", "name": "X", "price": 1, "quantity": 1})
    assert r.status_code == 404
    assert r.json() == {"message": "Product not found"}

def test_delete_removes_product(api_client):
    product_id = _create(api_client).json()["id"]
    r = api_client.request("DELETE", "/api/products", json={"id": product_id})
    assert r.status_code == 200
    assert api_client.get("/api/products").json()["products"] == []

def test_delete_unknown_product_is_404(api_client):
    r = api_client.request("DELETE", "/api/products", json={"id": "nope"})
    assert r.status_code == 404


# --- page against the development API ---

def test_page_round_trip_through_development_api(api_client):
    page = ProductPage(ProductsApiClient(API_URL, session=AppBackedSession(TestClient(app))))
    page.mount()
    for field, value in (("name", "Desk Lamp"), ("price", "24.5"), ("quantity", "3")):
        page.on_change(field, value)
    assert page.on_submit() is True
    [product] = page.state.products
    assert (product.name, product.price, product.quantity) == ("Desk Lamp", 24.5, 3)

    page.begin_edit(product)
    page.on_change("quantity", "5")
    assert page.on_submit() is True
    assert page.state.products[0].quantity == 5

    assert page.remove(product.id) is True
    assert page.state.products == ()

def test_server_side_rejection_reaches_the_page(api_client):
    page = ProductPage(ProductsApiClient(API_URL, session=AppBackedSession(TestClient(app))))
    page.mount()
    for field, value in (("name", "Desk Lamp"), ("price", "-2"), ("quantity", "3")):
        page.on_change(field, value)
    assert page.on_submit() is False
    assert page.state.notice.text.startswith("Failed to create product: price")

def test_html_page_against_development_api(api_client):
    store = PageSessionStore()
    app.dependency_overrides[product_page.get_api_factory] = lambda: (lambda: ProductsApiClient(API_URL, session=AppBackedSession(TestClient(app))))
    app.dependency_overrides[product_page.get_page_store] = lambda: store
    assert "No products available" in api_client.get("/products").text
    r = api_client.post("/products/new", data={"name": "Desk Lamp", "price": "24.5", "quantity": "3"})
    assert "Product created successfully!" in r.text
    r = api_client.post("/products/reload")
    assert "Desk Lamp" in r.text
