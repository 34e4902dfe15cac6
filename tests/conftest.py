import json
import sys
from http import HTTPStatus
from pathlib import Path

import pytest
import requests

# make the project root importable
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from products_api import ProductsApiClient

API_URL = "http://testserver/api/products"


def make_response(status_code, body=None, url=API_URL):
    resp = requests.Response()
    resp.status_code = status_code
    resp.reason = HTTPStatus(status_code).phrase
    resp.url = url
    if body is None:
        resp._content = b""
    elif isinstance(body, (bytes, str)):
        resp._content = body.encode() if isinstance(body, str) else body
        resp.headers["Content-Type"] = "text/plain"
    else:
        resp._content = json.dumps(body).encode()
        resp.headers["Content-Type"] = "application/json"
    return resp


class FakeProductsEndpoint:
    """In-memory collection endpoint behind the `requests.Session.request` interface."""

    def __init__(self, products=None):
        self.products = [dict(p) for p in products or []]
        self.calls = []
        # method -> (status, body) or an exception instance; persists until cleared
        self.failures = {}
        self._next_id = 100
        self.closed = False

    def count(self, method):
        return sum(1 for m, _ in self.calls if m == method)

    def bodies(self, method):
        return [body for m, body in self.calls if m == method]

    def close(self):
        self.closed = True

    def _find(self, product_id):
        return next((p for p in self.products if p["_id"] == product_id), None)

    def request(self, method, url, headers=None, json=None, timeout=None):
        self.calls.append((method, json))
        failure = self.failures.get(method)
        if isinstance(failure, Exception):
            raise failure
        if failure:
            return make_response(*failure)

        if method == "GET":
            return make_response(200, {"products": [dict(p) for p in self.products]})
        if method == "POST":
            if not json or not json.get("name"):
                return make_response(400, {"message": "name required"})
            self._next_id += 1
            created = {"_id": str(self._next_id), **json}
            self.products.append(created)
            return make_response(201, created)
        if method == "PUT":
            product = self._find((json or {}).get("id"))
            if product is None:
                return make_response(404, {"message": "Product not found"})
            product.update({k: v for k, v in json.items() if k != "id"})
            return make_response(200, product)
        if method == "DELETE":
            product = self._find((json or {}).get("id"))
            if product is None:
                return make_response(404, {"message": "Product not found"})
            self.products.remove(product)
            return make_response(200)
        return make_response(405, {"message": "Method not allowed"})


SAMPLE_PRODUCTS = [
    {"_id": "1", "name": "Desk Lamp", "price": 24.5, "quantity": 3},
    {"_id": "2", "name": "Notebook", "price": 3, "quantity": 40},
]


@pytest.fixture
def endpoint():
    return FakeProductsEndpoint(SAMPLE_PRODUCTS)

@pytest.fixture
def empty_endpoint():
    return FakeProductsEndpoint()

@pytest.fixture
def api(endpoint):
    return ProductsApiClient(API_URL, timeout=5, session=endpoint)
