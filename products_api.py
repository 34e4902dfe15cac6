# products_api.py
import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

import schemas

logger = logging.getLogger("products_api")
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
logger.setLevel(logging.INFO)


class ProductsApiError(Exception):
    """The collection endpoint answered, but not with a usable success response."""

    def __init__(self, status_code: int, detail: Optional[str] = None):
        self.status_code = status_code
        self.detail = detail
        message = f"HTTP error! status: {status_code}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


def _error_detail(resp: requests.Response) -> Optional[str]:
    """Pull the server's `message` out of a failure body, falling back to the reason phrase."""
    try:
        body = resp.json()
    except ValueError:
        return resp.reason or None
    if isinstance(body, dict):
        try:
            message = schemas.ApiMessage.model_validate(body).message
        except ValidationError:
            message = None
        if message:
            return message
    return resp.reason or None


class ProductsApiClient:
    """
    Client for the `/api/products` collection endpoint.

    One attempt per call: transport failures surface as
    `requests.exceptions.RequestException`, non-2xx answers as `ProductsApiError`.
    """
    def __init__(self, endpoint: str, timeout: float = 10.0, session: Optional[requests.Session] = None):
        if not endpoint:
            raise ValueError("Products API endpoint is required.")
        self.endpoint = endpoint
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json"}
        self.session = session or requests.Session()

    def _send(self, method: str, body: Optional[Dict[str, Any]] = None) -> requests.Response:
        logger.debug("%s %s body=%s", method, self.endpoint, body)
        resp = self.session.request(method, self.endpoint, headers=self.headers, json=body, timeout=self.timeout)
        logger.debug("%s %s -> %s", method, self.endpoint, resp.status_code)
        if not resp.ok:
            raise ProductsApiError(resp.status_code, _error_detail(resp))
        return resp

    def _send_write(self, method: str, body: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        resp = self._send(method, body)
        # Write answers are informative only; the page re-reads the collection.
        try:
            data = resp.json() if resp.content else None
        except ValueError:
            return None
        return data if isinstance(data, dict) else None

    def list_products(self) -> List[schemas.Product]:
        resp = self._send("GET")
        try:
            data = resp.json()
        except ValueError as e:
            raise ProductsApiError(resp.status_code, "response body is not JSON") from e
        if not isinstance(data, dict):
            raise ProductsApiError(resp.status_code, "response body has no products")
        try:
            return schemas.ProductListResponse.model_validate(data).products
        except ValidationError as e:
            raise ProductsApiError(resp.status_code, f"malformed products: {e.error_count()} error(s)") from e

    def create_product(self, payload: schemas.ProductPayload) -> Optional[Dict[str, Any]]:
        return self._send_write("POST", payload.model_dump())

    def update_product(self, product_id: str, payload: schemas.ProductPayload) -> Optional[Dict[str, Any]]:
        body = schemas.ProductUpdatePayload(id=product_id, **payload.model_dump())
        return self._send_write("PUT", body.model_dump())

    def delete_product(self, product_id: str) -> None:
        self._send("DELETE", schemas.ProductDeletePayload(id=product_id).model_dump())

    def close(self) -> None:
        self.session.close()
