# services/product_sync.py
import logging
from typing import Optional

import requests
from pydantic import ValidationError

import schemas
from products_api import ProductsApiClient, ProductsApiError
from services import product_state as ps

logger = logging.getLogger("product_sync")
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
logger.setLevel(logging.INFO)

CREATED_MESSAGE = "Product created successfully!"
UPDATED_MESSAGE = "Product updated successfully!"
DELETED_MESSAGE = "Product deleted."


def _failure_text(action: str, exc: Exception) -> str:
    if isinstance(exc, ProductsApiError):
        return f"Failed to {action} product: {exc.detail or exc}"
    return f"Error: {exc}"


class ProductPage:
    """
    Synchronizes one page's state with the products collection endpoint.

    Each operation issues at most one write, and every successful write is
    followed by a full re-read of the collection. Create-only pages
    (`with_list=False`) never read the collection.
    """
    def __init__(self, api: ProductsApiClient, with_list: bool = True, state: Optional[ps.PageState] = None):
        self.api = api
        self.with_list = with_list
        self.state = state or ps.PageState(loading=with_list)
        self.held = False

    @property
    def view(self) -> ps.ViewKind:
        return ps.select_view(self.state)

    # -------------------- collection --------------------
    def load_products(self) -> bool:
        self.state = ps.load_started(self.state)
        try:
            products = self.api.list_products()
        except (ProductsApiError, requests.exceptions.RequestException) as e:
            logger.error("Loading products failed: %s", e)
            self.state = ps.load_failed(self.state, str(e))
            return False
        self.state = ps.load_succeeded(self.state, products)
        return True

    def mount(self) -> bool:
        """Load the list for a fresh visit, unless `hold` asked to show the state as it is."""
        if not self.with_list:
            return False
        if self.held:
            self.held = False
            return False
        return self.load_products()

    def hold(self) -> None:
        """Skip the next mount, so the page shown after an action keeps that action's outcome."""
        self.held = True

    def reload(self) -> bool:
        return self.load_products()

    # -------------------- form --------------------
    def on_change(self, name: str, value: str) -> None:
        self.state = ps.field_changed(self.state, name, value)

    def on_submit(self) -> bool:
        form = self.state.form
        if not form.is_complete():
            self.state = ps.validation_failed(self.state)
            return False
        return self.submit(form)

    def submit(self, form: ps.FormState) -> bool:
        try:
            payload = form.to_payload()
        except ValidationError:
            self.state = ps.validation_failed(self.state, ps.NUMERIC_FIELDS_MESSAGE)
            return False

        if isinstance(form.mode, ps.EditMode):
            action, success_message = "update", UPDATED_MESSAGE
        else:
            action, success_message = "create", CREATED_MESSAGE
        try:
            if isinstance(form.mode, ps.EditMode):
                self.api.update_product(form.mode.product_id, payload)
            else:
                self.api.create_product(payload)
        except (ProductsApiError, requests.exceptions.RequestException) as e:
            logger.warning("Failed to %s product %s: %s", action, form.editing_id or "(new)", e)
            self.state = ps.write_failed(self.state, _failure_text(action, e))
            return False

        logger.info("Product %sd: %s", action, form.editing_id or payload.name)
        self.state = ps.submit_succeeded(self.state, success_message)
        if self.with_list:
            self.load_products()
        return True

    def begin_edit(self, product: schemas.Product) -> None:
        self.state = ps.edit_started(self.state, product)

    def begin_edit_by_id(self, product_id: str) -> bool:
        product = self.state.find_product(product_id)
        if product is None:
            return False
        self.begin_edit(product)
        return True

    def cancel_edit(self) -> None:
        self.state = ps.edit_cancelled(self.state)

    # -------------------- delete --------------------
    def remove(self, product_id: str) -> bool:
        try:
            self.api.delete_product(product_id)
        except ProductsApiError as e:
            # The server answered; the collection may still have changed.
            logger.warning("Failed to delete product %s: %s", product_id, e)
            self.state = ps.write_failed(self.state, _failure_text("delete", e))
            if self.with_list:
                self.load_products()
            return False
        except requests.exceptions.RequestException as e:
            logger.warning("Failed to delete product %s: %s", product_id, e)
            self.state = ps.write_failed(self.state, _failure_text("delete", e))
            return False

        logger.info("Product deleted: %s", product_id)
        self.state = ps.delete_succeeded(self.state, DELETED_MESSAGE)
        if self.with_list:
            self.load_products()
        return True

    def dismiss_notice(self) -> None:
        self.state = ps.notice_dismissed(self.state)
