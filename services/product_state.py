# services/product_state.py
"""
Immutable state of the product management page.

Every change goes through one of the transition functions below, which
take a `PageState` and return a new one. `select_view` applies the render
priority: loading, then error, then empty, then content.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple, Union

import schemas

FORM_FIELDS = ("name", "price", "quantity")
REQUIRED_FIELDS_MESSAGE = "All fields are required."
NUMERIC_FIELDS_MESSAGE = "Price and quantity must be numbers."


# --- Form mode ---

@dataclass(frozen=True)
class CreateMode:
    pass

@dataclass(frozen=True)
class EditMode:
    product_id: str

FormMode = Union[CreateMode, EditMode]


def _as_text(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class FormState:
    name: str = ""
    price: str = ""
    quantity: str = ""
    mode: FormMode = field(default_factory=CreateMode)

    @property
    def editing_id(self) -> Optional[str]:
        return self.mode.product_id if isinstance(self.mode, EditMode) else None

    def is_complete(self) -> bool:
        return all(getattr(self, name).strip() for name in FORM_FIELDS)

    def with_field(self, name: str, value: str) -> FormState:
        if name not in FORM_FIELDS:
            raise ValueError(f"Unknown form field: {name!r}")
        return replace(self, **{name: value})

    def to_payload(self) -> schemas.ProductPayload:
        """Raises pydantic.ValidationError when price or quantity is not a number."""
        return schemas.ProductPayload(name=self.name, price=self.price.strip(), quantity=self.quantity.strip())

    @classmethod
    def editing(cls, product: schemas.Product) -> FormState:
        return cls(
            name=product.name,
            price=_as_text(product.price),
            quantity=_as_text(product.quantity),
            mode=EditMode(product.id),
        )


# --- Page state ---

class NoticeLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"

@dataclass(frozen=True)
class Notice:
    text: str
    level: NoticeLevel = NoticeLevel.ERROR

class ViewKind(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    CONTENT = "content"

@dataclass(frozen=True)
class PageState:
    products: Tuple[schemas.Product, ...] = ()
    loading: bool = True
    error: Optional[str] = None
    form: FormState = field(default_factory=FormState)
    notice: Optional[Notice] = None

    def find_product(self, product_id: str) -> Optional[schemas.Product]:
        return next((p for p in self.products if p.id == product_id), None)


def select_view(state: PageState) -> ViewKind:
    if state.loading:
        return ViewKind.LOADING
    if state.error:
        return ViewKind.ERROR
    if not state.products:
        return ViewKind.EMPTY
    return ViewKind.CONTENT


# --- Transitions ---

def load_started(state: PageState) -> PageState:
    return replace(state, loading=True)

def load_succeeded(state: PageState, products) -> PageState:
    return replace(state, products=tuple(products), loading=False, error=None)

def load_failed(state: PageState, error: str) -> PageState:
    # The previous list is kept.
    return replace(state, loading=False, error=error)

def field_changed(state: PageState, name: str, value: str) -> PageState:
    return replace(state, form=state.form.with_field(name, value))

def edit_started(state: PageState, product: schemas.Product) -> PageState:
    return replace(state, form=FormState.editing(product), notice=None)

def edit_cancelled(state: PageState) -> PageState:
    return replace(state, form=FormState())

def validation_failed(state: PageState, message: str = REQUIRED_FIELDS_MESSAGE) -> PageState:
    return replace(state, notice=Notice(message, NoticeLevel.ERROR))

def submit_succeeded(state: PageState, message: Optional[str] = None) -> PageState:
    notice = Notice(message, NoticeLevel.SUCCESS) if message else None
    return replace(state, form=FormState(), notice=notice)

def delete_succeeded(state: PageState, message: Optional[str] = None) -> PageState:
    notice = Notice(message, NoticeLevel.SUCCESS) if message else None
    return replace(state, notice=notice)

def write_failed(state: PageState, message: str) -> PageState:
    # Input stays as typed so the user can retry.
    return replace(state, notice=Notice(message, NoticeLevel.ERROR))

def notice_dismissed(state: PageState) -> PageState:
    return replace(state, notice=None)
