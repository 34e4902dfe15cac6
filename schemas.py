# schemas.py
from __future__ import annotations

from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict

# =========================
# Base model configurations
# =========================

class ORMBase(BaseModel):
    """Base for models mapped to SQLAlchemy objects."""
    model_config = ConfigDict(from_attributes=True)

class APIBase(BaseModel):
    """Base for models mapped to external API payloads."""
    model_config = ConfigDict(populate_by_name=True, extra="allow", coerce_numbers_to_str=True)

# ======================================================
# Products collection endpoint (as consumed by the page)
# ======================================================

class Product(APIBase):
    # Document stores hand out "_id", others plain "id".
    id: str = Field(alias="_id")
    name: str
    price: float
    quantity: int

class ProductListResponse(APIBase):
    products: List[Product]

class ApiMessage(APIBase):
    message: Optional[str] = None

# --- Request bodies sent by the page ---

class ProductPayload(BaseModel):
    name: str
    price: float
    quantity: int

class ProductUpdatePayload(ProductPayload):
    id: str

class ProductDeletePayload(BaseModel):
    id: str

# ======================================================
# Development products API (server-side validation)
# ======================================================

class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=0)

class ProductUpdate(ProductCreate):
    id: str = Field(..., min_length=1)

class ProductDelete(BaseModel):
    id: str = Field(..., min_length=1)

class StoredProduct(ORMBase):
    id: str
    name: str
    price: float
    quantity: int

class StoredProductList(BaseModel):
    products: List[StoredProduct]
