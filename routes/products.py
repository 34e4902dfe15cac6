# routes/products.py

import logging
from typing import Any, Dict, Type

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

import schemas
from database import get_db
from crud import product as crud_product

logger = logging.getLogger("products_mock_api")
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
logger.setLevel(logging.INFO)

router = APIRouter(
    prefix="/api/products",
    tags=["Products"],
)

def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})

def _validation_message(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        field = ".".join(str(p) for p in err.get("loc", ())) or "body"
        parts.append(f"{field}: {err.get('msg')}")
    return "; ".join(parts)

def _parse(model: Type[BaseModel], payload: Any):
    """Returns the parsed body, or a 400 `{message}` response."""
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        return _message(400, _validation_message(e))

def _dump(db_product) -> Dict[str, Any]:
    return schemas.StoredProduct.model_validate(db_product).model_dump()

@router.get("", response_model=schemas.StoredProductList)
def get_products(db: Session = Depends(get_db)):
    """
    Get the whole products collection.
    """
    return {"products": crud_product.get_products(db)}

@router.post("", status_code=201)
def create_product(payload: Any = Body(None), db: Session = Depends(get_db)):
    parsed = _parse(schemas.ProductCreate, payload)
    if isinstance(parsed, JSONResponse):
        return parsed
    db_product = crud_product.create_product(db, parsed)
    logger.info("Created product id=%s name=%s", db_product.id, db_product.name)
    return _dump(db_product)

@router.put("")
def update_product(payload: Any = Body(None), db: Session = Depends(get_db)):
    parsed = _parse(schemas.ProductUpdate, payload)
    if isinstance(parsed, JSONResponse):
        return parsed
    db_product = crud_product.update_product(db, parsed)
    if not db_product:
        return _message(404, "Product not found")
    logger.info("Updated product id=%s", db_product.id)
    return _dump(db_product)

@router.delete("")
def delete_product(payload: Any = Body(None), db: Session = Depends(get_db)):
    parsed = _parse(schemas.ProductDelete, payload)
    if isinstance(parsed, JSONResponse):
        return parsed
    if not crud_product.delete_product(db, parsed.id):
        return _message(404, "Product not found")
    logger.info("Deleted product id=%s", parsed.id)
    return {"message": "Product deleted"}
