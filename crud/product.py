# crud/product.py

from typing import List, Optional
from sqlalchemy.orm import Session
import models
import schemas

# --- Collection reads ---
def get_products(db: Session) -> List[models.Product]:
    """
    Get every product, oldest first. The collection endpoint does not paginate.
    """
    return db.query(models.Product).order_by(models.Product.created_at.asc(), models.Product.id.asc()).all()

def get_product(db: Session, product_id: str) -> Optional[models.Product]:
    return db.query(models.Product).filter(models.Product.id == product_id).first()

# --- Mutations ---
def create_product(db: Session, product: schemas.ProductCreate) -> models.Product:
    db_product = models.Product(**product.model_dump())
    db.add(db_product)
    db.commit()
    db.refresh(db_product)
    return db_product

def update_product(db: Session, product: schemas.ProductUpdate) -> Optional[models.Product]:
    db_product = get_product(db, product.id)
    if not db_product:
        return None
    db_product.name = product.name
    db_product.price = product.price
    db_product.quantity = product.quantity
    db.commit()
    db.refresh(db_product)
    return db_product

def delete_product(db: Session, product_id: str) -> bool:
    db_product = get_product(db, product_id)
    if not db_product:
        return False
    db.delete(db_product)
    db.commit()
    return True
