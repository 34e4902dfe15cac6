# models.py

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Integer, NUMERIC
from database import Base


def _new_product_id() -> str:
    return uuid.uuid4().hex

def _now_utc() -> datetime:
    return datetime.now(timezone.utc)

class Product(Base):
    __tablename__ = "products"
    id = Column(String(32), primary_key=True, default=_new_product_id)
    name = Column(String(255), nullable=False)
    price = Column(NUMERIC(12, 2, asdecimal=False), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=_now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=_now_utc)
