from __future__ import annotations

from ..extensions import db
from .base import ResourceMixin


class Product(ResourceMixin, db.Model):
    """Sellable catalog item referenced by sale lines."""
    __tablename__ = "products"

    name = db.Column(db.String(255), nullable=False)
    sku = db.Column(db.String(64), nullable=True, unique=True)
    description = db.Column(db.Text, nullable=True)
    price = db.Column(db.Numeric(12, 2, asdecimal=False), nullable=False, default=0)
