from __future__ import annotations

from decimal import Decimal

from ..extensions import db
from bakery.time_utils import to_utc_z, utcnow


def format_money(value: Decimal | None) -> str | None:
    if value is None:
        return None
    return f"{Decimal(value):.2f}"


class Product(db.Model):
    """
    Bakery catalog entry.

    Products are never physically deleted: order lines keep pointing at them,
    so "delete" clears is_active instead. Stock can never go negative; the
    check constraint backs the conditional decrement done at order time.
    """
    __tablename__ = "products"
    __table_args__ = (
        db.CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
        db.Index("ix_products_active_name", "is_active", "name"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)

    price = db.Column(db.Numeric(10, 2), nullable=False)
    stock = db.Column(db.Integer, nullable=False, default=0)
    image_url = db.Column(db.String(512), nullable=True)

    rating = db.Column(db.Numeric(2, 1), nullable=False, default=Decimal("0.0"))
    review_count = db.Column(db.Integer, nullable=False, default=0)

    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r} stock={self.stock}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": format_money(self.price),
            "stock": self.stock,
            "imageUrl": self.image_url,
            "rating": f"{Decimal(self.rating or 0):.1f}",
            "reviewCount": self.review_count,
            "isActive": self.is_active,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }
