from __future__ import annotations

from ..extensions import db
from bakery.time_utils import to_utc_z, utcnow
from .catalog import format_money

# Lifecycle order matters: the order engine walks this tuple forward
ORDER_STATUSES = ("pending", "confirmed", "preparing", "ready", "delivered", "cancelled")
PAYMENT_METHODS = ("pix", "cash")


class Order(db.Model):
    """
    Delivery order placed by a student.

    Totals are fixed when the order is placed: subtotal is the sum of the
    line subtotals and total equals subtotal (no delivery fee).
    """
    __tablename__ = "orders"
    __table_args__ = (
        db.CheckConstraint(
            "status IN ('pending', 'confirmed', 'preparing', 'ready', 'delivered', 'cancelled')",
            name="ck_orders_status",
        ),
        db.CheckConstraint("payment_method IN ('pix', 'cash')", name="ck_orders_payment_method"),
        db.Index("ix_orders_user_created", "user_id", "created_at"),
        db.Index("ix_orders_status_created", "status", "created_at"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    delivery_location = db.Column(db.String(255), nullable=False)
    delivery_time = db.Column(db.String(64), nullable=False)
    payment_method = db.Column(db.String(16), nullable=False)
    notes = db.Column(db.Text, nullable=True)

    subtotal = db.Column(db.Numeric(10, 2), nullable=False)
    total = db.Column(db.Numeric(10, 2), nullable=False)

    status = db.Column(db.String(16), nullable=False, default="pending", index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = db.relationship("User", backref=db.backref("orders", lazy=True))
    order_items = db.relationship(
        "OrderItem",
        back_populates="order",
        lazy=True,
        order_by="OrderItem.id",
    )

    def __repr__(self) -> str:
        return f"<Order id={self.id} user_id={self.user_id} status={self.status} total={self.total}>"

    def to_dict(self, *, include_details: bool = False) -> dict:
        data = {
            "id": self.id,
            "userId": self.user_id,
            "deliveryLocation": self.delivery_location,
            "deliveryTime": self.delivery_time,
            "paymentMethod": self.payment_method,
            "notes": self.notes,
            "subtotal": format_money(self.subtotal),
            "total": format_money(self.total),
            "status": self.status,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }
        if include_details:
            data["user"] = self.user.to_dict() if self.user else None
            data["orderItems"] = [item.to_dict(include_product=True) for item in self.order_items]
        return data


class OrderItem(db.Model):
    """
    One line of an order.

    unit_price is a snapshot of Product.price when the order was placed and
    is never rewritten; subtotal == unit_price * quantity.
    """
    __tablename__ = "order_items"
    __table_args__ = (
        db.CheckConstraint("quantity >= 1", name="ck_order_items_quantity_positive"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("orders.id"), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False, index=True)

    quantity = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(db.Numeric(10, 2), nullable=False)
    subtotal = db.Column(db.Numeric(10, 2), nullable=False)

    order = db.relationship("Order", back_populates="order_items")
    product = db.relationship("Product")

    def to_dict(self, *, include_product: bool = False) -> dict:
        data = {
            "id": self.id,
            "orderId": self.order_id,
            "productId": self.product_id,
            "quantity": self.quantity,
            "unitPrice": format_money(self.unit_price),
            "subtotal": format_money(self.subtotal),
        }
        if include_product:
            data["product"] = self.product.to_dict() if self.product else None
        return data
