# Overview: Service-layer operations for orders; encapsulates business logic and database work.

"""
Order Engine

Places delivery orders against current stock and moves them through their
lifecycle.

STATE MACHINE:
    pending -> confirmed -> preparing -> ready -> delivered
    any of the first four -> cancelled

    delivered and cancelled are terminal.

ATOMICITY:
    The order header, its lines and every stock decrement are written in one
    transaction. Each decrement is conditional (stock >= quantity); if any
    row is not updated the whole order is rolled back and InsufficientStock
    is raised. The stock read during validation is only used to give an
    early, friendly error.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from sqlalchemy import update
from sqlalchemy.orm import selectinload

from ..extensions import db
from ..errors import (
    InsufficientStock,
    InvalidStatus,
    InvalidTransition,
    OrderNotFound,
    ProductNotFound,
    ValidationError,
)
from ..models import Order, OrderItem, Product, ORDER_STATUSES, PAYMENT_METHODS
from ..permissions import (
    CANCEL_OWN_ORDER,
    SET_ORDER_STATUS,
    VIEW_ALL_ORDERS,
    VIEW_OWN_ORDERS,
    Identity,
    authorize,
    has_action,
)
from ..validation import OrderItemRequest
from bakery.time_utils import utcnow

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

TERMINAL_STATUSES = frozenset({"delivered", "cancelled"})

ALLOWED_TRANSITIONS = {
    "pending": frozenset({"confirmed", "cancelled"}),
    "confirmed": frozenset({"preparing", "cancelled"}),
    "preparing": frozenset({"ready", "cancelled"}),
    "ready": frozenset({"delivered", "cancelled"}),
    "delivered": frozenset(),
    "cancelled": frozenset(),
}


def validate_status(status: str) -> None:
    if status not in ORDER_STATUSES:
        raise InvalidStatus("Invalid status")


def can_transition(from_status: str, to_status: str) -> bool:
    validate_status(from_status)
    validate_status(to_status)
    return to_status in ALLOWED_TRANSITIONS[from_status]


class OrderService:
    def _load_product(self, product_id: int) -> Product | None:
        return db.session.get(Product, product_id)

    def _order_query(self):
        return db.session.query(Order).options(
            selectinload(Order.user),
            selectinload(Order.order_items).selectinload(OrderItem.product),
        )

    def place_order(
        self,
        *,
        user_id: int,
        delivery_location: str,
        delivery_time: str,
        payment_method: str,
        items: Iterable[OrderItemRequest],
        notes: str | None = None,
    ) -> Order:
        items = list(items)
        if not items:
            raise ValidationError("items must be a non-empty list")
        if payment_method not in PAYMENT_METHODS:
            raise ValidationError(f"paymentMethod must be one of: {', '.join(PAYMENT_METHODS)}")

        # Combined quantity per product, in first-seen order
        requested: OrderedDict[int, int] = OrderedDict()
        for item in items:
            if item.quantity < 1:
                raise ValidationError("quantity must be >= 1")
            requested[item.product_id] = requested.get(item.product_id, 0) + item.quantity

        try:
            products: dict[int, Product] = {}
            for product_id, quantity in requested.items():
                product = self._load_product(product_id)
                if product is None or not product.is_active:
                    raise ProductNotFound(f"Product {product_id} not found", status_code=400)
                if quantity > product.stock:
                    raise InsufficientStock(product.name, quantity, product.stock)
                products[product_id] = product

            order = Order(
                user_id=user_id,
                delivery_location=delivery_location,
                delivery_time=delivery_time,
                payment_method=payment_method,
                notes=notes,
                status="pending",
            )

            subtotal = Decimal("0.00")
            for item in items:
                product = products[item.product_id]
                unit_price = Decimal(product.price).quantize(CENTS)
                line_subtotal = (unit_price * item.quantity).quantize(CENTS, rounding=ROUND_HALF_UP)
                subtotal += line_subtotal
                order.order_items.append(OrderItem(
                    product_id=product.id,
                    quantity=item.quantity,
                    unit_price=unit_price,
                    subtotal=line_subtotal,
                ))

            order.subtotal = subtotal
            order.total = subtotal  # No delivery fee

            db.session.add(order)
            db.session.flush()

            # Decrement in product id order so concurrent orders lock rows consistently
            for product_id in sorted(requested):
                quantity = requested[product_id]
                result = db.session.execute(
                    update(Product)
                    .where(Product.id == product_id, Product.stock >= quantity)
                    .values(stock=Product.stock - quantity, updated_at=utcnow())
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount != 1:
                    raise InsufficientStock(products[product_id].name, quantity)

            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(
            "Placed order id=%s user_id=%s lines=%d total=%s",
            order.id, user_id, len(items), order.total,
        )
        return order

    def get_order(self, order_id: int) -> Order | None:
        return self._order_query().filter(Order.id == order_id).first()

    def set_status(self, order_id: int, new_status: str, requester: Identity) -> Order:
        """
        Move an order to ``new_status``.

        Admins may take any edge of the lifecycle graph. Anyone else may only
        cancel their own pending order.
        """
        validate_status(new_status)

        # Row lock on databases that support FOR UPDATE; SQLite ignores it
        order = db.session.query(Order).filter(Order.id == order_id).with_for_update().first()
        if not order:
            raise OrderNotFound("Order not found")

        if new_status == "cancelled" and not has_action(requester, SET_ORDER_STATUS):
            authorize(requester, CANCEL_OWN_ORDER, order)
        else:
            authorize(requester, SET_ORDER_STATUS, order)

        if not can_transition(order.status, new_status):
            raise InvalidTransition(f"Cannot change order status from {order.status} to {new_status}")

        previous = order.status
        order.status = new_status
        order.updated_at = utcnow()
        db.session.commit()

        logger.info(
            "Order id=%s status %s -> %s by user_id=%s",
            order.id, previous, new_status, requester.id,
        )
        return order

    def list_orders(self, identity: Identity, status: str | None = None) -> list[Order]:
        """Orders visible to ``identity``, most recent first."""
        query = self._order_query()

        if not has_action(identity, VIEW_ALL_ORDERS):
            authorize(identity, VIEW_OWN_ORDERS)
            query = query.filter(Order.user_id == identity.id)

        if status and status != "all":
            validate_status(status)
            query = query.filter(Order.status == status)

        return query.order_by(Order.created_at.desc(), Order.id.desc()).all()
