# Overview: Flask API routes for placing, listing and progressing orders.

# backend/bakery/routes/orders.py
"""
Order routes.

Visibility and status changes are decided by the order engine through
authorize(): admins see and move every order, students see their own and
may only cancel their own pending orders.
"""
from flask import Blueprint, request, g

from ..permissions import PLACE_ORDER
from ..services import get_services
from ..validation import OrderCreate, StatusUpdate
from ..decorators import require_auth, require_permission

orders_bp = Blueprint("orders", __name__, url_prefix="/api/orders")


@orders_bp.get("")
@require_auth
def list_orders_route():
    """
    Query params:
    - status: str (optional) - one of the order statuses, or "all"
    """
    orders = get_services().orders.list_orders(g.identity, status=request.args.get("status"))
    return [o.to_dict(include_details=True) for o in orders]


@orders_bp.post("")
@require_auth
@require_permission(PLACE_ORDER)
def place_order_route():
    data = OrderCreate.from_payload(request.get_json(silent=True))
    order = get_services().orders.place_order(
        user_id=g.identity.id,
        delivery_location=data.delivery_location,
        delivery_time=data.delivery_time,
        payment_method=data.payment_method,
        notes=data.notes,
        items=data.items,
    )
    return order.to_dict(include_details=True), 201


@orders_bp.put("/<int:order_id>/status")
@require_auth
def set_status_route(order_id: int):
    data = StatusUpdate.from_payload(request.get_json(silent=True))
    order = get_services().orders.set_status(order_id, data.status, g.identity)
    return order.to_dict(), 200
