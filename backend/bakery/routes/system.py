# backend/bakery/routes/system.py
"""
System health endpoint.

Reports database reachability plus a few row counts that make an empty or
unseeded deployment obvious at a glance.
"""

import time
from flask import Blueprint, current_app
from sqlalchemy import func, text

from ..extensions import db
from ..models import Order, Product

system_bp = Blueprint("system", __name__)


def check_database_health() -> dict:
    """Round-trip the database and count catalog and order rows."""
    started = time.perf_counter()
    try:
        db.session.execute(text("SELECT 1"))
        active_products = (
            db.session.query(func.count(Product.id)).filter(Product.is_active.is_(True)).scalar()
        )
        open_orders = (
            db.session.query(func.count(Order.id))
            .filter(Order.status.notin_(("delivered", "cancelled")))
            .scalar()
        )
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Database health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round((time.perf_counter() - started) * 1000, 2),
            "error": "Database error",
        }

    return {
        "status": "healthy",
        "latency_ms": round((time.perf_counter() - started) * 1000, 2),
        "details": {
            "active_products": active_products,
            "open_orders": open_orders,
            # An empty catalog usually means `flask catalog seed` was never run
            "catalog_seeded": active_products > 0,
        },
    }


@system_bp.get("/health")
def health():
    database = check_database_health()
    status_code = 200 if database["status"] == "healthy" else 503
    return {"status": database["status"], "checks": {"database": database}}, status_code
