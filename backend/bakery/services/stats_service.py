# Overview: Daily back-office counters derived from the order and product tables.

from __future__ import annotations

from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import func

from ..extensions import db
from ..models import Order, Product
from bakery.time_utils import local_day_bounds_utc, local_today


class StatsService:
    def __init__(self, *, low_stock_threshold: int = 5):
        self.low_stock_threshold = low_stock_threshold

    def today_stats(self, day: date | None = None) -> dict:
        """
        Counters for one server-local calendar day (today by default).

        deliveryRate is the rounded percentage of the day's orders that are
        delivered, 0 when there were no orders.
        """
        start, end = local_day_bounds_utc(day or local_today())
        in_day = (Order.created_at >= start, Order.created_at <= end)

        orders_today, revenue_today = db.session.query(
            func.count(Order.id),
            func.coalesce(func.sum(Order.total), 0),
        ).filter(*in_day).one()

        delivered_today = (
            db.session.query(func.count(Order.id))
            .filter(*in_day, Order.status == "delivered")
            .scalar()
        )

        low_stock_count = (
            db.session.query(func.count(Product.id))
            .filter(Product.is_active.is_(True), Product.stock < self.low_stock_threshold)
            .scalar()
        )

        orders_today = int(orders_today or 0)
        delivered_today = int(delivered_today or 0)
        delivery_rate = 0
        if orders_today > 0:
            delivery_rate = int(
                (Decimal(delivered_today) * 100 / Decimal(orders_today)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
            )

        return {
            "ordersToday": orders_today,
            "revenueToday": float(Decimal(str(revenue_today or 0)).quantize(Decimal("0.01"))),
            "lowStockCount": int(low_stock_count or 0),
            "deliveryRate": delivery_rate,
        }
