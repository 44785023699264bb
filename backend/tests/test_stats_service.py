import unittest
from datetime import date, datetime, timedelta
from decimal import Decimal

from flask import Flask

from bakery.extensions import db
from bakery.models import Order, OrderItem, Product, User
from bakery.services.stats_service import StatsService
from bakery.time_utils import local_day_bounds_utc


class StatsServiceTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = Flask(__name__)
        cls.app.config.update(
            SECRET_KEY="test",
            SQLALCHEMY_DATABASE_URI="sqlite:///:memory:",
            SQLALCHEMY_TRACK_MODIFICATIONS=False,
            TESTING=True,
        )
        db.init_app(cls.app)
        cls.ctx = cls.app.app_context()
        cls.ctx.push()
        from bakery import models  # noqa: F401
        db.create_all()

    @classmethod
    def tearDownClass(cls):
        db.session.remove()
        db.drop_all()
        cls.ctx.pop()

    def setUp(self):
        db.session.query(OrderItem).delete()
        db.session.query(Order).delete()
        db.session.query(Product).delete()
        db.session.query(User).delete()
        db.session.commit()

        self.user = User(username="ana", password_hash="x", full_name="Ana Souza", role="student")
        db.session.add(self.user)
        db.session.commit()

        self.day = date(2026, 3, 10)
        self.start, self.end = local_day_bounds_utc(self.day)
        self.service = StatsService(low_stock_threshold=5)

    def _order(self, created_at: datetime, total: str, status: str = "pending") -> Order:
        order = Order(
            user_id=self.user.id,
            delivery_location="Sala 3B",
            delivery_time="09:30",
            payment_method="pix",
            subtotal=Decimal(total),
            total=Decimal(total),
            status=status,
            created_at=created_at,
        )
        db.session.add(order)
        db.session.commit()
        return order

    def test_day_bounds_are_inclusive(self):
        self._order(self.start, "10.00")
        self._order(self.end, "5.25", status="delivered")
        self._order(self.start - timedelta(microseconds=1), "99.00")
        self._order(self.end + timedelta(seconds=1), "99.00")

        stats = self.service.today_stats(self.day)

        self.assertEqual(stats["ordersToday"], 2)
        self.assertEqual(stats["revenueToday"], 15.25)
        self.assertEqual(stats["deliveryRate"], 50)

    def test_bounds_span_one_day(self):
        self.assertEqual(self.end - self.start, timedelta(days=1) - timedelta(microseconds=1))

    def test_delivery_rate_rounds_half_up(self):
        # 1 of 8 delivered = 12.5%
        for i in range(8):
            self._order(self.start + timedelta(hours=i), "1.00", status="delivered" if i == 0 else "ready")

        self.assertEqual(self.service.today_stats(self.day)["deliveryRate"], 13)

    def test_delivery_rate_two_thirds(self):
        for status in ("delivered", "delivered", "cancelled"):
            self._order(self.start + timedelta(hours=1), "2.00", status=status)

        stats = self.service.today_stats(self.day)
        self.assertEqual(stats["deliveryRate"], 67)
        self.assertEqual(stats["revenueToday"], 6.0)

    def test_low_stock_threshold_is_configurable(self):
        db.session.add_all([
            Product(name="Broa", price=Decimal("1.00"), stock=7),
            Product(name="Sonho", price=Decimal("1.00"), stock=2),
        ])
        db.session.commit()

        self.assertEqual(self.service.today_stats(self.day)["lowStockCount"], 1)
        self.assertEqual(StatsService(low_stock_threshold=10).today_stats(self.day)["lowStockCount"], 2)

    def test_empty_day(self):
        self.assertEqual(
            self.service.today_stats(self.day),
            {"ordersToday": 0, "revenueToday": 0.0, "lowStockCount": 0, "deliveryRate": 0},
        )


if __name__ == "__main__":
    unittest.main()
