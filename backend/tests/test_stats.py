"""Daily stats endpoint tests."""

from datetime import timedelta

from bakery.models import Order
from bakery.time_utils import utcnow

from conftest import order_payload


def place(client, headers, product_id, quantity=1):
    resp = client.post("/api/orders", json=order_payload((product_id, quantity)), headers=headers)
    assert resp.status_code == 201
    return resp.get_json()["id"]


class TestTodayStats:
    def test_empty_day(self, client, admin_headers):
        resp = client.get("/api/admin/stats", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.get_json() == {
            "ordersToday": 0,
            "revenueToday": 0.0,
            "lowStockCount": 0,
            "deliveryRate": 0,
        }

    def test_counts_revenue_and_delivery_rate(self, client, admin_headers, student_headers, make_product):
        product = make_product("Pão de Queijo", "2.50", stock=20)
        delivered = place(client, student_headers, product.id, 2)
        place(client, student_headers, product.id, 1)

        for status in ("confirmed", "preparing", "ready", "delivered"):
            client.put(f"/api/orders/{delivered}/status", json={"status": status}, headers=admin_headers)

        stats = client.get("/api/admin/stats", headers=admin_headers).get_json()
        assert stats["ordersToday"] == 2
        assert stats["revenueToday"] == 7.5
        assert stats["deliveryRate"] == 50
        assert stats["lowStockCount"] == 0

    def test_cancelled_orders_still_count(self, client, admin_headers, student_headers, make_product):
        product = make_product("Bolo", "4.00", stock=20)
        order_id = place(client, student_headers, product.id)
        client.put(f"/api/orders/{order_id}/status", json={"status": "cancelled"}, headers=student_headers)

        stats = client.get("/api/admin/stats", headers=admin_headers).get_json()
        assert stats["ordersToday"] == 1
        assert stats["revenueToday"] == 4.0
        assert stats["deliveryRate"] == 0

    def test_low_stock_count_ignores_inactive(self, client, admin_headers, make_product):
        make_product("Broa", stock=4)
        make_product("Sonho", stock=0)
        make_product("Pão Francês", stock=5)
        make_product("Rosca", stock=1, is_active=False)

        stats = client.get("/api/admin/stats", headers=admin_headers).get_json()
        assert stats["lowStockCount"] == 2

    def test_orders_from_other_days_are_excluded(
        self, client, db_session, admin_headers, student_headers, make_product
    ):
        product = make_product(stock=20)
        old = place(client, student_headers, product.id)
        place(client, student_headers, product.id)

        order = db_session.get(Order, old)
        order.created_at = utcnow() - timedelta(days=3)
        db_session.commit()

        stats = client.get("/api/admin/stats", headers=admin_headers).get_json()
        assert stats["ordersToday"] == 1
        assert stats["revenueToday"] == 150.0
