"""Flask CLI command tests."""

from bakery.models import Product, User
from bakery.seed_data import DEFAULT_PRODUCTS


class TestCatalogCommands:
    def test_seed_then_reseed(self, app, db_session):
        runner = app.test_cli_runner()

        result = runner.invoke(args=["catalog", "seed"])
        assert result.exit_code == 0
        assert f"Seeded {len(DEFAULT_PRODUCTS)} products" in result.output
        assert db_session.query(Product).count() == len(DEFAULT_PRODUCTS)

        result = runner.invoke(args=["catalog", "seed"])
        assert result.exit_code == 0
        assert "already exist" in result.output

    def test_low_stock_listing(self, app, make_product):
        make_product("Broa", stock=2)
        result = app.test_cli_runner().invoke(args=["catalog", "low-stock"])
        assert result.exit_code == 0
        assert "Broa" in result.output


class TestUserCommands:
    def test_create_admin(self, app, db_session):
        result = app.test_cli_runner().invoke(args=[
            "users", "create-admin",
            "--username", "diretoria",
            "--full-name", "Diretoria",
            "--password", "admin123!",
        ])
        assert result.exit_code == 0, result.output
        user = db_session.query(User).filter_by(username="diretoria").one()
        assert user.role == "admin"

    def test_create_admin_duplicate(self, app, admin):
        result = app.test_cli_runner().invoke(args=[
            "users", "create-admin",
            "--username", "secretaria",
            "--full-name", "Outra",
            "--password", "admin123!",
        ])
        assert result.exit_code != 0
        assert "Username already exists" in result.output

    def test_create_admin_short_password(self, app, db_session):
        result = app.test_cli_runner().invoke(args=[
            "users", "create-admin",
            "--username", "curto",
            "--full-name", "Curto",
            "--password", "123",
        ])
        assert result.exit_code != 0
        assert db_session.query(User).filter_by(username="curto").count() == 0

    def test_create_admin_password_over_72_bytes(self, app, db_session):
        result = app.test_cli_runner().invoke(args=[
            "users", "create-admin",
            "--username", "longo",
            "--full-name", "Longo",
            "--password", "x" * 100,
        ])
        assert result.exit_code != 0
        assert "72 bytes" in result.output
        assert db_session.query(User).filter_by(username="longo").count() == 0
