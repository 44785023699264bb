"""
Pytest fixtures for the bakery backend tests.

Provides an in-memory database, the Flask test client, the service objects,
and ready-made student/admin accounts with their auth headers.
"""

from decimal import Decimal

import pytest
from bakery import create_app
from bakery.extensions import db
from bakery.models import Product
from bakery.services import Services, EXTENSION_KEY

TEST_CONFIG = {
    'TESTING': True,
    'SECRET_KEY': 'test-secret-key-for-the-bakery-suite-000001',
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    # Lowest bcrypt cost keeps the suite fast
    'BCRYPT_ROUNDS': 4,
}

STUDENT_PASSWORD = "pw123!"
ADMIN_PASSWORD = "admin123!"


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app(TEST_CONFIG)

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def services(app, db_session) -> Services:
    return app.extensions[EXTENSION_KEY]


@pytest.fixture(scope='function')
def student(services):
    """Student account 'ana' created through registration."""
    result = services.credentials.register(
        username="ana",
        password=STUDENT_PASSWORD,
        full_name="Ana Souza",
        classroom="3B",
        contact="11999990000",
    )
    return result["user"]


@pytest.fixture(scope='function')
def other_student(services):
    result = services.credentials.register(
        username="bruno",
        password=STUDENT_PASSWORD,
        full_name="Bruno Lima",
        classroom="2A",
    )
    return result["user"]


@pytest.fixture(scope='function')
def admin(services):
    user = services.credentials.create_admin(
        username="secretaria",
        password=ADMIN_PASSWORD,
        full_name="Secretaria Escolar",
    )
    return user.to_dict()


def get_auth_token(client, username: str, password: str) -> str:
    """Helper to get auth token for a user."""
    response = client.post('/api/auth/login', json={
        'username': username,
        'password': password
    })
    if response.status_code == 200:
        return response.json.get('token')
    return None


def auth_headers(token: str) -> dict:
    """Helper to create Authorization headers."""
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture(scope='function')
def student_headers(client, student):
    return auth_headers(get_auth_token(client, "ana", STUDENT_PASSWORD))


@pytest.fixture(scope='function')
def other_student_headers(client, other_student):
    return auth_headers(get_auth_token(client, "bruno", STUDENT_PASSWORD))


@pytest.fixture(scope='function')
def admin_headers(client, admin):
    return auth_headers(get_auth_token(client, "secretaria", ADMIN_PASSWORD))


@pytest.fixture(scope='function')
def make_product(db_session):
    """Factory for catalog products."""
    def _make(name="Pão de Queijo", price="150.00", stock=10, **extra):
        product = Product(
            name=name,
            description=extra.pop("description", f"{name} fresquinho"),
            price=Decimal(price),
            stock=stock,
            **extra,
        )
        db_session.add(product)
        db_session.commit()
        return product
    return _make


def order_payload(*items, payment_method="pix", **extra) -> dict:
    """Build a POST /api/orders body from (product_id, quantity) pairs."""
    payload = {
        "deliveryLocation": "Sala 3B",
        "deliveryTime": "09:30 - Intervalo",
        "paymentMethod": payment_method,
        "items": [{"productId": pid, "quantity": qty} for pid, qty in items],
    }
    payload.update(extra)
    return payload
