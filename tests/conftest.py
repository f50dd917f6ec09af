import pytest

from rest_framework.test import APIClient

from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.users.models import User
from modules.users.repositories.django_repository import UserDjangoRepository


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def make_user():
    """Factory for persisted users: ``make_user(balance=1000)``."""
    counter = {"n": 0}

    def _make(email: str | None = None, balance: int = 0) -> User:
        counter["n"] += 1
        return User.objects.create(
            email=email or f"user{counter['n']}@example.com",
            balance=balance,
        )

    return _make


@pytest.fixture()
def make_product():
    """Factory for persisted products: ``make_product(price=500, stock=10)``."""
    counter = {"n": 0}

    def _make(name: str | None = None, price: int = 100, stock: int = 10) -> Product:
        counter["n"] += 1
        return Product.objects.create(
            name=name or f"Product {counter['n']}",
            price=price,
            stock=stock,
        )

    return _make


@pytest.fixture()
def order_service():
    """OrderService wired to the Django ORM repositories."""
    return OrderService(
        order_repository=OrderDjangoRepository(),
        user_repository=UserDjangoRepository(),
        product_repository=ProductDjangoRepository(),
    )
