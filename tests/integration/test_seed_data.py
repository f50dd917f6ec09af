"""Integration tests for the ``seed_data`` management command."""

from io import StringIO

import pytest
from django.core.management import call_command

from modules.orders.models import Order, OrderStatusHistory
from modules.products.models import Product
from modules.users.models import User

pytestmark = pytest.mark.integration


def test_seed_creates_users_products_and_orders():
    out = StringIO()

    call_command("seed_data", "--orders", "10", stdout=out)

    assert User.objects.count() == 5
    assert Product.objects.count() == 10
    assert 0 < Order.objects.count() <= 10
    assert "Seed completed" in out.getvalue()


def test_seeded_orders_respect_invariants():
    call_command("seed_data", "--orders", "10", stdout=StringIO())

    for order in Order.objects.prefetch_related("items", "status_history"):
        assert order.total == sum(i.subtotal for i in order.items.all())
        statuses = [h.new_status for h in order.status_history.all()]
        assert statuses == ["created", "paid", "shipped"][: len(statuses)]
        assert statuses[-1] == order.status


def test_seed_is_idempotent():
    call_command("seed_data", "--orders", "5", stdout=StringIO())
    orders = Order.objects.count()

    call_command("seed_data", "--orders", "5", stdout=StringIO())

    assert Order.objects.count() == orders
    assert User.objects.count() == 5
    assert OrderStatusHistory.objects.filter(new_status="created").count() == orders
