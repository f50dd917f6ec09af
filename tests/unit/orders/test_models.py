"""Unit tests for Order, OrderItem and OrderStatusHistory models."""

from __future__ import annotations

import pytest
from django.core.exceptions import ValidationError

from modules.orders.models import Order, OrderItem, OrderStatusHistory

pytestmark = pytest.mark.unit


def test_new_order_starts_created_with_zero_total():
    order = Order()
    assert order.status == "created"
    assert order.total == 0


def test_item_subtotal_is_quantity_times_snapshot():
    assert OrderItem(quantity=3, price_at_purchase=250).subtotal == 750


def test_item_clean_rejects_zero_quantity():
    with pytest.raises(ValidationError):
        OrderItem(quantity=0, price_at_purchase=1).clean()


def test_items_ordered_by_position(make_user, make_product):
    user = make_user()
    first, second = make_product(), make_product()
    order = Order.objects.create(user=user, total=0)
    for position, product in ((1, second), (0, first)):
        OrderItem.objects.create(
            order=order,
            product=product,
            position=position,
            quantity=1,
            price_at_purchase=1,
        )

    assert [i.product_id for i in order.items.all()] == [first.id, second.id]


def test_history_str(make_user):
    order = Order.objects.create(user=make_user(), total=0)
    history = OrderStatusHistory(order=order, old_status="created", new_status="paid")
    assert str(history).endswith("created -> paid")
