"""Integration tests for OutboxEvent creation from OrderService."""

from __future__ import annotations

import pytest

from modules.core.models import EventStatus, OutboxEvent
from modules.core.tasks import relay_outbox_events
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.exceptions import InvalidOrderStatus

pytestmark = pytest.mark.integration


@pytest.fixture()
def order(order_service, make_user, make_product):
    product = make_product(price=10, stock=5)
    return order_service.create_order(
        CreateOrderDTO(
            user_id=make_user(balance=100).id,
            items=[CreateOrderItemDTO(product_id=product.id, quantity=1)],
        )
    )


def _event_types(order) -> list[str]:
    return list(
        OutboxEvent.objects.filter(aggregate_id=str(order.id))
        .order_by("created_at")
        .values_list("event_type", flat=True)
    )


def test_create_order_writes_outbox_event(order):
    assert _event_types(order) == ["OrderCreated"]
    event = OutboxEvent.objects.get(aggregate_id=str(order.id))
    assert event.status == EventStatus.PENDING
    assert event.topic == "orders"
    assert event.payload["aggregate_id"] == str(order.id)


def test_payment_writes_paid_and_status_changed(order_service, order):
    order_service.update_status(order.id, "paid")

    assert sorted(_event_types(order)) == [
        "OrderCreated",
        "OrderPaid",
        "OrderStatusChanged",
    ]
    paid = OutboxEvent.objects.get(event_type="OrderPaid")
    assert paid.payload["amount"] == 10


def test_rejected_transition_writes_no_event(order_service, order):
    with pytest.raises(InvalidOrderStatus):
        order_service.update_status(order.id, "shipped")

    assert _event_types(order) == ["OrderCreated"]


def test_relay_publishes_order_events(order_service, order):
    order_service.update_status(order.id, "paid")

    result = relay_outbox_events()

    assert result == {"published": 3, "failed": 0}
    assert not OutboxEvent.objects.filter(status=EventStatus.PENDING).exists()
