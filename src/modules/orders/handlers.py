"""Event handlers for Orders domain events."""

from __future__ import annotations

import structlog

from modules.orders.events import (
    OrderCreated,
    OrderPaid,
    OrderSettlementIncomplete,
    OrderStatusChanged,
)
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class OrderCreatedHandler(IEventHandler[OrderCreated]):
    def handle(self, event: OrderCreated) -> None:
        logger.info(
            f"Processing creation of order {event.aggregate_id}",
            order_id=str(event.aggregate_id),
        )


class OrderStatusChangedHandler(IEventHandler[OrderStatusChanged]):
    def handle(self, event: OrderStatusChanged) -> None:
        logger.info(
            f"Processing status change of order {event.aggregate_id}",
            order_id=str(event.aggregate_id),
            old_status=event.old_status,
            new_status=event.new_status,
        )


class OrderPaidHandler(IEventHandler[OrderPaid]):
    def handle(self, event: OrderPaid) -> None:
        logger.info(
            f"Processing payment of order {event.aggregate_id}",
            order_id=str(event.aggregate_id),
            user_id=event.user_id,
            amount=event.amount,
        )


class OrderSettlementIncompleteHandler(IEventHandler[OrderSettlementIncomplete]):
    def handle(self, event: OrderSettlementIncomplete) -> None:
        logger.error(
            f"Order {event.aggregate_id} needs a compensating action",
            order_id=str(event.aggregate_id),
            user_id=event.user_id,
            amount_debited=event.amount_debited,
            product_id=event.product_id,
        )


order_created_handler = OrderCreatedHandler()
order_status_changed_handler = OrderStatusChangedHandler()
order_paid_handler = OrderPaidHandler()
order_settlement_incomplete_handler = OrderSettlementIncompleteHandler()
