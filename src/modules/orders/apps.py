from django.apps import AppConfig


class OrdersConfig(AppConfig):
    name = "modules.orders"
    label = "orders"

    def ready(self) -> None:
        from modules.orders.events import (
            OrderCreated,
            OrderPaid,
            OrderSettlementIncomplete,
            OrderStatusChanged,
        )
        from modules.orders.handlers import (
            order_created_handler,
            order_paid_handler,
            order_settlement_incomplete_handler,
            order_status_changed_handler,
        )
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(OrderCreated, order_created_handler)
        event_bus.subscribe(OrderStatusChanged, order_status_changed_handler)
        event_bus.subscribe(OrderPaid, order_paid_handler)
        event_bus.subscribe(
            OrderSettlementIncomplete, order_settlement_incomplete_handler
        )
