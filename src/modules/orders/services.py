"""Order service layer (Use Cases).

Orchestrates the order lifecycle across the User and Product record
stores.  The service defines the unit-of-work boundary for every write.

Business rules enforced:
- An order is priced once, at creation; item prices are snapshots.
- Creation checks stock per line but writes no user or product rows.
- Status moves only ``created -> paid -> shipped``.
- ``created -> paid`` settles the order: a conditional balance debit,
  then a conditional stock reservation per item, in item order.
- The order row is locked for the whole transition, so one order is
  settled at most once.

A stock reservation that fails after the debit leaves the debit and the
earlier reservations committed.  The service records an
``OrderSettlementIncomplete`` outbox event for that case and keeps the
order in ``created``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.db import transaction
from django.db.models import QuerySet

from modules.core.models import BIGINT_MAX
from modules.orders.constants import OrderStatus
from modules.orders.events import (
    OrderCreated,
    OrderPaid,
    OrderSettlementIncomplete,
    OrderStatusChanged,
)
from modules.orders.exceptions import (
    InsufficientBalance,
    InsufficientStock,
    InvalidOrderStatus,
    OrderNotFound,
    OrderTotalTooLarge,
    ProductNotFound,
    UserNotFound,
)

if TYPE_CHECKING:
    from modules.orders.dtos import CreateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository
    from modules.users.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        user_repository: IUserRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._order_repo = order_repository
        self._user_repo = user_repository
        self._product_repo = product_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Create a new order with a price snapshot.

        Steps:
        1. Replay: an order already carrying ``dto.idempotency_key`` is
           returned unchanged.
        2. Validate the user exists.
        3. For each item, in the caller's order:
           - Validate the product exists.
           - Check current stock covers the quantity (advisory only,
             nothing is reserved here).
           - Snapshot the current price.
        4. Persist order + items, the initial history record and the
           ``OrderCreated`` outbox event atomically.

        Raises:
            UserNotFound: the user does not exist.
            ProductNotFound: a product does not exist.
            InsufficientStock: a product's stock is below the quantity.
            OrderTotalTooLarge: the total overflows the ``total`` column.
        """
        log = logger.bind(user_id=str(dto.user_id))
        log.info("order.creation_started", item_count=len(dto.items))

        # 0. Idempotency check
        if dto.idempotency_key:
            existing = self._order_repo.get_by_idempotency_key(dto.idempotency_key)
            if existing:
                log.info(
                    "order.idempotency_hit",
                    order_id=str(existing.id),
                    key=dto.idempotency_key,
                )
                return existing

        # 1. Validate user
        if not self._user_repo.get_by_id(str(dto.user_id)):
            raise UserNotFound(f"User {dto.user_id} not found.")

        # 2. Price each line in caller order
        total = 0
        repo_items: List[Dict[str, Any]] = []
        for position, item_dto in enumerate(dto.items):
            product = self._product_repo.get_by_id(str(item_dto.product_id))
            if not product:
                raise ProductNotFound(f"Product {item_dto.product_id} not found.")
            if product.stock < item_dto.quantity:
                log.warning(
                    "order.insufficient_stock",
                    product_id=str(product.id),
                    requested=item_dto.quantity,
                    available=product.stock,
                )
                raise InsufficientStock(
                    f"Insufficient stock for product {product.id}: "
                    f"requested {item_dto.quantity}, available {product.stock}."
                )

            total += product.price * item_dto.quantity
            if total > BIGINT_MAX:
                log.warning("order.total_too_large", product_id=str(product.id))
                raise OrderTotalTooLarge("Order total is too large.")
            repo_items.append(
                {
                    "product_id": product.id,
                    "quantity": item_dto.quantity,
                    "price_at_purchase": product.price,
                    "position": position,
                }
            )

        # 3. Persist order + items
        order = self._order_repo.create(
            {
                "user_id": dto.user_id,
                "total": total,
                "items": repo_items,
                "notes": dto.notes or "",
                "idempotency_key": dto.idempotency_key,
            }
        )
        order.add_domain_event(OrderCreated(aggregate_id=order.id))
        self._order_repo.save(order)

        # 4. Record initial history
        self._order_repo.add_history(
            order_id=order.id,
            status=OrderStatus.CREATED,
            notes="Order created",
        )

        log.info("order.created", order_id=str(order.id), total=total)

        # Re-fetch with prefetch for output
        return self._order_repo.get_by_id(str(order.id)) or order

    def update_status(
        self,
        order_id: UUID | str,
        new_status: str,
        notes: str = "",
    ) -> Order:
        """Transition an order to a new status.

        Acquires a row-level lock (``SELECT FOR UPDATE``) on the order
        before validating the transition, so concurrent transitions of
        the same order serialize and the loser sees the new status.

        ``created -> paid`` runs the settlement before the status is
        persisted.  ``paid -> shipped`` only changes the status.

        Raises:
            OrderNotFound: order does not exist.
            InvalidOrderStatus: transition is not allowed.
            InsufficientBalance: the user cannot pay the total.
            InsufficientStock: a reservation failed after the debit.
        """
        incomplete: Optional[InsufficientStock] = None

        with transaction.atomic():
            order = self._order_repo.get_for_update(str(order_id))
            if not order:
                raise OrderNotFound(f"Order {order_id} not found.")

            log = logger.bind(
                order_id=str(order.id),
                current_status=order.status,
                new_status=new_status,
            )

            if not order.can_transition_to(new_status):
                log.warning("order.invalid_transition")
                raise InvalidOrderStatus(
                    f"Cannot transition from {order.status} to {new_status}."
                )

            if new_status == OrderStatus.PAID:
                try:
                    self._settle(order)
                except InsufficientStock as exc:
                    # Debit and earlier reservations commit with the outbox
                    # record; the status is left untouched.
                    incomplete = exc
                else:
                    order.add_domain_event(
                        OrderPaid(
                            aggregate_id=order.id,
                            user_id=str(order.user_id),
                            amount=order.total,
                        )
                    )

            if incomplete is None:
                old_status = order.status
                order.status = new_status
                order.add_domain_event(
                    OrderStatusChanged(
                        aggregate_id=order.id,
                        old_status=str(old_status),
                        new_status=str(new_status),
                    )
                )
                self._order_repo.save(order)
                self._order_repo.add_history(
                    order_id=order.id,
                    status=new_status,
                    notes=notes,
                    old_status=old_status,
                )
                log.info("order.status_updated")

        if incomplete is not None:
            raise incomplete
        return self._order_repo.get_by_id(str(order.id))

    def _settle(self, order: Order) -> None:
        """Debit the order total, then reserve stock for every item.

        Each step is a single conditional ``UPDATE``; a zero affected-row
        count means the guard failed.

        Raises:
            InsufficientBalance: the debit matched no row.  Nothing was
                written.
            InsufficientStock: a reservation matched no row.  The debit
                and earlier reservations were written and an
                ``OrderSettlementIncomplete`` event is saved.
        """
        log = logger.bind(order_id=str(order.id), user_id=str(order.user_id))

        if not self._user_repo.conditional_debit(str(order.user_id), order.total):
            log.warning("order.insufficient_balance", total=order.total)
            raise InsufficientBalance("Insufficient balance.")
        log.info("order.settlement_debited", amount=order.total)

        for item in order.items.all():
            affected = self._product_repo.conditional_reserve(
                str(item.product_id), item.quantity
            )
            if not affected:
                log.error(
                    "order.settlement_incomplete",
                    amount_debited=order.total,
                    product_id=str(item.product_id),
                    quantity=item.quantity,
                )
                order.add_domain_event(
                    OrderSettlementIncomplete(
                        aggregate_id=order.id,
                        user_id=str(order.user_id),
                        amount_debited=order.total,
                        product_id=str(item.product_id),
                    )
                )
                self._order_repo.save(order)
                raise InsufficientStock(
                    f"Insufficient stock for product {item.product_id}."
                )
            log.info(
                "order.stock_reserved",
                product_id=str(item.product_id),
                quantity=item.quantity,
            )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Order]:
        """Return orders, optionally filtered."""
        return self._order_repo.list(filters)

    def find_by_idempotency_key(self, key: str) -> Optional[Order]:
        """Return the order stored under *key*, or ``None``."""
        return self._order_repo.get_by_idempotency_key(key)
