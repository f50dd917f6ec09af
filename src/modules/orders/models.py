"""Order, OrderItem, and OrderStatusHistory models.

Business rules implemented:
- Invalid status transitions rejected (enforced at service layer).
- Each status change generates a history record.
- Idempotency via ``idempotency_key`` unique constraint.
- User FK uses PROTECT to preserve financial history.
- OrderItem snapshots the product price at creation time
  (``price_at_purchase``); ``total`` is computed once and never changes.
"""

from __future__ import annotations

import structlog
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import TERMINAL_STATES, VALID_TRANSITIONS, OrderStatus
from shared.domain.events import DomainEventMixin

logger = structlog.get_logger(__name__)


class Order(DomainEventMixin, BaseModel):
    """Order aggregate root.

    ``idempotency_key`` is nullable: only orders created via the public API
    with an ``Idempotency-Key`` header carry one.  Databases allow multiple
    NULLs in a UNIQUE column, so keyless orders never collide.
    """

    user: models.ForeignKey = models.ForeignKey(
        "users.User",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.CREATED,
    )
    total: models.BigIntegerField = models.BigIntegerField(default=0)
    notes: models.TextField = models.TextField(blank=True, default="")
    idempotency_key: models.CharField = models.CharField(
        max_length=255,
        unique=True,
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        """Return ``True`` if the order is in a terminal state."""
        return str(self.status) in TERMINAL_STATES

    def can_transition_to(self, new_status: str) -> bool:
        """Check whether transitioning to *new_status* is valid."""
        allowed = VALID_TRANSITIONS.get(str(self.status), set())
        return str(new_status) in allowed

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"Order {self.id} ({self.status})"


class OrderItem(BaseModel):
    """Line item linking an Order to a Product.

    ``price_at_purchase`` is a **snapshot** of the product price at the time
    the order was created; later price changes never reach it.
    ``position`` preserves the order in which the caller listed the items.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    product: models.ForeignKey = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    position: models.PositiveIntegerField = models.PositiveIntegerField(default=0)
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    price_at_purchase: models.PositiveIntegerField = models.PositiveIntegerField()

    class Meta:
        db_table = "order_items"
        ordering = ["position"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    @property
    def subtotal(self) -> int:
        return self.quantity * self.price_at_purchase

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.quantity is not None and self.quantity < 1:
            raise ValidationError({"quantity": "Quantity must be at least 1."})

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity} @ {self.price_at_purchase}"


class OrderStatusHistory(BaseModel):
    """Append-only audit trail for order status transitions.

    The first record of every order has ``old_status=None`` and
    ``new_status="created"``.  Records are never edited.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="status_history",
    )
    old_status: models.CharField = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=OrderStatus.choices,
        null=True,
        blank=True,
    )
    new_status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
    )
    notes: models.TextField = models.TextField(blank=True, default="")

    class Meta:
        db_table = "order_status_history"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(
                fields=["order", "created_at"],
                name="osh_order_created_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.order_id} : {self.old_status} -> {self.new_status}"

