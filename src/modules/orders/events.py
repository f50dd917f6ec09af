"""Domain events for the Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderCreated(DomainEvent):
    """Raised when an order is created."""


@dataclass(frozen=True, kw_only=True)
class OrderStatusChanged(DomainEvent):
    """Raised when an order status changes."""

    old_status: str
    new_status: str


@dataclass(frozen=True, kw_only=True)
class OrderPaid(DomainEvent):
    """Raised when the settlement of an order succeeds."""

    user_id: str
    amount: int


@dataclass(frozen=True, kw_only=True)
class OrderSettlementIncomplete(DomainEvent):
    """Raised when the balance was debited but a stock reservation failed.

    The debit and any earlier reservations stay committed; this event is
    the record a compensating action has to work from.
    """

    user_id: str
    amount_debited: int
    product_id: str
