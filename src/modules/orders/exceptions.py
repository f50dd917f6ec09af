"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.

``UserNotFound`` and ``ProductNotFound`` are re-exported because the
order orchestrator raises them for references it cannot resolve.
"""

from __future__ import annotations

from modules.core.exceptions import InvalidRequest, NotFound
from modules.products.exceptions import ProductNotFound
from modules.users.exceptions import UserNotFound

__all__ = [
    "InsufficientBalance",
    "InsufficientStock",
    "InvalidOrderStatus",
    "OrderNotFound",
    "OrderTotalTooLarge",
    "ProductNotFound",
    "UserNotFound",
]


class OrderNotFound(NotFound):
    """The requested order does not exist."""


class InvalidOrderStatus(InvalidRequest):
    """An invalid status transition was attempted."""


class InsufficientStock(InvalidRequest):
    """Not enough stock to fulfil an order line."""


class InsufficientBalance(InvalidRequest):
    """The user's balance does not cover the order total."""


class OrderTotalTooLarge(InvalidRequest):
    """The order total does not fit the total column."""
