"""Order domain constants.

Defines status choices and valid status transitions for the order
state machine.  The lifecycle is strictly linear:
``created -> paid -> shipped``.

The tables are keyed by plain string values so look-ups work the same
for values loaded from the database and for ``OrderStatus`` members.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    CREATED = "created", "Created"
    PAID = "paid", "Paid"
    SHIPPED = "shipped", "Shipped"


VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.CREATED.value: {OrderStatus.PAID.value},
    OrderStatus.PAID.value: {OrderStatus.SHIPPED.value},
    OrderStatus.SHIPPED.value: set(),
}

TERMINAL_STATES: set[str] = {OrderStatus.SHIPPED.value}
