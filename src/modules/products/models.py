"""Product model with integer price and stock control.

Business rules implemented:
- Price is an integer unit price in the smallest currency unit, ``>= 0``.
- Stock cannot be negative (database check constraint plus the guarded
  decrement in ``ProductDjangoRepository.conditional_reserve``).
- Products are never deleted: order items reference them with PROTECT.
"""

from __future__ import annotations

import structlog
from django.core.exceptions import ValidationError
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Product(BaseModel):
    """Product record.

    ``price`` is the *current* unit price.  Orders copy it into
    ``OrderItem.price_at_purchase`` at creation time and never read it
    again, so later price changes leave existing orders untouched.
    """

    name = models.CharField(max_length=255)
    price = models.PositiveIntegerField()
    stock = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="products_stock_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.price is not None and self.price < 0:
            raise ValidationError({"price": "Price cannot be negative."})
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": "Stock cannot be negative."})

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_created",
                product_id=str(self.id),
                name=self.name,
                price=self.price,
                stock=self.stock,
            )

    def __str__(self) -> str:
        return f"{self.name} ({self.price} x {self.stock})"
