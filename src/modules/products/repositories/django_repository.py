"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
(or an affected-row count) instead of raising HTTP-level exceptions;
the Service Layer decides how to translate a missing entity or a failed
reservation into a domain error.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F, QuerySet
from django.utils import timezone

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Product]:
        """List products with optional Django ORM look-ups.

        Examples of valid filters::

            {"stock__gt": 0}
            {"name__icontains": "widget"}
        """
        queryset = Product.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.save()
        logger.info("product.saved", product_id=str(entity.id))
        return entity

    def conditional_reserve(self, id: str, quantity: int) -> int:
        """``UPDATE products SET stock = stock - :quantity
        WHERE id = :id AND stock >= :quantity``.
        """
        affected = Product.objects.filter(id=id, stock__gte=quantity).update(
            stock=F("stock") - quantity,
            updated_at=timezone.now(),
        )
        logger.info(
            "product.conditional_reserve",
            product_id=str(id),
            quantity=quantity,
            affected=affected,
        )
        return affected
