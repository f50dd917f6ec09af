"""Product repository interface.

Extends ``IRepository[Product]`` with the atomic conditional stock
reservation used by payment settlement.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product record store."""

    @abstractmethod
    def conditional_reserve(self, id: str, quantity: int) -> int:
        """Subtract *quantity* from stock only if ``stock >= quantity``.

        Must run as a single storage-level compare-and-decrement.  Returns
        ``1`` when the reservation applied, ``0`` otherwise.
        """
