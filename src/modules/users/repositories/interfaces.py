"""User repository interface.

Extends ``IRepository[User]`` with the e-mail look-up used for uniqueness
checks and the atomic conditional debit used by payment settlement.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.users.models import User


class IUserRepository(IRepository["User"]):
    """Repository contract for the User record store."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve a user by e-mail (case-insensitive)."""

    @abstractmethod
    def conditional_debit(self, id: str, amount: int) -> int:
        """Subtract *amount* from the balance only if ``balance >= amount``.

        Must run as a single storage-level compare-and-decrement so that
        concurrent debits cannot both pass the guard.  Returns the number of
        affected rows: ``1`` when the debit applied, ``0`` otherwise.
        """
