"""Django ORM implementation of the User repository.

Satisfies ``IUserRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising, and the conditional debit reports an affected-row
count.  The Service Layer decides which domain exception to raise.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F, QuerySet
from django.utils import timezone

from modules.users.models import User
from modules.users.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class UserDjangoRepository(IUserRepository):
    """Concrete User repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[User]:
        """Retrieve a user by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return User.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_email(self, email: str) -> Optional[User]:
        return User.objects.filter(email=email.strip().lower()).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[User]:
        queryset = User.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: User) -> User:
        """Persist (create or update) a user."""
        entity.save()
        logger.info("user.saved", user_id=str(entity.id))
        return entity

    def conditional_debit(self, id: str, amount: int) -> int:
        """``UPDATE users SET balance = balance - :amount
        WHERE id = :id AND balance >= :amount``.
        """
        affected = User.objects.filter(id=id, balance__gte=amount).update(
            balance=F("balance") - amount,
            updated_at=timezone.now(),
        )
        logger.info(
            "user.conditional_debit",
            user_id=str(id),
            amount=amount,
            affected=affected,
        )
        return affected
