"""User model: an e-mail identity holding an integer balance.

Business rules implemented:
- Email must be unique in the system (normalised to lowercase on save).
- Balance is an integer amount in the smallest currency unit.  It may be
  set to any value (including negative) by the administrative balance
  update; the payment path only debits through
  ``UserDjangoRepository.conditional_debit`` which never crosses zero.
- Users are never deleted.
"""

from __future__ import annotations

import structlog
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class User(BaseModel):
    """Paying user.

    Unrelated to ``django.contrib.auth``: the API carries no authentication,
    and this model only owns the balance charged on payment.
    """

    email = models.EmailField(max_length=254, unique=True)
    balance = models.BigIntegerField(default=0)

    class Meta:
        db_table = "users"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="users_created_idx"),
        ]

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)
        if is_new:
            logger.info("user_created", user_id=str(self.id))

    def __str__(self) -> str:
        return f"{self.email} (balance={self.balance})"
