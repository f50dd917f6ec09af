"""User service layer (Use Cases).

Orchestrates business logic for the User record store, delegating
persistence to the injected ``IUserRepository``.

Business rules enforced here:
- Email must be unique.
- Balance may be overwritten by an administrator with any integer.
- Payment debits happen in the order settlement, through the repository
  conditional debit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import transaction
from django.db.models import QuerySet

from modules.users.exceptions import UserAlreadyExists, UserNotFound
from modules.users.models import User

if TYPE_CHECKING:
    from modules.users.dtos import CreateUserDTO, UpdateBalanceDTO
    from modules.users.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class UserService:
    """Application service for User use-cases.

    Receives an ``IUserRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IUserRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_user(self, dto: CreateUserDTO) -> User:
        """Register a new user.

        Raises:
            UserAlreadyExists: if the e-mail is already taken.
        """
        log = logger.bind(email=dto.email)

        if self._repo.get_by_email(dto.email):
            log.warning("user.duplicate_email")
            raise UserAlreadyExists("Email already registered.")

        user = self._repo.save(User(email=dto.email, balance=dto.balance))
        log.info("user.created", user_id=str(user.id))
        return user

    @transaction.atomic
    def update_balance(self, id: str, dto: UpdateBalanceDTO) -> User:
        """Overwrite the user's balance (administrative update).

        Raises:
            UserNotFound: if the user does not exist.
        """
        user = self._repo.get_by_id(id)
        if not user:
            raise UserNotFound(f"User {id} not found.")

        old_balance = user.balance
        user.balance = dto.balance
        user = self._repo.save(user)
        logger.info(
            "user.balance_updated",
            user_id=str(id),
            old_balance=old_balance,
            new_balance=user.balance,
        )
        return user

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_users(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> QuerySet[User]:
        """Return users, optionally filtered."""
        return self._repo.list(filters)

    def get_user(self, id: str) -> User:
        """Retrieve a single user by ID.

        Raises:
            UserNotFound: if the user does not exist.
        """
        user = self._repo.get_by_id(id)
        if not user:
            raise UserNotFound(f"User {id} not found.")
        return user
