from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pooply.core.models.user import User


class UserRepository(ABC):
    """Abstract repository interface for locally mirrored users.

    Contract used by services and dependency injection. Implementations should
    perform I/O (database, network) and therefore expose async methods.
    """

    @abstractmethod
    async def get(self, user_id: str) -> User | None:  # pragma: no cover - interface only
        """Fetch a user by identity-provider id or return None if not found."""

    @abstractmethod
    async def create(self, user: User) -> User:  # pragma: no cover
        """Insert the user unless a row with the same id exists.

        Returns the stored row in both cases, so concurrent first logins for
        one identity end up with a single row.
        """
