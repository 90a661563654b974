from __future__ import annotations

from typing import TYPE_CHECKING

from pooply.core.models.user import User
from pooply.utils.logging import get_logger

if TYPE_CHECKING:
    from pooply.core.repositories.user_repository import UserRepository
    from pooply.core.schemas.auth import AuthUser


logger = get_logger(__name__)


class UserService:
    """Keeps the local user table in step with the identity provider."""

    def __init__(self, repo: UserRepository) -> None:
        self._repo = repo

    async def get_user(self, user_id: str) -> User | None:
        return await self._repo.get(user_id)

    async def ensure_user(self, auth_user: AuthUser) -> User:
        """Return the local row for a verified identity, creating it on first sight."""
        existing = await self._repo.get(auth_user.id)
        if existing is not None:
            return existing

        logger.info("User not found locally, creating", extra={"user_id": auth_user.id})
        user = User(
            id=auth_user.id,
            email=auth_user.email,
            name=auth_user.display_name,
            avatar_url=auth_user.avatar_url,
        )
        return await self._repo.create(user)
