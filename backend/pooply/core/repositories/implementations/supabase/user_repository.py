from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from pooply.config import settings
from pooply.core.models.user import User
from pooply.core.repositories.user_repository import UserRepository
from pooply.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable

    from supabase import Client


class SupabaseUserRepository(UserRepository):
    """Supabase implementation of the UserRepository.

    Assumes a `users` table (name configurable) with a primary key on `id`
    and columns `email`, `name`, `avatar_url`, `created_at`.
    """

    def __init__(self, client: Client, table_name: str | None = None) -> None:
        self._client: Client = client
        self._table = table_name or settings.users_table

    async def get(self, user_id: str) -> User | None:
        resp = await self._run(
            lambda: self._client.table(self._table)
            .select("*")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        items = resp.data or []
        if not items:
            return None
        return self._row_to_user(items[0])

    async def create(self, user: User) -> User:
        row = self._user_to_row(user)
        # Insert-if-absent; an existing row is left untouched and not returned
        resp = await self._run(
            lambda: self._client.table(self._table)
            .upsert(row, on_conflict="id", ignore_duplicates=True)
            .execute()
        )
        items = resp.data or []
        if items:
            return self._row_to_user(items[0])

        logger.info("User row already present, reusing it", extra={"user_id": user.id})
        existing = await self.get(user.id)
        if existing is None:
            raise RuntimeError(f"User {user.id} was neither inserted nor found")
        return existing

    # ---------------------
    # Helpers
    # ---------------------
    @staticmethod
    async def _run(fn: Callable[[], Any]) -> Any:
        return await asyncio.to_thread(fn)

    @staticmethod
    def _user_to_row(user: User) -> dict[str, Any]:
        return user.model_dump(mode="json", by_alias=False)

    @staticmethod
    def _row_to_user(row: dict[str, Any]) -> User:
        return User.model_validate(row)
