from __future__ import annotations

from typing import Any

from pydantic import Field

from pooply.core.models.base import AppBaseModel


class AuthUser(AppBaseModel):
    """Identity returned by Supabase for a verified access token."""

    id: str
    email: str
    role: str | None = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def display_name(self) -> str | None:
        # Google fills full_name, email/password sign-ups may only set name
        return self.user_metadata.get("full_name") or self.user_metadata.get("name") or None

    @property
    def avatar_url(self) -> str | None:
        return self.user_metadata.get("avatar_url") or None
