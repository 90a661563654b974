from __future__ import annotations

from pydantic import Field

from .base import CreatedModel


class User(CreatedModel):
    """Local mirror of an identity-provider account.

    `id` is the provider's subject identifier; it is never generated here.
    Rows are created on first sight of a verified token and not mutated after.
    """

    id: str = Field(..., min_length=1, description="Identity provider user id")
    email: str = Field(..., description="Email address reported by the provider")
    name: str | None = Field(default=None, description="Display name, if known")
    avatar_url: str | None = Field(default=None, description="Profile picture URL, if known")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "7c9e6679-7425-40de-944b-e07fc1f90ae7",
                    "email": "test@test.com",
                    "name": "Test User",
                    "avatarUrl": None,
                    "createdAt": "2025-01-01T12:00:00Z",
                }
            ]
        }
    }
