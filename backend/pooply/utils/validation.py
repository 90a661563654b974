from __future__ import annotations


def normalize_email(email: str | None) -> str:
    """Trim and lowercase an email address; None becomes an empty string."""
    return (email or "").strip().lower()


def looks_like_jwt(token: str | None) -> bool:
    """Cheap structural check: three non-empty dot-separated segments."""
    if not token:
        return False
    parts = token.split(".")
    return len(parts) == 3 and all(parts)
