from __future__ import annotations

import asyncio
from typing import Any

from supabase import AuthError

from pooply.config import settings
from pooply.core.schemas.auth import AuthUser
from pooply.utils.logging import get_logger
from pooply.utils.validation import normalize_email

logger = get_logger(__name__)


DEV_LOGIN_HINT = "Copy the access_token above and click 'Authorize' in the API docs, then paste it there"


def _provider_message(err: Exception) -> str:
    return getattr(err, "message", None) or str(err) or "Identity provider rejected the request"


def _dump(obj: Any) -> Any:
    """Serialize an SDK model (user, session, OTP response) into plain JSON data."""
    if obj is None:
        return None
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json")
    return obj


class AuthService:
    """Thin wrapper over Supabase Auth.

    Validates parameters, offloads the blocking SDK calls to a thread and
    shapes the responses. Caller errors (missing fields, provider rejection)
    are raised as ValueError; everything else propagates.
    """

    def __init__(self, supabase_client: Any):
        self.supabase = supabase_client

    async def verify_token(self, jwt: str) -> AuthUser:
        """Resolve an access token into the provider's user."""
        try:
            resp = await asyncio.to_thread(lambda: self.supabase.auth.get_user(jwt))
        except AuthError as err:
            raise ValueError(_provider_message(err)) from err

        user = getattr(resp, "user", None)
        if not user or not getattr(user, "id", None):
            raise ValueError("Invalid token")

        return AuthUser(
            id=str(user.id),
            email=getattr(user, "email", None) or "",
            role=getattr(user, "role", None),
            user_metadata=getattr(user, "user_metadata", None) or {},
        )

    async def dev_login(self, email: str | None, password: str | None) -> dict[str, Any]:
        """Password sign-in that hands back a raw access token for API testing."""
        if not email or not password:
            raise ValueError("Email and password required")

        email = normalize_email(email)
        try:
            resp = await asyncio.to_thread(
                lambda: self.supabase.auth.sign_in_with_password({
                    "email": email,
                    "password": password,
                })
            )
        except AuthError as err:
            logger.warning(
                "Dev login rejected",
                extra={"email": email, "error_type": type(err).__name__},
            )
            raise ValueError(_provider_message(err)) from err

        session = getattr(resp, "session", None)
        logger.info("Dev login succeeded", extra={"email": email})
        return {
            "access_token": getattr(session, "access_token", None),
            "user": _dump(resp.user),
            "message": DEV_LOGIN_HINT,
        }

    async def google_login(self) -> dict[str, Any]:
        """Build the provider URL that starts the Google OAuth flow."""
        try:
            resp = await asyncio.to_thread(
                lambda: self.supabase.auth.sign_in_with_oauth({
                    "provider": "google",
                    "options": {"redirect_to": settings.oauth_redirect_url},
                })
            )
        except AuthError as err:
            raise ValueError(_provider_message(err)) from err
        return {"url": getattr(resp, "url", None)}

    async def passkey_register(self, email: str | None) -> dict[str, Any]:
        """Send a one-time login link/code to the given address."""
        if not email:
            raise ValueError("Email required")

        email = normalize_email(email)
        try:
            resp = await asyncio.to_thread(
                lambda: self.supabase.auth.sign_in_with_otp({
                    "email": email,
                    "options": {"email_redirect_to": settings.oauth_redirect_url},
                })
            )
        except AuthError as err:
            logger.warning(
                "Passkey registration rejected",
                extra={"email": email, "error_type": type(err).__name__},
            )
            raise ValueError(_provider_message(err)) from err

        logger.info("Passkey registration started", extra={"email": email})
        return _dump(resp) or {}

    async def passkey_verify(self, email: str | None, token: str | None) -> dict[str, Any]:
        """Exchange the one-time code for a session."""
        if not email or not token:
            raise ValueError("Email and token required")

        email = normalize_email(email)
        try:
            resp = await asyncio.to_thread(
                lambda: self.supabase.auth.verify_otp({
                    "email": email,
                    "token": token,
                    "type": "magiclink",
                })
            )
        except AuthError as err:
            logger.warning(
                "Passkey verification rejected",
                extra={"email": email, "error_type": type(err).__name__},
            )
            raise ValueError(_provider_message(err)) from err

        session = getattr(resp, "session", None)
        return {
            "access_token": getattr(session, "access_token", None),
            "user": _dump(getattr(resp, "user", None)),
        }
