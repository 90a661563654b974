from __future__ import annotations

import math
import threading
import time
from typing import TYPE_CHECKING

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from supabase import Client

from pooply.config import settings
from pooply.core.models.user import User
from pooply.core.repositories.implementations.supabase.user_repository import (
    SupabaseUserRepository,
)
from pooply.core.repositories.user_repository import UserRepository
from pooply.core.services.auth_service import AuthService
from pooply.core.services.user_service import UserService
from pooply.db.base import create_request_supabase_client, get_supabase_admin_client
from pooply.utils.logging import get_logger
from pooply.utils.validation import looks_like_jwt

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = get_logger(__name__)

# Use auto_error=False to handle missing tokens gracefully
http_bearer = HTTPBearer(auto_error=False)

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


# In-memory rate limiting
_login_attempts: dict[str, list[float]] = {}
_login_attempts_lock = threading.Lock()


def _prune_idle(window_start: float) -> None:
    """Drop identifiers whose attempts have all aged out of the window."""
    idle = [
        identifier for identifier, attempts in _login_attempts.items()
        if not attempts or attempts[-1] <= window_start
    ]
    for identifier in idle:
        del _login_attempts[identifier]


def _is_rate_limited(identifier: str) -> bool:
    """Check if the identifier is rate limited, recording the attempt if not."""
    if not settings.enable_rate_limiting:
        return False
    now = time.time()
    window_start = now - settings.login_attempt_window
    with _login_attempts_lock:
        _prune_idle(window_start)
        attempts = [
            attempt for attempt in _login_attempts.get(identifier, [])
            if attempt > window_start
        ]
        if len(attempts) >= settings.max_login_attempts:
            _login_attempts[identifier] = attempts
            return True
        attempts.append(now)
        _login_attempts[identifier] = attempts
        return False


def rate_limit_by_ip(request: Request, operation: str = "default") -> None:
    """Reject the request with 429 once the client IP exhausts its attempts.

    Args:
        request: FastAPI request object
        operation: Operation identifier for rate limiting (e.g., "dev-login")

    Raises:
        HTTPException: If rate limit is exceeded
    """
    client_ip = request.client.host if request.client else "unknown"
    identifier = f"{operation}:{client_ip}"
    if not _is_rate_limited(identifier):
        return

    logger.warning(f"Rate limited {operation} attempt", extra={"ip": client_ip})

    now = time.time()
    window_seconds = settings.login_attempt_window
    attempts = _login_attempts.get(identifier, [])
    earliest_attempt = min(attempts) if attempts else now
    seconds_until_reset = max(1, math.ceil(window_seconds - (now - earliest_attempt)))

    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=f"Too many {operation} attempts. Please try again later.",
        headers={
            "Retry-After": str(seconds_until_reset),
            "RateLimit-Limit": str(settings.max_login_attempts),
            "RateLimit-Remaining": "0",
            "RateLimit-Reset": str(seconds_until_reset),
        },
    )


def rate_limited(operation: str) -> Callable[[Request], Awaitable[None]]:
    """Build a route dependency that rate limits `operation` per client IP."""

    # async so it runs on the event loop, not in the threadpool
    async def _dependency(request: Request) -> None:
        rate_limit_by_ip(request, operation)

    return _dependency


async def require_dev_login() -> None:
    """404 the dev-only password login unless it is enabled."""
    if not settings.enable_dev_login:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")


def get_request_supabase_client() -> Client:
    """Create a request-scoped Supabase client for auth calls."""
    return create_request_supabase_client()


def get_auth_service(client: Client = Depends(get_request_supabase_client)) -> AuthService:
    """Get a request-scoped auth service instance."""
    return AuthService(client)


def get_user_repository() -> UserRepository:
    """User rows are written before the user has any RLS identity, so use the admin client."""
    return SupabaseUserRepository(get_supabase_admin_client())


def get_user_service(repo: UserRepository = Depends(get_user_repository)) -> UserService:
    """Get a request-scoped user service instance."""
    return UserService(repo)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Security(http_bearer),
    auth_service: AuthService = Depends(get_auth_service),
    user_service: UserService = Depends(get_user_service),
) -> User:
    """Validate the bearer token with Supabase and return the local user row.

    The row is created on the first request that carries a valid token for a
    given identity (lazy registration).
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No authorization header",
            headers=_BEARER_CHALLENGE,
        )
    jwt = credentials.credentials
    if not looks_like_jwt(jwt):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers=_BEARER_CHALLENGE,
        )

    try:
        auth_user = await auth_service.verify_token(jwt)
    except ValueError as err:
        logger.warning("Token rejected by identity provider", extra={"reason": str(err)[:100]})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers=_BEARER_CHALLENGE,
        ) from err
    except Exception as err:
        logger.error(
            "Token verification failed",
            extra={"error_type": type(err).__name__, "error_summary": str(err)[:100]},
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication failed",
            headers=_BEARER_CHALLENGE,
        ) from err

    try:
        return await user_service.ensure_user(auth_user)
    except Exception as err:
        logger.error(
            "Lazy registration failed",
            extra={"user_id": auth_user.id, "error_type": type(err).__name__, "error_summary": str(err)[:100]},
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication failed",
            headers=_BEARER_CHALLENGE,
        ) from err
