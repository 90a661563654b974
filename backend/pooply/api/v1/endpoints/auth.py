from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from pooply.api.v1.schemas.auth import (
    DevLoginRequest,
    DevLoginResponse,
    MessageResponse,
    OAuthUrlResponse,
    PasskeyRegisterRequest,
    PasskeyVerifyRequest,
    TokenResponse,
)
from pooply.core.models.user import User
from pooply.core.services.auth_service import AuthService
from pooply.dependencies import (
    get_auth_service,
    get_current_user,
    rate_limited,
    require_dev_login,
)
from pooply.utils.logging import get_logger

logger = get_logger(__name__)

# Configure router with authentication-specific settings
router = APIRouter(
    responses={
        401: {"description": "Unauthorized"},
        429: {"description": "Too many requests"}
    }
)


@router.post(
    "/dev-login",
    response_model=DevLoginResponse,
    dependencies=[Depends(require_dev_login), Depends(rate_limited("dev-login"))],
    responses={400: {"description": "Invalid credentials"}},
)
async def dev_login(
    payload: DevLoginRequest | None = None,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Development login: exchange email and password for an access token.

    Paste the returned `access_token` into the docs' Authorize dialog to call
    protected endpoints. Disabled when `APP_ENABLE_DEV_LOGIN` is false.
    """
    payload = payload or DevLoginRequest()
    try:
        return await auth_service.dev_login(payload.email, payload.password)
    except ValueError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(err),
        ) from err
    except Exception as err:
        logger.error("Unexpected error during dev login", extra={"error": str(err)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Login failed",
        ) from err


@router.get("/me", response_model=User)
async def get_me(current_user: User = Depends(get_current_user)):
    """Return the authenticated user's profile.

    Sign-in itself happens client-side (Google OAuth or passkeys through
    Supabase); the first call with a new identity creates its local record.
    """
    return current_user


@router.delete("/session", response_model=MessageResponse)
async def revoke_session(current_user: User = Depends(get_current_user)):
    """Acknowledge sign-out. Tokens are not revoked server-side; the client clears its session."""
    logger.info("Session revoke requested", extra={"user_id": current_user.id})
    return {"message": "Session revoked. Client should clear local storage."}


@router.get(
    "/google-login",
    response_model=OAuthUrlResponse,
    responses={400: {"description": "OAuth initiation failed"}},
)
async def google_login(auth_service: AuthService = Depends(get_auth_service)):
    """Return the URL that starts the Google OAuth flow."""
    try:
        return await auth_service.google_login()
    except ValueError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(err),
        ) from err
    except Exception as err:
        logger.error("Unexpected error starting Google OAuth", extra={"error": str(err)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="OAuth failed",
        ) from err


@router.post(
    "/passkey/register",
    response_model=dict[str, Any],
    dependencies=[Depends(rate_limited("passkey-register"))],
    responses={400: {"description": "Invalid request"}},
)
async def passkey_register(
    payload: PasskeyRegisterRequest | None = None,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Start a passkey registration; the provider emails a one-time token."""
    payload = payload or PasskeyRegisterRequest()
    try:
        return await auth_service.passkey_register(payload.email)
    except ValueError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(err),
        ) from err
    except Exception as err:
        logger.error("Unexpected error during passkey registration", extra={"error": str(err)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Passkey registration failed",
        ) from err


@router.post(
    "/passkey/verify",
    response_model=TokenResponse,
    dependencies=[Depends(rate_limited("passkey-verify"))],
    responses={400: {"description": "Invalid credentials or verification failed"}},
)
async def passkey_verify(
    payload: PasskeyVerifyRequest | None = None,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Complete the passkey login with the one-time token and return an access token."""
    payload = payload or PasskeyVerifyRequest()
    try:
        return await auth_service.passkey_verify(payload.email, payload.token)
    except ValueError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(err),
        ) from err
    except Exception as err:
        logger.error("Unexpected error during passkey verification", extra={"error": str(err)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Passkey verification failed",
        ) from err
