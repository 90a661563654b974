from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Request fields are optional on purpose: absence is reported as a 400 with a
# readable message by the auth service, not as a schema validation error.


class DevLoginRequest(BaseModel):
    """Request to sign in with email and password (development only)."""

    email: str | None = Field(default=None, description="User's email address", examples=["test@test.com"])
    password: str | None = Field(default=None, description="User's password", examples=["yourpassword"])


class PasskeyRegisterRequest(BaseModel):
    """Request to start a passwordless login for an email address."""

    email: str | None = Field(default=None, description="User's email address", examples=["test@test.com"])


class PasskeyVerifyRequest(BaseModel):
    """Request to complete a passwordless login with the one-time token."""

    email: str | None = Field(default=None, description="User's email address")
    token: str | None = Field(default=None, description="OTP token generated by the passkey flow")


class TokenResponse(BaseModel):
    """Access token plus the provider's user object."""

    access_token: str | None = Field(default=None, description="JWT to send as 'Authorization: Bearer <token>'")
    user: dict[str, Any] | None = Field(default=None, description="User as returned by the identity provider")


class DevLoginResponse(TokenResponse):
    message: str = Field(..., description="How to use the token in the API docs")


class OAuthUrlResponse(BaseModel):
    url: str | None = Field(default=None, description="URL to redirect the client to")


class MessageResponse(BaseModel):
    message: str
