"""Pytest configuration for test suite.

Settings are read from the environment when `pooply.config` is first
imported, so the variables below must be in place before any test module
imports the application.
"""

from __future__ import annotations

import os

os.environ.setdefault("APP_SUPABASE_URL", "https://example.supabase.co")
os.environ.setdefault("APP_SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("APP_SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("APP_ENABLE_RATE_LIMITING", "false")

from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from pydantic import BaseModel, Field  # noqa: E402
from supabase import AuthError  # noqa: E402

from pooply.core.repositories.user_repository import UserRepository  # noqa: E402
from pooply.core.services.auth_service import AuthService  # noqa: E402
from pooply.dependencies import get_auth_service, get_user_repository  # noqa: E402
from pooply.main import app  # noqa: E402

VALID_TOKEN = "header.payload.signature"
USER_ID = "7c9e6679-7425-40de-944b-e07fc1f90ae7"


class ProviderError(AuthError):
    """AuthError whose constructor does not depend on the SDK version."""

    def __init__(self, message: str):
        Exception.__init__(self, message)
        self.message = message


class ProviderUser(BaseModel):
    id: str
    email: str
    role: str | None = "authenticated"
    user_metadata: dict[str, Any] = Field(default_factory=dict)


class ProviderSession(BaseModel):
    access_token: str
    refresh_token: str = "refresh"


class ProviderResponse(BaseModel):
    user: ProviderUser | None = None
    session: ProviderSession | None = None


class OtpResponse(BaseModel):
    user: None = None
    session: None = None
    message_id: str | None = "msg-1"


class OAuthResponse(BaseModel):
    provider: str
    url: str


class FakeSupabaseAuth:
    """Stands in for `client.auth`, recording every call it receives."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.tokens: dict[str, ProviderUser] = {
            VALID_TOKEN: ProviderUser(
                id=USER_ID,
                email="test@test.com",
                user_metadata={"full_name": "Test User", "avatar_url": "https://img.example/a.png"},
            )
        }
        self.passwords: dict[str, str] = {"test@test.com": "yourpassword"}
        self.otp_codes: dict[str, str] = {"test@test.com": "123456"}
        self.fail_with: Exception | None = None

    def _record(self, name: str, arg: Any) -> None:
        self.calls.append((name, arg))
        if self.fail_with is not None:
            raise self.fail_with

    def get_user(self, jwt: str) -> ProviderResponse:
        self._record("get_user", jwt)
        user = self.tokens.get(jwt)
        if user is None:
            raise ProviderError("invalid JWT: unable to parse or verify signature")
        return ProviderResponse(user=user)

    def sign_in_with_password(self, credentials: dict[str, str]) -> ProviderResponse:
        self._record("sign_in_with_password", credentials)
        email = credentials["email"]
        if self.passwords.get(email) != credentials["password"]:
            raise ProviderError("Invalid login credentials")
        return ProviderResponse(
            user=ProviderUser(id=USER_ID, email=email),
            session=ProviderSession(access_token=VALID_TOKEN),
        )

    def sign_in_with_oauth(self, credentials: dict[str, Any]) -> OAuthResponse:
        self._record("sign_in_with_oauth", credentials)
        redirect = credentials["options"]["redirect_to"]
        return OAuthResponse(
            provider=credentials["provider"],
            url=f"https://example.supabase.co/auth/v1/authorize?provider=google&redirect_to={redirect}",
        )

    def sign_in_with_otp(self, credentials: dict[str, Any]) -> OtpResponse:
        self._record("sign_in_with_otp", credentials)
        return OtpResponse()

    def verify_otp(self, params: dict[str, str]) -> ProviderResponse:
        self._record("verify_otp", params)
        if self.otp_codes.get(params["email"]) != params["token"]:
            raise ProviderError("Token has expired or is invalid")
        return ProviderResponse(
            user=ProviderUser(id=USER_ID, email=params["email"]),
            session=ProviderSession(access_token=VALID_TOKEN),
        )


class FakeSupabaseClient:
    def __init__(self, auth: FakeSupabaseAuth) -> None:
        self.auth = auth


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self.rows: dict = {}
        self.create_calls = 0
        self.fail_with: Exception | None = None

    async def get(self, user_id):
        if self.fail_with is not None:
            raise self.fail_with
        return self.rows.get(user_id)

    async def create(self, user):
        self.create_calls += 1
        return self.rows.setdefault(user.id, user)


@pytest.fixture
def fake_auth() -> FakeSupabaseAuth:
    return FakeSupabaseAuth()


@pytest.fixture
def auth_service(fake_auth: FakeSupabaseAuth) -> AuthService:
    return AuthService(FakeSupabaseClient(fake_auth))


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def client(auth_service: AuthService, user_repo: InMemoryUserRepository):
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_user_repository] = lambda: user_repo
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {VALID_TOKEN}"}
