from __future__ import annotations

from conftest import USER_ID, VALID_TOKEN, ProviderError

from pooply.config import settings


def test_me_without_authorization_header_is_unauthorized(client, fake_auth):
    resp = client.get("/api/auth/me")

    assert resp.status_code == 401
    assert resp.json()["detail"] == "No authorization header"
    assert resp.headers["www-authenticate"] == "Bearer"
    assert fake_auth.calls == []


def test_me_with_malformed_token_is_rejected_without_provider_call(client, fake_auth):
    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid token"
    assert fake_auth.calls == []


def test_me_with_token_rejected_by_provider_is_unauthorized(client, user_repo):
    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer aaa.bbb.ccc"})

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid token"
    assert user_repo.rows == {}


def test_first_request_creates_exactly_one_local_user(client, auth_headers, user_repo):
    resp = client.get("/api/auth/me", headers=auth_headers)

    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == USER_ID
    assert body["email"] == "test@test.com"
    assert body["name"] == "Test User"
    assert body["avatarUrl"] == "https://img.example/a.png"
    assert "createdAt" in body
    assert list(user_repo.rows) == [USER_ID]
    assert user_repo.create_calls == 1


def test_second_request_reuses_existing_row(client, auth_headers, user_repo):
    first = client.get("/api/auth/me", headers=auth_headers).json()
    second = client.get("/api/auth/me", headers=auth_headers).json()

    assert first == second
    assert len(user_repo.rows) == 1
    assert user_repo.create_calls == 1


def test_registration_failure_is_reported_as_authentication_failure(client, auth_headers, user_repo):
    user_repo.fail_with = RuntimeError("connection refused")

    resp = client.get("/api/auth/me", headers=auth_headers)

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Authentication failed"


def test_delete_session_acknowledges(client, auth_headers):
    resp = client.delete("/api/auth/session", headers=auth_headers)

    assert resp.status_code == 200
    assert resp.json() == {"message": "Session revoked. Client should clear local storage."}


def test_delete_session_requires_token(client):
    assert client.delete("/api/auth/session").status_code == 401


def test_dev_login_returns_access_token(client):
    resp = client.post("/api/auth/dev-login", json={"email": "Test@Test.com ", "password": "yourpassword"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["access_token"] == VALID_TOKEN
    assert body["user"]["email"] == "test@test.com"
    assert "Authorize" in body["message"]


def test_dev_login_missing_fields_is_bad_request_before_provider_call(client, fake_auth):
    for payload in ({"email": "test@test.com"}, {"password": "yourpassword"}, {}):
        resp = client.post("/api/auth/dev-login", json=payload)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Email and password required"

    assert fake_auth.calls == []


def test_dev_login_wrong_password_returns_provider_message(client):
    resp = client.post("/api/auth/dev-login", json={"email": "test@test.com", "password": "nope"})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid login credentials"


def test_dev_login_unexpected_error_is_generic_500(client, fake_auth):
    fake_auth.fail_with = ConnectionError("upstream down")

    resp = client.post("/api/auth/dev-login", json={"email": "test@test.com", "password": "yourpassword"})

    assert resp.status_code == 500
    assert resp.json()["detail"] == "Login failed"


def test_dev_login_disabled(client, monkeypatch):
    monkeypatch.setattr(settings, "enable_dev_login", False)

    resp = client.post("/api/auth/dev-login", json={"email": "test@test.com", "password": "yourpassword"})

    assert resp.status_code == 404


def test_google_login_returns_redirect_url(client, fake_auth):
    resp = client.get("/api/auth/google-login")

    assert resp.status_code == 200
    assert resp.json()["url"].startswith("https://example.supabase.co/auth/v1/authorize")
    name, credentials = fake_auth.calls[0]
    assert name == "sign_in_with_oauth"
    assert credentials["provider"] == "google"
    assert credentials["options"]["redirect_to"] == settings.oauth_redirect_url


def test_google_login_unexpected_error(client, fake_auth):
    fake_auth.fail_with = RuntimeError("boom")

    resp = client.get("/api/auth/google-login")

    assert resp.status_code == 500
    assert resp.json()["detail"] == "OAuth failed"


def test_passkey_register_sends_otp(client, fake_auth):
    resp = client.post("/api/auth/passkey/register", json={"email": "test@test.com"})

    assert resp.status_code == 200
    assert resp.json()["message_id"] == "msg-1"
    name, credentials = fake_auth.calls[0]
    assert name == "sign_in_with_otp"
    assert credentials["options"]["email_redirect_to"] == settings.oauth_redirect_url


def test_passkey_register_requires_email(client, fake_auth):
    resp = client.post("/api/auth/passkey/register", json={})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email required"
    assert fake_auth.calls == []


def test_passkey_verify_returns_token(client, fake_auth):
    resp = client.post("/api/auth/passkey/verify", json={"email": "test@test.com", "token": "123456"})

    assert resp.status_code == 200
    assert resp.json()["access_token"] == VALID_TOKEN
    assert fake_auth.calls[0][1]["type"] == "magiclink"


def test_passkey_verify_bad_code(client):
    resp = client.post("/api/auth/passkey/verify", json={"email": "test@test.com", "token": "000000"})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Token has expired or is invalid"


def test_passkey_verify_requires_email_and_token(client):
    resp = client.post("/api/auth/passkey/verify", json={"email": "test@test.com"})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email and token required"


def test_auth_responses_are_not_cached(client):
    resp = client.get("/api/auth/google-login")

    assert resp.headers["cache-control"].startswith("no-store")
    assert resp.headers["x-content-type-options"] == "nosniff"


def test_me_when_provider_unreachable_is_authentication_failure(client, auth_headers, fake_auth, user_repo):
    fake_auth.fail_with = ConnectionError("upstream down")

    resp = client.get("/api/auth/me", headers=auth_headers)

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Authentication failed"
    assert resp.headers["www-authenticate"] == "Bearer"
    assert user_repo.rows == {}


def test_google_login_rejection_returns_provider_message(client, fake_auth):
    fake_auth.fail_with = ProviderError("Unsupported provider: provider is not enabled")

    resp = client.get("/api/auth/google-login")

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Unsupported provider: provider is not enabled"


def test_dev_login_without_body_is_bad_request(client, fake_auth):
    resp = client.post("/api/auth/dev-login")

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email and password required"
    assert fake_auth.calls == []


def test_passkey_register_without_body_is_bad_request(client, fake_auth):
    resp = client.post("/api/auth/passkey/register")

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email required"
    assert fake_auth.calls == []


def test_passkey_verify_with_null_body_is_bad_request(client, fake_auth):
    resp = client.post(
        "/api/auth/passkey/verify",
        content="null",
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email and token required"
    assert fake_auth.calls == []
