from __future__ import annotations

from tasktracker.app.auth import (
    Authenticator,
    Credentials,
    StaticCredentialsAuthenticator,
    get_authenticator,
)


def test_static_authenticator_exact_match() -> None:
    auth = StaticCredentialsAuthenticator("otavio", "1234")

    assert isinstance(auth, Authenticator)
    assert auth.authenticate(Credentials("otavio", "1234")) is True
    assert auth.authenticate(Credentials("otavio", "12345")) is False
    assert auth.authenticate(Credentials("Otavio", "1234")) is False
    assert auth.authenticate(Credentials(None, None)) is False


def test_empty_configured_password_rejects_everything() -> None:
    auth = StaticCredentialsAuthenticator("otavio", "")
    assert auth.authenticate(Credentials("otavio", "")) is False


def test_requests_without_credentials_are_rejected(anonymous_client) -> None:
    for method, path in (("get", "/"), ("get", "/api/users"), ("post", "/api/users"), ("get", "/healthz")):
        resp = getattr(anonymous_client, method)(path)
        assert resp.status_code == 401
        assert resp.json() == {"error": "Unauthorized"}


def test_wrong_password_is_rejected(anonymous_client) -> None:
    resp = anonymous_client.get("/api/users", headers={"username": "tester", "password": "nope"})
    assert resp.status_code == 401


def test_auth_runs_before_validation(anonymous_client) -> None:
    resp = anonymous_client.get("/api/users/not-a-number")
    assert resp.status_code == 401


def test_authenticator_is_swappable(anonymous_client) -> None:
    from tasktracker.main import app

    class AllowAll:
        def authenticate(self, credentials: Credentials) -> bool:
            return True

    app.dependency_overrides[get_authenticator] = lambda: AllowAll()

    resp = anonymous_client.get("/api/users")

    assert resp.status_code == 200
    assert resp.json() == []


def test_valid_credentials_pass(client) -> None:
    assert client.get("/api/users").status_code == 200
