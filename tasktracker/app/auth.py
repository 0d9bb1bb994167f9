import hmac
from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from fastapi import Depends, Request

from tasktracker.app.config import Settings, get_settings
from tasktracker.app.core.errors import ApiError


@dataclass
class Credentials:
    username: Optional[str]
    password: Optional[str]


@runtime_checkable
class Authenticator(Protocol):
    def authenticate(self, credentials: Credentials) -> bool:
        """Return True when the credentials are accepted."""


def _matches(value: Optional[str], expected: str) -> bool:
    if value is None or not expected:
        return False
    return hmac.compare_digest(value.encode("utf-8"), expected.encode("utf-8"))


class StaticCredentialsAuthenticator:
    """Accepts exactly one configured username/password pair."""

    def __init__(self, username: str, password: str) -> None:
        self._username = username
        self._password = password

    def authenticate(self, credentials: Credentials) -> bool:
        # evaluate both so a wrong username costs the same as a wrong password
        user_ok = _matches(credentials.username, self._username)
        password_ok = _matches(credentials.password, self._password)
        return user_ok and password_ok


def get_authenticator(settings: Settings = Depends(get_settings)) -> Authenticator:
    return StaticCredentialsAuthenticator(settings.api_username, settings.api_password)


def credentials_from_request(request: Request, settings: Settings) -> Credentials:
    return Credentials(
        username=request.headers.get(settings.username_header),
        password=request.headers.get(settings.password_header),
    )


def require_credentials(
    request: Request,
    settings: Settings = Depends(get_settings),
    authenticator: Authenticator = Depends(get_authenticator),
) -> None:
    if not authenticator.authenticate(credentials_from_request(request, settings)):
        raise ApiError(401, "Unauthorized")
