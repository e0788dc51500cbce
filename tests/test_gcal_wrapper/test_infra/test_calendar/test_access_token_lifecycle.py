"""Testes do ciclo de vida do token OAuth do usuario."""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from typing import Any

import pytest
from google.auth.exceptions import RefreshError, TransportError
from google.oauth2.credentials import Credentials as UserCredentials
from google_auth_oauthlib.flow import Flow

from gcal_wrapper.domain.access import AccessStrategy
from gcal_wrapper.infra.calendar.credential_resolver import CredentialResolver
from utils.errors import AuthenticationRequiredError, RemoteServiceError

TOKEN_URI = "https://oauth2.googleapis.com/token"


def _user_token(access_token: str, expiry: datetime) -> str:
    return UserCredentials(
        token=access_token,
        refresh_token="refresh-1",
        token_uri=TOKEN_URI,
        client_id="oauth-client.apps.googleusercontent.com",
        client_secret="oauth-secret",
        expiry=expiry,
    ).to_json()


@pytest.fixture
def resolver(basic_config: dict[str, Any], oauth_fields: dict[str, Any]) -> CredentialResolver:
    return CredentialResolver({**basic_config, **oauth_fields})


@pytest.fixture
def refresh_calls(monkeypatch: pytest.MonkeyPatch) -> list[object]:
    calls: list[object] = []

    def _fake_refresh(self: UserCredentials, request: object) -> None:
        calls.append(request)
        self.token = "refreshed-access"
        self.expiry = datetime(2999, 1, 1)

    monkeypatch.setattr(UserCredentials, "refresh", _fake_refresh)
    return calls


@pytest.fixture
def exchanged_codes(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    codes: list[str] = []
    issued = UserCredentials(
        token="fresh-access",
        refresh_token="refresh-2",
        token_uri=TOKEN_URI,
        client_id="oauth-client.apps.googleusercontent.com",
        client_secret="oauth-secret",
        expiry=datetime(2999, 1, 1),
    )

    def _fake_fetch_token(self: Flow, **kwargs: Any) -> dict[str, Any]:
        codes.append(kwargs["code"])
        return {"access_token": "fresh-access"}

    monkeypatch.setattr(Flow, "fetch_token", _fake_fetch_token)
    monkeypatch.setattr(Flow, "credentials", property(lambda self: issued))
    return codes


def test_no_token_and_no_code_returns_none_without_io(
    resolver: CredentialResolver,
    refresh_calls: list[object],
    exchanged_codes: list[str],
) -> None:
    assert resolver.acquire_access_token(None) is None
    assert resolver.acquire_access_token("") == ""
    assert refresh_calls == []
    assert exchanged_codes == []


def test_auth_code_is_exchanged_once(
    resolver: CredentialResolver,
    exchanged_codes: list[str],
) -> None:
    token = resolver.acquire_access_token(None, "auth-code-123")

    assert exchanged_codes == ["auth-code-123"]
    assert token is not None
    assert json.loads(token)["token"] == "fresh-access"
    assert resolver.get_handle(AccessStrategy.USER_DELEGATED).credentials is None
    assert resolver.bind_user_token(token).is_access_token_expired() is False


def test_valid_token_is_returned_unchanged(
    resolver: CredentialResolver,
    refresh_calls: list[object],
) -> None:
    token = _user_token("still-valid", datetime(2999, 1, 1))

    assert resolver.acquire_access_token(token) == token
    assert refresh_calls == []


def test_expired_token_is_refreshed_once(
    resolver: CredentialResolver,
    refresh_calls: list[object],
) -> None:
    token = _user_token("expired", datetime.now() - timedelta(days=1))

    refreshed = resolver.acquire_access_token(token)

    assert len(refresh_calls) == 1
    assert refreshed is not None
    assert refreshed != token
    assert json.loads(refreshed)["token"] == "refreshed-access"


def test_malformed_token_requires_authentication(resolver: CredentialResolver) -> None:
    with pytest.raises(AuthenticationRequiredError):
        resolver.acquire_access_token("not-a-token")


@pytest.mark.parametrize(
    "error",
    [
        RefreshError("invalid_grant"),
        TransportError("connection reset"),
        ConnectionError("network unreachable"),
    ],
)
def test_refresh_failure_surfaces_as_remote_error(
    resolver: CredentialResolver,
    monkeypatch: pytest.MonkeyPatch,
    error: Exception,
) -> None:
    def _failing_refresh(self: UserCredentials, request: object) -> None:
        _ = request
        raise error

    monkeypatch.setattr(UserCredentials, "refresh", _failing_refresh)
    token = _user_token("expired", datetime(2020, 1, 1))

    with pytest.raises(RemoteServiceError) as exc_info:
        resolver.acquire_access_token(token)

    assert exc_info.value.__cause__ is error


@pytest.mark.parametrize(
    "error",
    [
        Warning(
            'Scope has changed from "https://www.googleapis.com/auth/calendar" to '
            '"https://www.googleapis.com/auth/drive.file '
            'https://www.googleapis.com/auth/calendar".'
        ),
        ConnectionError("network unreachable"),
    ],
)
def test_code_exchange_failure_surfaces_as_remote_error(
    resolver: CredentialResolver,
    monkeypatch: pytest.MonkeyPatch,
    error: Exception,
) -> None:
    def _failing_fetch_token(self: Flow, **kwargs: Any) -> dict[str, Any]:
        _ = kwargs
        raise error

    monkeypatch.setattr(Flow, "fetch_token", _failing_fetch_token)

    with pytest.raises(RemoteServiceError) as exc_info:
        resolver.acquire_access_token(None, "auth-code-123")

    assert exc_info.value.__cause__ is error


def test_user_tokens_bind_to_separate_handles(resolver: CredentialResolver) -> None:
    ana = resolver.bind_user_token(_user_token("token-ana", datetime(2999, 1, 1)))
    bia = resolver.bind_user_token(_user_token("token-bia", datetime(2999, 1, 1)))

    assert ana is not bia
    assert ana.strategy is bia.strategy is AccessStrategy.USER_DELEGATED
    assert ana.credentials.token == "token-ana"
    assert bia.credentials.token == "token-bia"
    assert resolver.get_handle(AccessStrategy.USER_DELEGATED).credentials is None


def test_refresh_does_not_touch_shared_handle(
    resolver: CredentialResolver,
    refresh_calls: list[object],
) -> None:
    resolver.acquire_access_token(_user_token("expired", datetime(2020, 1, 1)))

    assert len(refresh_calls) == 1
    assert resolver.get_handle(AccessStrategy.USER_DELEGATED).credentials is None
