"""Unit tests for the login flow and status mapping."""

from __future__ import annotations

import json

import pytest
import requests

from fakeyou.auth import authenticate
from fakeyou.client import FakeYouClient
from fakeyou.config import FakeYouConfig
from fakeyou.errors import (
    ImproperResponseError,
    InvalidCredentialsError,
    RequestError,
    TooManyRequestsError,
    UndefinedResponseError,
)
from tests.fakes import (
    CATEGORIES_URL,
    LOGIN_URL,
    VOICES_URL,
    MockSession,
    add_catalog,
    json_response,
    text_response,
)


def test_authenticate_success_populates_cache_before_returning() -> None:
    """Successful login should return a client with voices and categories cached."""

    session = MockSession().add("POST", LOGIN_URL, text_response('{"success":true}'))
    add_catalog(session)

    client = authenticate("user@example.com", "pa\"ss", session=session)  # type: ignore[arg-type]

    assert isinstance(client, FakeYouClient)
    assert len(client.list_categories()) == 2
    assert len(client.list_voices()) == 3
    assert session.urls() == [LOGIN_URL, CATEGORIES_URL, VOICES_URL]


def test_authenticate_sends_typed_json_login_body() -> None:
    """Login body should be proper JSON even when credentials need escaping."""

    session = MockSession().add("POST", LOGIN_URL, text_response('{"success":true}'))
    add_catalog(session)

    authenticate('we"ird\\user', 'p"w', session=session)  # type: ignore[arg-type]

    _, _, kwargs = session.calls[0]
    assert json.loads(kwargs["data"]) == {
        "username_or_email": 'we"ird\\user',
        "password": 'p"w',
    }


@pytest.mark.parametrize(
    "body",
    ['{"success":false}', '{"success": true}', "", '{"success":true,"x":1}'],
)
def test_authenticate_200_with_other_body_is_invalid_credentials(body: str) -> None:
    """Only the exact success marker body counts as a successful login."""

    session = MockSession().add("POST", LOGIN_URL, text_response(body))

    with pytest.raises(InvalidCredentialsError):
        authenticate("user", "bad", session=session)  # type: ignore[arg-type]

    assert session.urls() == [LOGIN_URL]


def test_authenticate_401_is_invalid_credentials() -> None:
    session = MockSession().add("POST", LOGIN_URL, text_response("", status_code=401))

    with pytest.raises(InvalidCredentialsError) as exc_info:
        authenticate("user", "bad", session=session)  # type: ignore[arg-type]

    assert exc_info.value.status_code == 401


def test_authenticate_429_is_rate_limited() -> None:
    session = MockSession().add("POST", LOGIN_URL, text_response("", status_code=429))

    with pytest.raises(TooManyRequestsError):
        authenticate("user", "pw", session=session)  # type: ignore[arg-type]


@pytest.mark.parametrize("status_code", [201, 302, 403, 500, 503])
def test_authenticate_other_status_is_undefined_response(status_code: int) -> None:
    """Statuses other than 200/401/429 should yield the undefined-response error."""

    session = MockSession().add("POST", LOGIN_URL, text_response("", status_code=status_code))

    with pytest.raises(UndefinedResponseError) as exc_info:
        authenticate("user", "pw", session=session)  # type: ignore[arg-type]

    assert exc_info.value.status_code == status_code


def test_authenticate_cache_failure_is_fatal() -> None:
    """A malformed catalog during construction should prevent any client from returning."""

    session = MockSession().add("POST", LOGIN_URL, text_response('{"success":true}'))
    session.add("GET", CATEGORIES_URL, json_response({"categories": [{"name": "x"}]}))

    with pytest.raises(ImproperResponseError):
        authenticate("user", "pw", session=session)  # type: ignore[arg-type]


def test_authenticate_cache_rate_limit_is_fatal() -> None:
    session = MockSession().add("POST", LOGIN_URL, text_response('{"success":true}'))
    session.add("GET", CATEGORIES_URL, text_response("", status_code=429))

    with pytest.raises(TooManyRequestsError):
        authenticate("user", "pw", session=session)  # type: ignore[arg-type]


def test_authenticate_uses_configured_api_base_url() -> None:
    """Endpoints should be derived from the configured API base URL."""

    base = "https://staging.example.test/"
    session = MockSession()
    session.add("POST", "https://staging.example.test/login", text_response('{"success":true}'))
    session.add(
        "GET",
        "https://staging.example.test/category/list/tts",
        json_response({"categories": []}),
    )
    session.add("GET", "https://staging.example.test/tts/list", json_response({"models": []}))

    client = authenticate(
        "user",
        "pw",
        config=FakeYouConfig(api_base_url=base),
        session=session,  # type: ignore[arg-type]
    )

    assert client.list_voices() == []


def test_authenticate_transport_failure_is_request_error() -> None:
    session = MockSession().add("POST", LOGIN_URL, requests.ConnectionError("down"))

    with pytest.raises(RequestError):
        authenticate("user", "pw", session=session)  # type: ignore[arg-type]
