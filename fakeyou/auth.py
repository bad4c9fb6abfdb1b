"""Login flow producing an authenticated `FakeYouClient`.

Responsibilities:
- Create a cookie-persisting HTTP session.
- Post a typed login request and map the response status/body to errors.
- Build the client, whose construction populates the catalog cache.
"""

from __future__ import annotations

import requests

from .client import FakeYouClient
from .config import FakeYouConfig
from .errors import (
    FakeYouError,
    InvalidCredentialsError,
    UndefinedResponseError,
)
from .http import FakeYouHttp
from .models.datatypes import LoginRequest
from .telemetry.logger import ClientLogger


LOGIN_SUCCESS_BODY = '{"success":true}'


def authenticate(
    username: str,
    password: str,
    *,
    config: FakeYouConfig | None = None,
    session: requests.Session | None = None,
    run_logger: ClientLogger | None = None,
) -> FakeYouClient:
    """Log in with a username/email and password and return a ready client.

    Raises:
        InvalidCredentialsError: HTTP 401, or HTTP 200 with an unexpected body.
        TooManyRequestsError: HTTP 429.
        UndefinedResponseError: Any other HTTP status.
        RequestError: Transport failure.
    """

    resolved_config = config if config is not None else FakeYouConfig()
    resolved_logger = run_logger if run_logger is not None else ClientLogger()
    endpoints = resolved_config.endpoints()
    http = FakeYouHttp(session=session, timeout_seconds=resolved_config.timeout_seconds)

    try:
        _login(http, endpoints.login_url, LoginRequest(username, password))
        resolved_logger.log_event("login", "complete")
        return FakeYouClient(http, resolved_config, run_logger=resolved_logger)
    except FakeYouError as exc:
        resolved_logger.log_failure("login", type(exc).__name__)
        if session is None:
            http.close()
        raise


def _login(http: FakeYouHttp, login_url: str, request: LoginRequest) -> None:
    """Post credentials and raise unless the success marker body comes back."""

    # HTTP 429 is raised as TooManyRequestsError inside post_json.
    response = http.post_json(login_url, request.to_payload())
    status_code = response.status_code
    if status_code == 200:
        if http.response_text(response) != LOGIN_SUCCESS_BODY:
            raise InvalidCredentialsError(status_code=status_code)
        return
    if status_code == 401:
        raise InvalidCredentialsError(status_code=status_code)
    raise UndefinedResponseError(
        f"Undefined HTTP response from login (HTTP {status_code}).",
        status_code=status_code,
    )
