"""Low-level HTTP helpers for the FakeYou API.

Responsibilities:
- Own one cookie-persisting `requests.Session` per authenticated client.
- Funnel every GET/POST through one status check that maps HTTP 429 to
  `TooManyRequestsError` before the body is interpreted.
- Map transport failures to `RequestError` and JSON encode/decode failures to
  `SerializationError`, chaining the underlying cause.

Non-429 statuses are returned to the caller; only specific call sites (login)
interpret them.
"""

from __future__ import annotations

import json
import socket
from typing import Any

import requests

from .errors import RequestError, SerializationError, TooManyRequestsError


_RATE_LIMITED_STATUS = 429


class FakeYouHttp:
    """Blocking JSON/bytes HTTP helper bound to one session."""

    _MAX_ERROR_MESSAGE_CHARS = 180

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        timeout_seconds: float | None = 60.0,
    ) -> None:
        """Initialize the helper with an existing or fresh cookie-backed session."""

        self.session = session if session is not None else self.build_session()
        self.timeout_seconds = timeout_seconds

    @staticmethod
    def build_session() -> requests.Session:
        """Create a session whose cookie jar persists across calls."""

        session = requests.Session()
        session.headers.update({"Accept": "application/json"})
        return session

    def close(self) -> None:
        """Close the underlying HTTP session."""

        self.session.close()

    def get(self, url: str) -> requests.Response:
        """GET a URL and return the status-checked response."""

        return self._send("GET", url)

    def post_json(self, url: str, payload: Any) -> requests.Response:
        """POST a JSON-serialized payload and return the status-checked response."""

        body = self.encode_json(payload)
        return self._send(
            "POST",
            url,
            data=body,
            headers={"Content-Type": "application/json"},
        )

    def get_json(self, url: str) -> Any:
        """GET a URL and decode its body as JSON."""

        return self.decode_json(self.get(url))

    def get_bytes(self, url: str) -> bytes:
        """GET a URL and return the raw response payload."""

        response = self.get(url)
        try:
            return bytes(response.content)
        except requests.RequestException as exc:
            raise self._transport_error(exc) from exc

    def response_text(self, response: requests.Response) -> str:
        """Return the response body as text, mapping read failures to `RequestError`."""

        try:
            return response.text
        except requests.RequestException as exc:
            raise self._transport_error(exc) from exc

    def decode_json(self, response: requests.Response) -> Any:
        """Decode a response body as JSON, mapping parse failures to `SerializationError`."""

        text = self.response_text(response)
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise SerializationError(
                f"Error deserializing JSON: {self._short_message(str(exc))}"
            ) from exc

    @classmethod
    def encode_json(cls, payload: Any) -> str:
        """Serialize a payload to compact JSON, mapping failures to `SerializationError`."""

        try:
            return json.dumps(payload, separators=(",", ":"), allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise SerializationError(
                f"Error serializing JSON: {cls._short_message(str(exc))}"
            ) from exc

    def _send(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """Send one request and apply the shared rate-limit status check."""

        try:
            response = self.session.request(
                method,
                url,
                timeout=self.timeout_seconds,
                **kwargs,
            )
        except requests.RequestException as exc:
            raise self._transport_error(exc) from exc
        except TimeoutError as exc:
            raise RequestError("Request timed out.", failure_kind="timeout") from exc

        if response.status_code == _RATE_LIMITED_STATUS:
            raise TooManyRequestsError(status_code=_RATE_LIMITED_STATUS)
        return response

    @classmethod
    def _transport_error(cls, exc: Exception) -> RequestError:
        """Build a `RequestError` classified as timeout or generic transport failure."""

        if isinstance(exc, requests.Timeout | socket.timeout):
            return RequestError("Request timed out.", failure_kind="timeout")
        return RequestError(
            f"Error making request: {cls._short_message(str(exc))}",
            failure_kind="transport",
        )

    @classmethod
    def _short_message(cls, text: str) -> str:
        """Normalize and cap user-facing error message length."""

        compact = " ".join(text.split())
        if len(compact) <= cls._MAX_ERROR_MESSAGE_CHARS:
            return compact
        return f"{compact[: cls._MAX_ERROR_MESSAGE_CHARS - 1]}..."
