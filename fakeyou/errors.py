"""Domain exceptions for FakeYou client calls and CLI diagnostics.

Every client failure is a `FakeYouError` subclass with a stable `failure_kind`
token so callers can branch without string matching. All errors are terminal
for the call that raised them.
"""

from __future__ import annotations


class FakeYouError(RuntimeError):
    """Base error for FakeYou API and local persistence failures."""

    default_message = "FakeYou request failed."
    default_failure_kind = "unknown"

    def __init__(
        self,
        message: str | None = None,
        *,
        failure_kind: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize error metadata for call-site and CLI diagnostics."""

        super().__init__(message or self.default_message)
        self.failure_kind = failure_kind or self.default_failure_kind
        self.status_code = status_code


class InvalidCredentialsError(FakeYouError):
    """Raised when the login endpoint rejects the supplied credentials."""

    default_message = "Invalid credentials supplied."
    default_failure_kind = "invalid_credentials"


class UndefinedResponseError(FakeYouError):
    """Raised when the login endpoint answers with an unexpected HTTP status."""

    default_message = "Undefined HTTP response."
    default_failure_kind = "undefined_response"


class TooManyRequestsError(FakeYouError):
    """Raised for any HTTP 429 response."""

    default_message = "Denied due to too many requests."
    default_failure_kind = "rate_limited"


class ImproperResponseError(FakeYouError):
    """Raised when a JSON payload does not have the expected structure."""

    default_message = "Improper response structure."
    default_failure_kind = "improper_response"


class JobFailedError(FakeYouError):
    """Raised when a TTS job reaches a terminal failure state."""

    default_message = "Job failed."
    default_failure_kind = "job_failed"


class JobTimeoutError(FakeYouError):
    """Raised when a bounded poll policy runs out of attempts or time."""

    default_message = "Job did not finish within the poll limits."
    default_failure_kind = "job_timeout"


class FileWriteError(FakeYouError):
    """Raised when generated audio cannot be written to disk."""

    default_message = "File read/write error."
    default_failure_kind = "io"


class RequestError(FakeYouError):
    """Raised for transport failures; the cause is chained as `__cause__`."""

    default_message = "Error making request."
    default_failure_kind = "transport"


class SerializationError(FakeYouError):
    """Raised when JSON cannot be encoded or decoded; the cause is chained."""

    default_message = "Error serializing JSON."
    default_failure_kind = "serialization"


class CommandStageError(RuntimeError):
    """Raised when a specific CLI stage fails before or around client calls."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped command error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint
