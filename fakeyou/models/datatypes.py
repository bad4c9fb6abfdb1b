"""Core datatypes shared across FakeYou client modules.

Responsibilities:
- Represent immutable catalog records (voices and categories).
- Represent typed request/response bodies for login and TTS job endpoints.
- Hold one self-consistent catalog snapshot per cache refresh.

Key types:
- `Voice`, `Category`, `CatalogSnapshot`, `LoginRequest`, `TtsJobRequest`,
  `TtsJobResponse`, and `TtsJobResult`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping
import uuid

from ..errors import SerializationError


@dataclass(frozen=True, slots=True)
class Voice:
    """A single synthesis voice from the FakeYou catalog.

    Attributes:
        title: Display name.
        model_token: Opaque model identifier used to submit jobs.
        category_tokens: Category identifiers the voice belongs to.
    """

    title: str
    model_token: str
    category_tokens: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class Category:
    """A category grouping FakeYou voices.

    Attributes:
        title: Display name.
        category_token: Opaque category identifier.
        model_type: Model type tag reported by the service.
    """

    title: str
    category_token: str
    model_type: str


@dataclass(frozen=True, slots=True)
class CatalogSnapshot:
    """Voices and categories fetched together by one cache refresh."""

    categories: tuple[Category, ...] = field(default_factory=tuple)
    voices: tuple[Voice, ...] = field(default_factory=tuple)
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True, slots=True)
class LoginRequest:
    """Login request body for the session endpoint."""

    username_or_email: str
    password: str

    def to_payload(self) -> dict[str, str]:
        """Return the JSON-serializable login body."""

        return {
            "username_or_email": self.username_or_email,
            "password": self.password,
        }

    def __repr__(self) -> str:
        return f"LoginRequest(username_or_email={self.username_or_email!r}, password='***')"


@dataclass(frozen=True, slots=True)
class TtsJobRequest:
    """TTS inference job submission body.

    Attributes:
        uuid_idempotency_token: Client-generated token the service uses to
            deduplicate retried submissions.
        tts_model_token: Target voice model token.
        inference_text: Text to synthesize.
    """

    uuid_idempotency_token: str
    tts_model_token: str
    inference_text: str

    @classmethod
    def create(cls, tts_model_token: str, inference_text: str) -> TtsJobRequest:
        """Build a request with a freshly generated idempotency token."""

        return cls(
            uuid_idempotency_token=str(uuid.uuid4()),
            tts_model_token=tts_model_token,
            inference_text=inference_text,
        )

    def to_payload(self) -> dict[str, str]:
        """Return the JSON-serializable job submission body."""

        return {
            "uuid_idempotency_token": self.uuid_idempotency_token,
            "tts_model_token": self.tts_model_token,
            "inference_text": self.inference_text,
        }


@dataclass(frozen=True, slots=True)
class TtsJobResponse:
    """Decoded job submission response."""

    success: bool
    inference_job_token: str
    inference_job_token_type: str

    @classmethod
    def from_payload(cls, payload: Any) -> TtsJobResponse:
        """Decode a submission response, raising `SerializationError` on shape mismatch."""

        if not isinstance(payload, Mapping):
            raise SerializationError("TTS job response must be a JSON object.")

        success = payload.get("success")
        job_token = payload.get("inference_job_token")
        token_type = payload.get("inference_job_token_type")
        if not isinstance(success, bool):
            raise SerializationError("TTS job response field `success` must be a boolean.")
        if not isinstance(job_token, str):
            raise SerializationError(
                "TTS job response field `inference_job_token` must be a string."
            )
        if not isinstance(token_type, str):
            raise SerializationError(
                "TTS job response field `inference_job_token_type` must be a string."
            )
        return cls(
            success=success,
            inference_job_token=job_token,
            inference_job_token_type=token_type,
        )


@dataclass(frozen=True, slots=True)
class TtsJobResult:
    """Resolved output of a completed TTS job.

    Attributes:
        job_token: Job token that was polled.
        audio_path: Relative bucket path reported by the service.
        audio_url: Absolute URL of the generated audio.
    """

    job_token: str
    audio_path: str
    audio_url: str
