"""Authenticated FakeYou session client.

Responsibilities:
- Hold the authenticated HTTP session and one cached catalog snapshot.
- Answer voice/category queries from the cache without network calls.
- Refresh the cache all-or-nothing.
- Run TTS jobs and return or persist the generated audio.

Key types:
- `FakeYouClient`: the client returned by `fakeyou.authenticate`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from .catalog import decode_categories, decode_voices, voices_in_category
from .config import FakeYouConfig
from .http import FakeYouHttp
from .io.storage import AudioStore
from .jobs import JobRunner, PollPolicy
from .models.datatypes import CatalogSnapshot, Category, Voice
from .telemetry.logger import ClientLogger


class FakeYouClient:
    """An authenticated FakeYou client that caches the catalog and generates audio.

    Construction performs a full cache refresh; any refresh failure propagates
    and no client is returned. The client is not thread-safe.
    """

    def __init__(
        self,
        http: FakeYouHttp,
        config: FakeYouConfig | None = None,
        *,
        poll_policy: PollPolicy | None = None,
        run_logger: ClientLogger | None = None,
        audio_store: AudioStore | None = None,
    ) -> None:
        self.config = config if config is not None else FakeYouConfig()
        self.endpoints = self.config.endpoints()
        self.http = http
        self.run_logger = run_logger if run_logger is not None else ClientLogger()
        self.audio_store = audio_store if audio_store is not None else AudioStore()
        self.job_runner = JobRunner(
            http=http,
            endpoints=self.endpoints,
            policy=poll_policy if poll_policy is not None else self.config.poll_policy(),
            run_logger=self.run_logger,
        )
        self._snapshot = CatalogSnapshot()
        self.invalidate_cache()

    def __enter__(self) -> FakeYouClient:
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""

        self.http.close()

    @property
    def cache_generated(self) -> datetime:
        """UTC time of the last successful cache refresh."""

        return self._snapshot.generated_at

    def list_voices(self) -> list[Voice]:
        """Return a copy of all cached voices."""

        return list(self._snapshot.voices)

    def list_categories(self) -> list[Category]:
        """Return a copy of all cached categories."""

        return list(self._snapshot.categories)

    def list_voices_by_category(self, category: Category | str) -> list[Voice]:
        """Return cached voices belonging to a category object or raw category token."""

        token = category.category_token if isinstance(category, Category) else category
        return self.list_voices_by_category_token(token)

    def list_voices_by_category_token(self, category_token: str) -> list[Voice]:
        """Return cached voices whose category tokens contain `category_token`."""

        return voices_in_category(self._snapshot.voices, category_token)

    def find_voice(self, model_token: str) -> Voice | None:
        """Return the cached voice with `model_token`, if any."""

        for voice in self._snapshot.voices:
            if voice.model_token == model_token:
                return voice
        return None

    def invalidate_cache(self) -> None:
        """Refresh cached categories and voices, replacing the snapshot atomically.

        On any fetch or decode failure the previous snapshot is kept.
        """

        categories = decode_categories(self.http.get_json(self.endpoints.categories_url))
        voices = decode_voices(self.http.get_json(self.endpoints.voices_url))
        self._snapshot = CatalogSnapshot(
            categories=categories,
            voices=voices,
            generated_at=datetime.now(timezone.utc),
        )
        self.run_logger.log_event(
            "cache",
            "refreshed",
            categories=len(categories),
            voices=len(voices),
        )

    def generate_bytes(
        self,
        text: str,
        voice: Voice,
        on_status: Callable[[str], None] | None = None,
    ) -> bytes:
        """Run a TTS job for `voice` and return the audio payload."""

        return self.generate_bytes_from_token(text, voice.model_token, on_status=on_status)

    def generate_bytes_from_token(
        self,
        text: str,
        tts_model_token: str,
        on_status: Callable[[str], None] | None = None,
    ) -> bytes:
        """Run a TTS job for a known model token and return the audio payload."""

        return self.job_runner.run(text, tts_model_token, on_status=on_status)

    def generate_file(
        self,
        text: str,
        voice: Voice,
        filename: Path | str,
        on_status: Callable[[str], None] | None = None,
    ) -> Path:
        """Run a TTS job for `voice` and write the audio to `filename`."""

        return self.generate_file_from_token(
            text, voice.model_token, filename, on_status=on_status
        )

    def generate_file_from_token(
        self,
        text: str,
        tts_model_token: str,
        filename: Path | str,
        on_status: Callable[[str], None] | None = None,
    ) -> Path:
        """Run a TTS job for a known model token and write the audio to `filename`.

        Raises:
            FileWriteError: If the audio cannot be written.
        """

        data = self.generate_bytes_from_token(text, tts_model_token, on_status=on_status)
        path = self.audio_store.save_audio(filename, data)
        self.run_logger.log_event("write", "complete", path=path, size_bytes=len(data))
        return path
