"""Local persistence for generated audio.

Responsibilities:
- Write audio payload bytes to a caller-selected path, overwriting any file.
- Map filesystem failures to `FileWriteError`.
"""

from __future__ import annotations

from pathlib import Path

from ..errors import FileWriteError


class AudioStore:
    """Filesystem writer for generated audio payloads."""

    def save_audio(self, path: Path | str, data: bytes) -> Path:
        """Save audio bytes, creating parent directories, and return the final path."""

        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise FileWriteError(f"Failed to write audio file `{target}`: {exc}") from exc
        return target
