"""Deterministic slug helpers for filesystem-safe audio filenames."""

from __future__ import annotations

import re
import unicodedata


def slugify_voice_title(value: str) -> str:
    """Return a filesystem-safe ASCII slug for a voice title."""

    normalized = unicodedata.normalize("NFKD", value)
    ascii_only = normalized.encode("ascii", "ignore").decode("ascii")
    lowered = ascii_only.lower().strip()
    collapsed = re.sub(r"[^a-z0-9]+", "-", lowered)
    slug = collapsed.strip("-")
    return slug or "voice"
