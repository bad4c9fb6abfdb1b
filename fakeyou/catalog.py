"""Catalog payload decoding for voice and category listings.

Responsibilities:
- Decode category and voice listing payloads into immutable records.
- Reject the whole listing on the first malformed entry.
- Filter voices by category token without validating the token exists.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from .errors import ImproperResponseError
from .models.datatypes import Category, Voice


def _listing_entries(payload: Any, key: str) -> list[Any]:
    """Return the top-level array `key` from a listing payload."""

    entries = payload.get(key) if isinstance(payload, Mapping) else None
    if not isinstance(entries, list):
        raise ImproperResponseError(f"Listing response is missing `{key}` array.")
    return entries


def _required_string(entry: Any, key: str, listing: str) -> str:
    """Read a required string field from one listing entry."""

    value = entry.get(key) if isinstance(entry, Mapping) else None
    if not isinstance(value, str):
        raise ImproperResponseError(f"{listing} entry field `{key}` must be a string.")
    return value


def decode_categories(payload: Any) -> tuple[Category, ...]:
    """Decode a `categories` listing payload."""

    return tuple(
        Category(
            title=_required_string(entry, "name", "Category"),
            category_token=_required_string(entry, "category_token", "Category"),
            model_type=_required_string(entry, "model_type", "Category"),
        )
        for entry in _listing_entries(payload, "categories")
    )


def _decode_voice(entry: Any) -> Voice:
    raw_tokens = entry.get("category_tokens") if isinstance(entry, Mapping) else None
    if not isinstance(raw_tokens, list):
        raise ImproperResponseError("Voice entry field `category_tokens` must be an array.")
    if not all(isinstance(token, str) for token in raw_tokens):
        raise ImproperResponseError("Voice entry `category_tokens` must contain only strings.")
    return Voice(
        title=_required_string(entry, "title", "Voice"),
        model_token=_required_string(entry, "model_token", "Voice"),
        category_tokens=tuple(raw_tokens),
    )


def decode_voices(payload: Any) -> tuple[Voice, ...]:
    """Decode a `models` listing payload."""

    return tuple(_decode_voice(entry) for entry in _listing_entries(payload, "models"))


def voices_in_category(voices: Iterable[Voice], category_token: str) -> list[Voice]:
    """Return voices whose category tokens contain `category_token`, in order."""

    return [voice for voice in voices if category_token in voice.category_tokens]
