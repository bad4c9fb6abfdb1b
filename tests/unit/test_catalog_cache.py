"""Unit tests for catalog decoding, cache refresh, and cached queries."""

from __future__ import annotations

from datetime import datetime

import pytest

from fakeyou.catalog import decode_categories, decode_voices
from fakeyou.client import FakeYouClient
from fakeyou.errors import ImproperResponseError, SerializationError
from fakeyou.http import FakeYouHttp
from fakeyou.models.datatypes import Category, Voice
from tests.fakes import (
    CATEGORIES_URL,
    VOICES_URL,
    MockSession,
    categories_payload,
    json_response,
    text_response,
    voices_payload,
)


def test_decode_categories_and_voices_from_listing_payloads() -> None:
    """Listing payloads should decode into immutable records in service order."""

    categories = decode_categories(categories_payload())
    voices = decode_voices(voices_payload())

    assert categories[0] == Category(
        title="Cartoons", category_token="CAT:cartoons", model_type="tts"
    )
    assert voices[1] == Voice(
        title="Mouse",
        model_token="TM:mouse",
        category_tokens=("CAT:cartoons", "CAT:games"),
    )


@pytest.mark.parametrize(
    "entry",
    [
        {"category_token": "CAT:a", "model_type": "tts"},
        {"name": 3, "category_token": "CAT:a", "model_type": "tts"},
        {"name": "A", "category_token": None, "model_type": "tts"},
        {"name": "A", "category_token": "CAT:a"},
        "not-an-object",
    ],
)
def test_decode_categories_rejects_malformed_entries(entry: object) -> None:
    with pytest.raises(ImproperResponseError):
        decode_categories({"categories": [entry]})


@pytest.mark.parametrize(
    "entry",
    [
        {"title": "A", "model_token": "TM:a"},
        {"title": "A", "model_token": "TM:a", "category_tokens": "CAT:a"},
        {"title": "A", "model_token": "TM:a", "category_tokens": ["CAT:a", 7]},
        {"title": None, "model_token": "TM:a", "category_tokens": []},
        {"title": "A", "model_token": 1, "category_tokens": []},
    ],
)
def test_decode_voices_rejects_malformed_entries(entry: object) -> None:
    with pytest.raises(ImproperResponseError):
        decode_voices({"models": [entry]})


def test_decode_rejects_missing_top_level_arrays() -> None:
    with pytest.raises(ImproperResponseError):
        decode_categories({"success": True})
    with pytest.raises(ImproperResponseError):
        decode_voices({"models": {"title": "A"}})


def test_list_queries_return_copies(client: FakeYouClient) -> None:
    """Mutating returned lists should not change the cached snapshot."""

    voices = client.list_voices()
    categories = client.list_categories()
    voices.clear()
    categories.clear()

    assert len(client.list_voices()) == 3
    assert len(client.list_categories()) == 2


def test_list_voices_by_category_accepts_object_or_token(client: FakeYouClient) -> None:
    """Category objects and raw tokens should select the same voices."""

    games = next(c for c in client.list_categories() if c.category_token == "CAT:games")

    by_object = client.list_voices_by_category(games)
    by_token = client.list_voices_by_category("CAT:games")
    by_token_method = client.list_voices_by_category_token("CAT:games")

    assert [voice.model_token for voice in by_object] == ["TM:narrator", "TM:mouse"]
    assert by_object == by_token == by_token_method


def test_list_voices_by_category_does_not_validate_tokens(client: FakeYouClient) -> None:
    """Voices may reference categories absent from the category cache."""

    assert [voice.title for voice in client.list_voices_by_category("CAT:missing")] == [
        "Unsorted"
    ]
    assert client.list_voices_by_category("CAT:nope") == []


def test_queries_on_empty_cache_return_empty_lists() -> None:
    session = MockSession()
    session.add("GET", CATEGORIES_URL, json_response({"categories": []}))
    session.add("GET", VOICES_URL, json_response({"models": []}))

    client = FakeYouClient(FakeYouHttp(session=session))  # type: ignore[arg-type]

    assert client.list_voices() == []
    assert client.list_categories() == []
    assert client.list_voices_by_category("CAT:games") == []
    assert client.find_voice("TM:narrator") is None


def test_find_voice_by_model_token(client: FakeYouClient) -> None:
    voice = client.find_voice("TM:mouse")

    assert voice is not None
    assert voice.title == "Mouse"


def test_invalidate_cache_replaces_snapshot_wholesale(
    client: FakeYouClient, session: MockSession
) -> None:
    """A successful refresh should replace, not merge, both cached collections."""

    first_generated = client.cache_generated
    session.add(
        "GET",
        CATEGORIES_URL,
        json_response({"categories": [{"name": "New", "category_token": "CAT:new", "model_type": "vc"}]}),
    )
    session.add(
        "GET",
        VOICES_URL,
        json_response({"models": [{"title": "Fresh", "model_token": "TM:fresh", "category_tokens": []}]}),
    )

    client.invalidate_cache()

    assert [c.category_token for c in client.list_categories()] == ["CAT:new"]
    assert [v.model_token for v in client.list_voices()] == ["TM:fresh"]
    assert isinstance(client.cache_generated, datetime)
    assert client.cache_generated >= first_generated
    assert client.cache_generated.tzinfo is not None


def test_invalidate_cache_keeps_previous_snapshot_on_malformed_voice(
    client: FakeYouClient, session: MockSession
) -> None:
    """A bad voice entry should leave both voices and categories untouched."""

    before_voices = client.list_voices()
    before_categories = client.list_categories()
    before_generated = client.cache_generated
    session.add(
        "GET",
        CATEGORIES_URL,
        json_response({"categories": [{"name": "New", "category_token": "CAT:new", "model_type": "vc"}]}),
    )
    session.add(
        "GET",
        VOICES_URL,
        json_response({"models": [{"title": "Broken", "model_token": "TM:x", "category_tokens": [1]}]}),
    )

    with pytest.raises(ImproperResponseError):
        client.invalidate_cache()

    assert client.list_voices() == before_voices
    assert client.list_categories() == before_categories
    assert client.cache_generated == before_generated


def test_invalidate_cache_keeps_previous_snapshot_on_malformed_category(
    client: FakeYouClient, session: MockSession
) -> None:
    before_voices = client.list_voices()
    session.add("GET", CATEGORIES_URL, json_response({"categories": [{"name": "Only name"}]}))

    with pytest.raises(ImproperResponseError):
        client.invalidate_cache()

    assert client.list_voices() == before_voices
    assert VOICES_URL not in session.urls()[2:]


def test_invalidate_cache_keeps_previous_snapshot_on_invalid_json(
    client: FakeYouClient, session: MockSession
) -> None:
    before_categories = client.list_categories()
    session.add("GET", CATEGORIES_URL, json_response(categories_payload()))
    session.add("GET", VOICES_URL, text_response("{truncated"))

    with pytest.raises(SerializationError):
        client.invalidate_cache()

    assert client.list_categories() == before_categories
