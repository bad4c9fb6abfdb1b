"""Tests for audio persistence helpers."""

from pathlib import Path

import pytest

from fakeyou.errors import FileWriteError
from fakeyou.io.storage import AudioStore
from fakeyou.text.slug import slugify_voice_title


def test_audio_store_creates_parents_and_overwrites(tmp_path: Path) -> None:
    """Missing parent directories should be created and existing files replaced."""

    target = tmp_path / "nested" / "clip.wav"
    store = AudioStore()

    store.save_audio(target, b"old")
    written = store.save_audio(str(target), b"RIFF")

    assert written == target
    assert written.read_bytes() == b"RIFF"


def test_audio_store_maps_os_errors(tmp_path: Path) -> None:
    target_dir = tmp_path / "is-a-directory.wav"
    target_dir.mkdir()

    with pytest.raises(FileWriteError):
        AudioStore().save_audio(target_dir, b"RIFF")


def test_slugify_voice_title_is_ascii_and_non_empty() -> None:
    assert slugify_voice_title("Žluťoučký Kůň (v2)") == "zlutoucky-kun-v2"
    assert slugify_voice_title("???") == "voice"
