"""Basic smoke tests for project wiring.

These tests verify only import-level behavior and config defaults.
"""

import fakeyou
from fakeyou.config import FakeYouConfig


def test_public_api_exports_authenticate_and_errors() -> None:
    """Package root should expose the login entry point and error taxonomy."""

    assert callable(fakeyou.authenticate)
    assert issubclass(fakeyou.TooManyRequestsError, fakeyou.FakeYouError)
    assert issubclass(fakeyou.RequestError, RuntimeError)
    assert fakeyou.__version__


def test_config_dataclass_defaults() -> None:
    """Config defaults should target the public FakeYou endpoints."""

    endpoints = FakeYouConfig().endpoints()
    assert endpoints.voices_url == "https://api.fakeyou.com/tts/list"
    assert endpoints.job_url("JTINF:1") == "https://api.fakeyou.com/tts/job/JTINF:1"
    assert (
        endpoints.audio_url("/weights/x.wav")
        == "https://storage.googleapis.com/vocodes-public/weights/x.wav"
    )
