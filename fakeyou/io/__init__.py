"""Input/output components for the FakeYou client."""

from .storage import AudioStore

__all__ = ["AudioStore"]
