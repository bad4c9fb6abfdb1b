"""Shared typed data models for the FakeYou client.

This package contains dataclasses used across client modules to avoid
cross-module coupling and circular imports.
"""

from .datatypes import (
    CatalogSnapshot,
    Category,
    LoginRequest,
    TtsJobRequest,
    TtsJobResponse,
    TtsJobResult,
    Voice,
)

__all__ = [
    "CatalogSnapshot",
    "Category",
    "LoginRequest",
    "TtsJobRequest",
    "TtsJobResponse",
    "TtsJobResult",
    "Voice",
]
