"""Telemetry helpers.

This package emits structured client events through loguru.
"""

from .logger import ClientLogger

__all__ = ["ClientLogger"]
