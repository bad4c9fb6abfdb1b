"""Structured client event logging.

Responsibilities:
- Emit concise, deterministic event lines for login, cache, and job activity.
- Route every line through `loguru` so applications control sinks and levels.
- Keep secrets and synthesized text out of log context.
"""

from __future__ import annotations

from typing import TextIO

from loguru import logger as _loguru_logger


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


class ClientLogger:
    """Emit deterministic event lines for FakeYou client activity."""

    def __init__(self, sink: TextIO | None = None, level: str = "INFO") -> None:
        """Initialize the logger, replacing loguru sinks only when `sink` is given."""

        self._sink = sink
        if sink is not None:
            _loguru_logger.remove()
            _loguru_logger.add(sink, format="{message}", level=level, colorize=False)
            _loguru_logger.enable("fakeyou")

    def _emit(self, level: str, event: str, stage: str, **context: object) -> None:
        """Emit one structured runtime log line."""

        line = f"[fakeyou] level={level} stage={stage} event={event}{_format_context(context)}"
        _loguru_logger.log(level, line)

    def log_event(self, stage: str, event: str, **context: object) -> None:
        """Emit an informational event for a client stage."""

        self._emit("INFO", event, stage, **context)

    def log_debug(self, stage: str, event: str, **context: object) -> None:
        """Emit a debug-level event, used for per-poll status lines."""

        self._emit("DEBUG", event, stage, **context)

    def log_failure(self, stage: str, error_type: str) -> None:
        """Emit a stage-failure event without sensitive payload details."""

        self._emit("ERROR", "failure", stage, error_type=error_type)
