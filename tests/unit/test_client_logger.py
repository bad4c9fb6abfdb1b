"""Unit tests for structured client event logging."""

from __future__ import annotations

import io

from fakeyou.telemetry.logger import ClientLogger


def test_client_logger_writes_sorted_sanitized_context() -> None:
    sink = io.StringIO()
    run_logger = ClientLogger(sink=sink)

    run_logger.log_event("poll", "complete", job_token="JTINF:1", attempts=3, note="a b")
    run_logger.log_failure("login", "InvalidCredentialsError")

    lines = sink.getvalue().splitlines()
    assert lines == [
        "[fakeyou] level=INFO stage=poll event=complete attempts=3 job_token=JTINF:1 note=a_b",
        "[fakeyou] level=ERROR stage=login event=failure error_type=InvalidCredentialsError",
    ]


def test_client_logger_filters_debug_at_info_level() -> None:
    sink = io.StringIO()
    run_logger = ClientLogger(sink=sink, level="INFO")

    run_logger.log_debug("poll", "status", status="pending")

    assert sink.getvalue() == ""
