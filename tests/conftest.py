"""Shared pytest fixtures for the FakeYou test suite."""

from __future__ import annotations

from collections.abc import Iterator

from loguru import logger
import pytest

from fakeyou.client import FakeYouClient
from fakeyou.http import FakeYouHttp
from fakeyou.jobs import PollPolicy
from tests.fakes import MockSession, add_catalog


@pytest.fixture(autouse=True)
def _reset_loguru_sinks() -> Iterator[None]:
    """Drop sinks added by CLI commands so later tests never write to closed streams."""

    yield
    logger.remove()
    logger.disable("fakeyou")


@pytest.fixture
def session() -> MockSession:
    """Provide a session double with one catalog listing queued."""

    return add_catalog(MockSession())


@pytest.fixture
def sleeps() -> list[float]:
    """Collect poll sleep durations instead of waiting."""

    return []


@pytest.fixture
def client(session: MockSession, sleeps: list[float]) -> FakeYouClient:
    """Provide a client built on the session double with a non-blocking poll policy."""

    return FakeYouClient(
        FakeYouHttp(session=session),  # type: ignore[arg-type]
        poll_policy=PollPolicy(interval_seconds=2.0, sleeper=sleeps.append),
    )
