"""Top-level package for the FakeYou client.

An unofficial, synchronous client for the FakeYou text-to-speech service. The
main entry point is `authenticate`, which logs in and returns a
`FakeYouClient` with a populated voice/category cache.

Library log events go through loguru and are disabled until an application
calls ``logger.enable("fakeyou")``.
"""

from loguru import logger

from .auth import authenticate
from .client import FakeYouClient
from .config import ConfigLoader, FakeYouConfig
from .errors import (
    FakeYouError,
    FileWriteError,
    ImproperResponseError,
    InvalidCredentialsError,
    JobFailedError,
    JobTimeoutError,
    RequestError,
    SerializationError,
    TooManyRequestsError,
    UndefinedResponseError,
)
from .jobs import PollPolicy
from .models.datatypes import Category, Voice

logger.disable("fakeyou")

__all__ = [
    "authenticate",
    "FakeYouClient",
    "FakeYouConfig",
    "ConfigLoader",
    "PollPolicy",
    "Voice",
    "Category",
    "FakeYouError",
    "InvalidCredentialsError",
    "UndefinedResponseError",
    "TooManyRequestsError",
    "ImproperResponseError",
    "JobFailedError",
    "JobTimeoutError",
    "FileWriteError",
    "RequestError",
    "SerializationError",
    "__version__",
]

__version__ = "0.1.0"
