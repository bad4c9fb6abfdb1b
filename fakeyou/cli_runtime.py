"""CLI login resolution helpers.

This module isolates the password prompt flow, runtime source assembly, and
secure login persistence from the command wiring layer.
"""

from __future__ import annotations

from typing import Callable, Protocol

import typer

from .config import LoginCredentials
from .credentials import create_credential_store
from .errors import CommandStageError
from .parsing import normalize_optional_string


class CredentialStoreProtocol(Protocol):
    """Protocol for secure credential store operations used by CLI login resolution."""

    def get_login(self) -> LoginCredentials | None:
        """Return the currently stored login, if available."""

    def set_login(self, username: str, password: str) -> None:
        """Persist a login in secure storage."""


def resolve_login_sources(
    username: str | None,
    prompt_password: bool,
    store_credentials: bool,
    credential_store_factory: Callable[[], CredentialStoreProtocol] = create_credential_store,
) -> tuple[dict[str, str], dict[str, str]]:
    """Resolve CLI and secure runtime source mappings for the login."""

    runtime_cli_values: dict[str, str] = {}
    normalized_username = normalize_optional_string(username)
    if normalized_username is not None:
        runtime_cli_values["username"] = normalized_username

    if prompt_password:
        if "username" not in runtime_cli_values:
            prompted_username = normalize_optional_string(typer.prompt("FakeYou username or email"))
            if prompted_username is not None:
                runtime_cli_values["username"] = prompted_username
        prompted_password = typer.prompt(
            "FakeYou password (hidden input)",
            default="",
            hide_input=True,
            show_default=False,
        )
        if normalize_optional_string(prompted_password) is not None:
            runtime_cli_values["password"] = prompted_password

    credential_store = credential_store_factory()
    runtime_secure_values: dict[str, str] = {}
    stored_login = credential_store.get_login()
    if stored_login is not None:
        runtime_secure_values["username"] = stored_login.username
        runtime_secure_values["password"] = stored_login.password

    entered_login = "username" in runtime_cli_values and "password" in runtime_cli_values
    if entered_login and store_credentials:
        try:
            credential_store.set_login(
                runtime_cli_values["username"], runtime_cli_values["password"]
            )
            typer.echo("Stored login in secure credential storage.")
        except Exception as exc:
            raise CommandStageError(
                stage="credentials",
                detail=f"Failed to store login securely: {exc}",
                hint=(
                    "Install and configure a keyring backend, or rerun with "
                    "`--no-store-credentials` for one-off usage."
                ),
            ) from exc

    return runtime_cli_values, runtime_secure_values
