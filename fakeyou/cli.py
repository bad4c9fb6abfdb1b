"""Command-line interface for the FakeYou client.

Responsibilities:
- Expose catalog listing, speech generation, and credential commands.
- Convert CLI arguments into `FakeYouConfig` and an authenticated client.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from dataclasses import replace
import os
from pathlib import Path
import sys
from typing import Annotated

import typer

from .auth import authenticate
from .cli_rendering import (
    JobProgressIndicator,
    echo_category_list,
    echo_voice_list,
    exit_with_command_error,
)
from .cli_runtime import resolve_login_sources
from .client import FakeYouClient
from .config import ConfigLoader, FakeYouConfig, RuntimeConfigSources
from .credentials import create_credential_store
from .errors import CommandStageError
from .parsing import normalize_optional_string
from .telemetry.logger import ClientLogger
from .text.slug import slugify_voice_title

app = typer.Typer(
    name="fakeyou",
    no_args_is_help=True,
    help="FakeYou text-to-speech CLI.",
)

ConfigFileOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to YAML config file with client defaults."),
]
UsernameOption = Annotated[
    str | None,
    typer.Option("--username", help="FakeYou username or email (overrides stored login)."),
]
PromptPasswordOption = Annotated[
    bool,
    typer.Option("--prompt-password", help="Prompt for the password with hidden input."),
]
StoreCredentialsOption = Annotated[
    bool,
    typer.Option(
        "--store-credentials/--no-store-credentials",
        help="Persist a prompted login to secure credential storage.",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", help="Log per-poll job status events."),
]


def _load_config(config_path: Path | None) -> FakeYouConfig:
    """Load YAML or environment config and map failures to stage errors."""

    if config_path is None:
        try:
            return ConfigLoader.from_env()
        except ValueError as exc:
            raise CommandStageError(
                stage="config",
                detail=f"Invalid environment configuration: {exc}",
                hint="Fix the `FAKEYOU_*` environment variables and rerun.",
            ) from exc

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise CommandStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise CommandStageError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc


def _open_client(
    config_file: Path | None,
    username: str | None,
    prompt_password: bool,
    store_credentials: bool,
    verbose: bool,
    poll_max_attempts: int | None = None,
    poll_timeout: float | None = None,
) -> FakeYouClient:
    """Resolve config and login, then authenticate and return a ready client."""

    config = _load_config(config_file)
    if poll_max_attempts is not None:
        config = replace(config, poll_max_attempts=poll_max_attempts)
    if poll_timeout is not None:
        config = replace(config, poll_timeout_seconds=poll_timeout)
    try:
        config.validate()
    except ValueError as exc:
        raise CommandStageError(
            stage="config",
            detail=str(exc),
            hint="Use positive values for poll limits.",
        ) from exc

    runtime_cli_values, runtime_secure_values = resolve_login_sources(
        username=username,
        prompt_password=prompt_password,
        store_credentials=store_credentials,
        credential_store_factory=create_credential_store,
    )
    sources = RuntimeConfigSources(
        cli=runtime_cli_values,
        secure=runtime_secure_values,
        env=os.environ,
    )
    try:
        login = config.resolved_login(sources)
    except ValueError as exc:
        raise CommandStageError(
            stage="credentials",
            detail=str(exc),
            hint=(
                "Pass `--username` with `--prompt-password`, run "
                "`fakeyou credentials --set`, or set `FAKEYOU_USERNAME`/`FAKEYOU_PASSWORD`."
            ),
        ) from exc

    run_logger = ClientLogger(sink=sys.stderr, level="DEBUG" if verbose else "INFO")
    return authenticate(login.username, login.password, config=config, run_logger=run_logger)


@app.command("categories")
def categories_command(
    config_file: ConfigFileOption = None,
    username: UsernameOption = None,
    prompt_password: PromptPasswordOption = False,
    store_credentials: StoreCredentialsOption = True,
    verbose: VerboseOption = False,
) -> None:
    """List voice categories."""

    try:
        with _open_client(
            config_file, username, prompt_password, store_credentials, verbose
        ) as client:
            categories = client.list_categories()
    except Exception as exc:
        exit_with_command_error("categories", exc)

    echo_category_list(categories)


@app.command("voices")
def voices_command(
    category: Annotated[
        str | None,
        typer.Option("--category", help="Only list voices in this category token."),
    ] = None,
    config_file: ConfigFileOption = None,
    username: UsernameOption = None,
    prompt_password: PromptPasswordOption = False,
    store_credentials: StoreCredentialsOption = True,
    verbose: VerboseOption = False,
) -> None:
    """List voices, optionally filtered by category token."""

    try:
        with _open_client(
            config_file, username, prompt_password, store_credentials, verbose
        ) as client:
            category_token = normalize_optional_string(category)
            if category_token is None:
                voices = client.list_voices()
            else:
                voices = client.list_voices_by_category(category_token)
    except Exception as exc:
        exit_with_command_error("voices", exc)

    echo_voice_list(voices)


@app.command("generate")
def generate_command(
    text: Annotated[str, typer.Argument(help="Text to synthesize.")],
    voice: Annotated[str, typer.Option("--voice", help="Voice model token, e.g. `TM:...`.")],
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Output WAV path (defaults to `<voice-title>.wav`)."),
    ] = None,
    poll_max_attempts: Annotated[
        int | None,
        typer.Option("--poll-max-attempts", help="Give up after this many status polls."),
    ] = None,
    poll_timeout: Annotated[
        float | None,
        typer.Option("--poll-timeout", help="Give up after this many seconds of polling."),
    ] = None,
    config_file: ConfigFileOption = None,
    username: UsernameOption = None,
    prompt_password: PromptPasswordOption = False,
    store_credentials: StoreCredentialsOption = True,
    verbose: VerboseOption = False,
) -> None:
    """Generate speech with a voice and write it to a WAV file."""

    model_token = normalize_optional_string(voice)
    normalized_text = normalize_optional_string(text)
    try:
        if model_token is None or normalized_text is None:
            raise CommandStageError(
                stage="input",
                detail="Both TEXT and `--voice` must be non-empty.",
                hint="List voice tokens with `fakeyou voices`.",
            )
        with _open_client(
            config_file,
            username,
            prompt_password,
            store_credentials,
            verbose,
            poll_max_attempts=poll_max_attempts,
            poll_timeout=poll_timeout,
        ) as client:
            output_path = out if out is not None else _default_output_path(client, model_token)
            progress = JobProgressIndicator(command_name="generate")
            written = client.generate_file_from_token(
                text,
                model_token,
                output_path,
                on_status=progress.on_status,
            )
    except Exception as exc:
        exit_with_command_error("generate", exc)

    typer.echo(f"Audio: {written}")


def _default_output_path(client: FakeYouClient, model_token: str) -> Path:
    """Derive a WAV filename from the cached voice title, or the model token."""

    cached_voice = client.find_voice(model_token)
    title = cached_voice.title if cached_voice is not None else model_token
    return Path(f"{slugify_voice_title(title)}.wav")


@app.command("credentials")
def credentials_command(
    set_login: Annotated[
        bool,
        typer.Option(
            "--set",
            help="Prompt for username and hidden password and store them securely.",
        ),
    ] = False,
    clear_login: Annotated[
        bool,
        typer.Option("--clear", help="Clear the stored login from secure storage."),
    ] = False,
) -> None:
    """Manage the securely stored FakeYou login."""

    if set_login and clear_login:
        exit_with_command_error(
            "credentials",
            CommandStageError(
                stage="credentials",
                detail="`--set` and `--clear` cannot be used together.",
                hint="Run one credentials action per command invocation.",
            ),
        )

    credential_store = create_credential_store()
    if set_login:
        prompted_username = normalize_optional_string(typer.prompt("FakeYou username or email"))
        prompted_password = typer.prompt(
            "FakeYou password (hidden input)",
            default="",
            hide_input=True,
            show_default=False,
        )
        if prompted_username is None or normalize_optional_string(prompted_password) is None:
            exit_with_command_error(
                "credentials",
                CommandStageError(
                    stage="credentials",
                    detail="No username or password entered.",
                    hint="Provide both values when using `--set`.",
                ),
            )
        try:
            credential_store.set_login(prompted_username, prompted_password)
        except Exception as exc:
            exit_with_command_error(
                "credentials",
                CommandStageError(
                    stage="credentials",
                    detail=f"Failed to store login securely: {exc}",
                    hint="Install and configure a keyring backend and retry.",
                ),
            )
        typer.echo("Login stored in secure credential storage.")
        return

    if clear_login:
        if credential_store.clear_login():
            typer.echo("Stored login cleared from secure credential storage.")
        else:
            typer.echo("No stored login found in secure credential storage.")
        return

    availability = "available" if credential_store.is_available() else "unavailable"
    stored_login = credential_store.get_login()
    status = f"present ({stored_login.username})" if stored_login is not None else "not set"
    typer.echo(f"Secure credential storage: {availability}")
    typer.echo(f"Stored FakeYou login: {status}")


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
