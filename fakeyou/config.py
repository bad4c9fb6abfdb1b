"""Configuration model and loaders for the FakeYou client.

Responsibilities:
- Define client configuration as a typed dataclass.
- Resolve login values with deterministic source precedence.
- Provide loader entry points for YAML- and environment-based configuration.

Key types:
- `FakeYouConfig`: normalized client settings.
- `ServiceEndpoints`: endpoint URLs derived from configured base URLs.
- `LoginCredentials`: resolved username/password pair.
- `RuntimeConfigSources`: optional value sources for precedence resolution.
- `ConfigLoader`: static construction helpers for `FakeYouConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import math
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .jobs import PollPolicy
from .parsing import normalize_optional_string


DEFAULT_API_BASE_URL = "https://api.fakeyou.com"
DEFAULT_STORAGE_BASE_URL = "https://storage.googleapis.com/vocodes-public"
DEFAULT_POLL_INTERVAL_SECONDS = 2.0
DEFAULT_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class RuntimeConfigSources:
    """Source mappings used for deterministic runtime value precedence.

    Attributes:
        cli: Values explicitly provided by CLI arguments.
        secure: Values loaded from secure local credential storage.
        env: Values loaded from environment variables.
    """

    cli: Mapping[str, str] = field(default_factory=dict)
    secure: Mapping[str, str] = field(default_factory=dict)
    env: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class LoginCredentials:
    """Resolved login values for one session."""

    username: str
    password: str

    def __repr__(self) -> str:
        return f"LoginCredentials(username={self.username!r}, password='***')"


@dataclass(frozen=True, slots=True)
class ServiceEndpoints:
    """FakeYou endpoint URLs derived from the API and storage base URLs."""

    api_base_url: str = DEFAULT_API_BASE_URL
    storage_base_url: str = DEFAULT_STORAGE_BASE_URL

    @property
    def login_url(self) -> str:
        return f"{self.api_base_url}/login"

    @property
    def categories_url(self) -> str:
        return f"{self.api_base_url}/category/list/tts"

    @property
    def voices_url(self) -> str:
        return f"{self.api_base_url}/tts/list"

    @property
    def inference_url(self) -> str:
        return f"{self.api_base_url}/tts/inference"

    def job_url(self, job_token: str) -> str:
        """Return the status URL for a job token, used verbatim as a suffix."""

        return f"{self.api_base_url}/tts/job/{job_token}"

    def audio_url(self, audio_path: str) -> str:
        """Return the absolute storage URL for a relative bucket path."""

        return f"{self.storage_base_url}{audio_path}"


@dataclass(slots=True)
class FakeYouConfig:
    """Client configuration for one FakeYou session.

    Attributes:
        api_base_url: Base URL of the FakeYou REST API.
        storage_base_url: Base URL prefixed to returned audio paths.
        poll_interval_seconds: Fixed wait between job status polls.
        poll_max_attempts: Optional cap on status polls; `None` polls forever.
        poll_timeout_seconds: Optional cap on total poll time; `None` waits forever.
        timeout_seconds: Per-request transport timeout.
        username: Optional username or email for login.
        password: Optional password for login.
        runtime_sources: Optional runtime source overrides injected by CLI.
    """

    api_base_url: str = DEFAULT_API_BASE_URL
    storage_base_url: str = DEFAULT_STORAGE_BASE_URL
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    poll_max_attempts: int | None = None
    poll_timeout_seconds: float | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    username: str | None = None
    password: str | None = None
    runtime_sources: RuntimeConfigSources = field(default_factory=RuntimeConfigSources)

    def validate(self) -> None:
        """Validate configuration values before client construction."""

        self._require_url(self.api_base_url, "api_base_url")
        self._require_url(self.storage_base_url, "storage_base_url")
        if not math.isfinite(self.poll_interval_seconds) or self.poll_interval_seconds < 0:
            raise ValueError("`poll_interval_seconds` must be a finite non-negative number.")
        if self.poll_max_attempts is not None and self.poll_max_attempts <= 0:
            raise ValueError("`poll_max_attempts` must be a positive integer.")
        if self.poll_timeout_seconds is not None and (
            not math.isfinite(self.poll_timeout_seconds) or self.poll_timeout_seconds <= 0
        ):
            raise ValueError("`poll_timeout_seconds` must be a positive number.")
        if not math.isfinite(self.timeout_seconds) or self.timeout_seconds <= 0:
            raise ValueError("`timeout_seconds` must be a positive number.")

    def endpoints(self) -> ServiceEndpoints:
        """Return endpoint URLs with trailing slashes removed from base URLs."""

        return ServiceEndpoints(
            api_base_url=self.api_base_url.rstrip("/"),
            storage_base_url=self.storage_base_url.rstrip("/"),
        )

    def poll_policy(self) -> PollPolicy:
        """Return the job poll policy described by this config."""

        return PollPolicy(
            interval_seconds=self.poll_interval_seconds,
            max_attempts=self.poll_max_attempts,
            timeout_seconds=self.poll_timeout_seconds,
        )

    def resolved_login(self, sources: RuntimeConfigSources | None = None) -> LoginCredentials:
        """Resolve login values with deterministic source precedence.

        Precedence for each key is:
        `cli` > `secure` > `env` > config field value.
        """

        resolved_sources = sources if sources is not None else self.runtime_sources
        username = self._resolve_runtime_value(
            key="username",
            env_key="FAKEYOU_USERNAME",
            default_value=self.username,
            sources=resolved_sources,
        )
        password = self._resolve_runtime_value(
            key="password",
            env_key="FAKEYOU_PASSWORD",
            default_value=self.password,
            sources=resolved_sources,
        )
        return LoginCredentials(username=username, password=password)

    def _resolve_runtime_value(
        self,
        key: str,
        env_key: str,
        default_value: str | None,
        sources: RuntimeConfigSources,
    ) -> str:
        """Resolve a runtime value from sources in deterministic precedence order."""

        cli_value = self._normalized_lookup(sources.cli, key)
        if cli_value is not None:
            return cli_value

        secure_value = self._normalized_lookup(sources.secure, key)
        if secure_value is not None:
            return secure_value

        env_value = self._normalized_lookup(sources.env, env_key)
        if env_value is not None:
            return env_value

        normalized_default = normalize_optional_string(default_value)
        if normalized_default is None:
            raise ValueError(
                f"`{key}` could not be resolved from CLI, secure storage, env, or config."
            )
        return normalized_default

    @staticmethod
    def _normalized_lookup(mapping: Mapping[str, str], key: str) -> str | None:
        """Return a stripped mapping value for a key or `None` when missing/blank."""

        if key not in mapping:
            return None
        return normalize_optional_string(mapping.get(key))

    @staticmethod
    def _require_url(value: str, field_name: str) -> None:
        """Validate that a base URL is an absolute HTTP(S) URL."""

        if not isinstance(value, str) or not value.startswith(("http://", "https://")):
            raise ValueError(f"`{field_name}` must be an absolute http(s) URL.")


class ConfigLoader:
    """Factory methods for creating `FakeYouConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "api_base_url",
            "storage_base_url",
            "poll_interval_seconds",
            "poll_max_attempts",
            "poll_timeout_seconds",
            "timeout_seconds",
            "username",
            "password",
        }
    )
    _RUNTIME_ENV_KEYS = frozenset({"FAKEYOU_USERNAME", "FAKEYOU_PASSWORD"})

    @staticmethod
    def from_yaml(path: Path) -> FakeYouConfig:
        """Create a validated config from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = ConfigLoader._parse_yaml_payload(path_text, path)
        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> FakeYouConfig:
        """Create a validated config from environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        runtime_env = {
            key: value
            for key, value in env_map.items()
            if key in ConfigLoader._RUNTIME_ENV_KEYS
            and normalize_optional_string(value) is not None
        }

        config = FakeYouConfig(
            api_base_url=(
                ConfigLoader._optional_env_string(env_map, "FAKEYOU_API_BASE_URL")
                or DEFAULT_API_BASE_URL
            ),
            storage_base_url=(
                ConfigLoader._optional_env_string(env_map, "FAKEYOU_STORAGE_BASE_URL")
                or DEFAULT_STORAGE_BASE_URL
            ),
            poll_interval_seconds=ConfigLoader._env_number(
                env_map,
                "FAKEYOU_POLL_INTERVAL_SECONDS",
                default=DEFAULT_POLL_INTERVAL_SECONDS,
                allow_zero=True,
            ),
            poll_max_attempts=ConfigLoader._optional_env_positive_int(
                env_map, "FAKEYOU_POLL_MAX_ATTEMPTS"
            ),
            poll_timeout_seconds=ConfigLoader._optional_env_positive_float(
                env_map, "FAKEYOU_POLL_TIMEOUT_SECONDS"
            ),
            timeout_seconds=ConfigLoader._env_number(
                env_map,
                "FAKEYOU_TIMEOUT_SECONDS",
                default=DEFAULT_TIMEOUT_SECONDS,
            ),
            username=ConfigLoader._optional_env_string(env_map, "FAKEYOU_USERNAME"),
            password=ConfigLoader._optional_env_string(env_map, "FAKEYOU_PASSWORD"),
            runtime_sources=RuntimeConfigSources(env=runtime_env),
        )
        config.validate()
        return config

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` could not be parsed: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _build_config_from_mapping(
        payload: Mapping[str, Any], source_label: str
    ) -> FakeYouConfig:
        """Build a validated config from a normalized mapping payload."""

        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(str(key) for key in unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        config = FakeYouConfig(
            api_base_url=(
                ConfigLoader._optional_non_empty_string(payload, "api_base_url")
                or DEFAULT_API_BASE_URL
            ),
            storage_base_url=(
                ConfigLoader._optional_non_empty_string(payload, "storage_base_url")
                or DEFAULT_STORAGE_BASE_URL
            ),
            poll_interval_seconds=ConfigLoader._optional_number(
                payload,
                "poll_interval_seconds",
                source_label,
                default=DEFAULT_POLL_INTERVAL_SECONDS,
                allow_zero=True,
            ),
            poll_max_attempts=ConfigLoader._optional_positive_int(
                payload, "poll_max_attempts", source_label
            ),
            poll_timeout_seconds=ConfigLoader._optional_positive_float(
                payload, "poll_timeout_seconds", source_label
            ),
            timeout_seconds=ConfigLoader._optional_number(
                payload,
                "timeout_seconds",
                source_label,
                default=DEFAULT_TIMEOUT_SECONDS,
            ),
            username=ConfigLoader._optional_non_empty_string(payload, "username"),
            password=ConfigLoader._optional_non_empty_string(payload, "password"),
        )
        config.validate()
        return config

    @staticmethod
    def _optional_non_empty_string(payload: Mapping[str, Any], key: str) -> str | None:
        """Read an optional string field and normalize blank values to `None`."""

        if key not in payload:
            return None
        return normalize_optional_string(payload[key])

    @staticmethod
    def _parse_number(raw_value: object, label: str, *, allow_zero: bool) -> float:
        """Parse a non-negative (or positive) number from a scalar value."""

        requirement = "a non-negative number" if allow_zero else "a positive number"
        if isinstance(raw_value, bool):
            raise ValueError(f"{label} must be {requirement}.")
        if isinstance(raw_value, int | float):
            parsed = float(raw_value)
        else:
            try:
                parsed = float(str(raw_value).strip())
            except ValueError as exc:
                raise ValueError(f"{label} must be {requirement}.") from exc
        if not math.isfinite(parsed) or parsed < 0 or (parsed == 0 and not allow_zero):
            raise ValueError(f"{label} must be {requirement}.")
        return parsed

    @staticmethod
    def _optional_number(
        payload: Mapping[str, Any],
        key: str,
        source_label: str,
        *,
        default: float,
        allow_zero: bool = False,
    ) -> float:
        """Read a number field, falling back to `default` when missing or blank."""

        if key not in payload or normalize_optional_string(payload[key]) is None:
            return default
        return ConfigLoader._parse_number(
            payload[key], f"{source_label} field `{key}`", allow_zero=allow_zero
        )

    @staticmethod
    def _optional_positive_float(
        payload: Mapping[str, Any], key: str, source_label: str
    ) -> float | None:
        """Read an optional positive number field."""

        if key not in payload or normalize_optional_string(payload[key]) is None:
            return None
        return ConfigLoader._parse_number(
            payload[key], f"{source_label} field `{key}`", allow_zero=False
        )

    @staticmethod
    def _optional_positive_int(
        payload: Mapping[str, Any], key: str, source_label: str
    ) -> int | None:
        """Read and validate an optional positive integer payload field."""

        if key not in payload:
            return None

        raw_value = payload[key]
        if isinstance(raw_value, bool):
            raise ValueError(f"{source_label} field `{key}` must be a positive integer.")
        if isinstance(raw_value, int):
            parsed = raw_value
        else:
            normalized = normalize_optional_string(raw_value)
            if normalized is None:
                return None
            try:
                parsed = int(normalized)
            except ValueError as exc:
                raise ValueError(
                    f"{source_label} field `{key}` must be a positive integer."
                ) from exc

        if parsed <= 0:
            raise ValueError(f"{source_label} field `{key}` must be a positive integer.")
        return parsed

    @staticmethod
    def _optional_env_string(env: Mapping[str, str], key: str) -> str | None:
        """Read and normalize optional string environment variable values."""

        if key not in env:
            return None
        return normalize_optional_string(env.get(key))

    @staticmethod
    def _env_number(
        env: Mapping[str, str],
        key: str,
        *,
        default: float,
        allow_zero: bool = False,
    ) -> float:
        """Read a number from environment mapping, defaulting when unset."""

        raw_value = ConfigLoader._optional_env_string(env, key)
        if raw_value is None:
            return default
        return ConfigLoader._parse_number(
            raw_value, f"Environment variable `{key}`", allow_zero=allow_zero
        )

    @staticmethod
    def _optional_env_positive_float(env: Mapping[str, str], key: str) -> float | None:
        """Read an optional positive number from environment mapping."""

        raw_value = ConfigLoader._optional_env_string(env, key)
        if raw_value is None:
            return None
        return ConfigLoader._parse_number(
            raw_value, f"Environment variable `{key}`", allow_zero=False
        )

    @staticmethod
    def _optional_env_positive_int(env: Mapping[str, str], key: str) -> int | None:
        """Read an optional positive integer from environment mapping."""

        raw_value = ConfigLoader._optional_env_string(env, key)
        if raw_value is None:
            return None
        try:
            parsed = int(raw_value)
        except ValueError as exc:
            raise ValueError(f"Environment variable `{key}` must be a positive integer.") from exc
        if parsed <= 0:
            raise ValueError(f"Environment variable `{key}` must be a positive integer.")
        return parsed
