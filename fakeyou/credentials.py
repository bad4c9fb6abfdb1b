"""Secure credential storage helpers for the FakeYou CLI.

Responsibilities:
- Persist FakeYou login values in an OS-backed secure credential store.
- Provide deterministic read/write/delete operations for the stored login.
- Treat a host without a usable keyring backend as having no stored login.
- Avoid logging or exposing secret values in diagnostics.

Key types:
- `CredentialStore`: interface for login credential persistence.
- `KeyringCredentialStore`: keyring-backed secure credential storage.
"""

from __future__ import annotations

from dataclasses import dataclass

from keyring.backends import fail
from keyring.errors import KeyringError

from .config import LoginCredentials


_DEFAULT_SERVICE_NAME = "fakeyou"
_USERNAME_ACCOUNT = "username"
_PASSWORD_ACCOUNT = "password"


class CredentialStore:
    """Interface for secure login credential operations."""

    def is_available(self) -> bool:
        """Return whether secure credential operations are available."""

        raise NotImplementedError

    def get_login(self) -> LoginCredentials | None:
        """Load the stored login, returning `None` unless both values are present."""

        raise NotImplementedError

    def set_login(self, username: str, password: str) -> None:
        """Persist a login in secure storage."""

        raise NotImplementedError

    def clear_login(self) -> bool:
        """Delete the stored login and return whether one existed."""

        raise NotImplementedError


@dataclass(slots=True)
class KeyringCredentialStore(CredentialStore):
    """Secure credential store backed by the `keyring` package."""

    service_name: str = _DEFAULT_SERVICE_NAME

    def _load_keyring_module(self):
        """Import and return the `keyring` module, or `None` when it cannot be imported."""

        try:
            import keyring  # type: ignore
        except ImportError:
            return None
        return keyring

    def is_available(self) -> bool:
        """Return `True` when `keyring` imports and resolves a usable backend."""

        keyring_module = self._load_keyring_module()
        if keyring_module is None:
            return False
        try:
            backend = keyring_module.get_keyring()
        except KeyringError:
            return False
        return not isinstance(backend, fail.Keyring)

    def _get_value(self, keyring_module, account_name: str) -> str | None:
        value = keyring_module.get_password(self.service_name, account_name)
        if value is None or not value.strip():
            return None
        return value

    def get_login(self) -> LoginCredentials | None:
        """Get the normalized stored login, returning `None` when incomplete or unreadable."""

        keyring_module = self._load_keyring_module()
        if keyring_module is None:
            return None
        try:
            username = self._get_value(keyring_module, _USERNAME_ACCOUNT)
            password = self._get_value(keyring_module, _PASSWORD_ACCOUNT)
        except KeyringError:
            return None
        if username is None or password is None:
            return None
        return LoginCredentials(username=username.strip(), password=password)

    def set_login(self, username: str, password: str) -> None:
        """Persist a normalized login in keyring or raise when unavailable."""

        keyring_module = self._load_keyring_module()
        if keyring_module is None:
            raise RuntimeError(
                "Secure credential storage is unavailable because `keyring` is not "
                "installed. Install `keyring` to persist the login securely."
            )

        normalized_username = username.strip()
        if not normalized_username or not password.strip():
            raise ValueError("Username and password must be non-empty strings.")
        keyring_module.set_password(self.service_name, _USERNAME_ACCOUNT, normalized_username)
        keyring_module.set_password(self.service_name, _PASSWORD_ACCOUNT, password)

    def clear_login(self) -> bool:
        """Remove the stored login from keyring and report if one was present."""

        keyring_module = self._load_keyring_module()
        if keyring_module is None:
            return False

        removed = False
        try:
            for account_name in (_USERNAME_ACCOUNT, _PASSWORD_ACCOUNT):
                if self._get_value(keyring_module, account_name) is not None:
                    keyring_module.delete_password(self.service_name, account_name)
                    removed = True
        except KeyringError:
            return removed
        return removed


def create_credential_store() -> CredentialStore:
    """Create the default secure credential store implementation."""

    return KeyringCredentialStore()
