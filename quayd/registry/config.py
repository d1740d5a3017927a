"""Configuration for the Docker registry v1 client."""

from __future__ import annotations

import dataclasses
import os

from quayd.errors import ConfigError

_DEFAULT_HOST = "quay.io"
_DEFAULT_TIMEOUT_S = 20.0


@dataclasses.dataclass(frozen=True, slots=True)
class RegistryConfig:
    """Registry host and credentials.

    Attributes
    ----------
    host
        Registry host name; requests go to ``https://{host}/v1``.
    username
        Basic auth user for tag writes.
    password
        Basic auth password for tag writes.
    timeout_s
        Per-request timeout handed to httpx.

    """

    host: str = _DEFAULT_HOST
    username: str = ""
    password: str = dataclasses.field(default="", repr=False)
    timeout_s: float = _DEFAULT_TIMEOUT_S

    @property
    def base_url(self) -> str:
        """Return the v1 API root for :attr:`host`."""
        return f"https://{self.host}/v1"

    @property
    def has_credentials(self) -> bool:
        """Return True when a username was supplied."""
        return bool(self.username)

    @classmethod
    def from_auth_string(
        cls, registry_auth: str, *, host: str = _DEFAULT_HOST
    ) -> RegistryConfig:
        """Build configuration from a ``username:password`` pair.

        The pair is split on the first colon, so passwords may contain
        colons.

        Raises
        ------
        ConfigError
            If there is no colon or the username is empty.

        """
        username, sep, password = registry_auth.strip().partition(":")
        if not sep or not username:
            raise ConfigError.invalid_registry_auth()
        return cls(host=host, username=username, password=password)

    @classmethod
    def from_env(cls) -> RegistryConfig:
        """Build configuration from ``QUAYD_REGISTRY_AUTH``.

        ``QUAYD_REGISTRY_HOST`` optionally overrides the ``quay.io`` default.

        Raises
        ------
        ConfigError
            If the credential pair is missing or malformed.

        """
        raw_auth = os.environ.get("QUAYD_REGISTRY_AUTH")
        if raw_auth is None:
            raise ConfigError.missing("QUAYD_REGISTRY_AUTH")
        host = os.environ.get("QUAYD_REGISTRY_HOST", _DEFAULT_HOST).strip()
        return cls.from_auth_string(raw_auth, host=host or _DEFAULT_HOST)
