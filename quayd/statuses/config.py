"""Configuration for the GitHub commit status client."""

from __future__ import annotations

import dataclasses
import os

from quayd.errors import ConfigError

_DEFAULT_API_URL = "https://api.github.com"
_DEFAULT_TIMEOUT_S = 20.0
_DEFAULT_USER_AGENT = "quayd/0.1"


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubStatusConfig:
    """Settings for :class:`~quayd.statuses.github.GitHubStatusSink`.

    Attributes
    ----------
    token
        Access token sent as a bearer token.
    api_url
        Base URL of the GitHub REST API.
    timeout_s
        Per-request timeout handed to httpx.
    user_agent
        ``User-Agent`` header value.

    """

    token: str
    api_url: str = _DEFAULT_API_URL
    timeout_s: float = _DEFAULT_TIMEOUT_S
    user_agent: str = _DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> GitHubStatusConfig:
        """Build configuration from ``QUAYD_GITHUB_TOKEN``.

        ``QUAYD_GITHUB_API_URL`` optionally overrides the API base URL, for
        GitHub Enterprise installations.

        Raises
        ------
        ConfigError
            If the token is missing or blank.

        """
        raw_token = os.environ.get("QUAYD_GITHUB_TOKEN")
        if raw_token is None:
            raise ConfigError.missing("QUAYD_GITHUB_TOKEN")
        token = raw_token.strip()
        if not token:
            raise ConfigError.empty_token()
        api_url = os.environ.get("QUAYD_GITHUB_API_URL", _DEFAULT_API_URL)
        return cls(token=token, api_url=api_url.rstrip("/"))
