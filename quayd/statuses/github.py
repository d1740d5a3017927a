"""GitHub REST implementation of :class:`CommitStatusSink`."""

from __future__ import annotations

import typing as typ
from urllib.parse import quote

import httpx

from quayd.errors import ConfigError, TransportError, UpstreamRejectionError
from quayd.models import split_repository

if typ.TYPE_CHECKING:
    from quayd.models import CommitStatus
    from quayd.statuses.config import GitHubStatusConfig

_SERVICE = "GitHub"
_HTTP_UNSUCCESSFUL_THRESHOLD = 300


class GitHubStatusSink:
    """Creates commit statuses through the GitHub REST API.

    Parameters
    ----------
    config
        API token and endpoint settings.
    http_client
        Optional ``httpx.AsyncClient``, mainly for tests. When omitted the
        sink creates and owns its own client.

    """

    def __init__(
        self,
        config: GitHubStatusConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the sink with configuration."""
        if not config.token.strip():
            raise ConfigError.empty_token()

        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=config.timeout_s,
            headers={
                "Authorization": f"Bearer {config.token}",
                "User-Agent": config.user_agent,
                "Accept": "application/vnd.github+json",
            },
        )

    @property
    def config(self) -> GitHubStatusConfig:
        """Configuration the sink was built with."""
        return self._config

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    def _statuses_url(self, status: CommitStatus) -> str:
        owner, name = split_repository(status.repository)
        return (
            f"{self._config.api_url}/repos/{quote(owner)}/{quote(name)}"
            f"/statuses/{quote(status.ref, safe='')}"
        )

    async def create(self, status: CommitStatus) -> None:
        """Create ``status`` with a single POST.

        Raises
        ------
        MalformedRepositoryError
            If the repository is not ``owner/name``.
        TransportError
            If GitHub cannot be reached.
        UpstreamRejectionError
            If GitHub answers with anything outside 2xx, redirects included.

        """
        url = self._statuses_url(status)
        payload = {
            "state": str(status.state),
            "target_url": status.target_url,
            "context": status.context,
            "description": status.description,
        }
        try:
            response = await self._client.post(url, json=payload)
        except httpx.RequestError as exc:
            raise TransportError.network_error(_SERVICE, str(exc)) from exc

        if response.status_code >= _HTTP_UNSUCCESSFUL_THRESHOLD:
            raise UpstreamRejectionError.unsuccessful(
                _SERVICE, response.status_code, response.reason_phrase
            )
