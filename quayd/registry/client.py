"""Docker registry v1 implementations of :class:`TagResolver` and :class:`Tagger`.

Both clients address tags as ``/v1/repositories/{repository}/tags/{tag}``;
the resolver reads the JSON string image id stored there and the tagger
overwrites it with a PUT.
"""

from __future__ import annotations

import typing as typ

import httpx
import msgspec

from quayd.errors import (
    RegistryResponseShapeError,
    TransportError,
    UpstreamRejectionError,
)
from quayd.logging import get_logger, log_info

if typ.TYPE_CHECKING:
    from quayd.registry.config import RegistryConfig

_SERVICE = "registry"
_HTTP_UNSUCCESSFUL_THRESHOLD = 300

logger = get_logger(__name__)


class _RegistryClient:
    """Shared HTTP plumbing for the registry clients."""

    def __init__(
        self,
        config: RegistryConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._owns_client = http_client is None
        self._auth = (
            httpx.BasicAuth(config.username, config.password)
            if config.has_credentials
            else None
        )
        self._client = http_client or httpx.AsyncClient(timeout=config.timeout_s)

    @property
    def config(self) -> RegistryConfig:
        """Configuration the client was built with."""
        return self._config

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    def _tag_url(self, repository: str, tag: str) -> str:
        return f"{self._config.base_url}/repositories/{repository}/tags/{tag}"

    async def _send(
        self,
        method: str,
        url: str,
        *,
        content: bytes | None = None,
    ) -> httpx.Response:
        headers = {"Content-Type": "application/json"} if content is not None else None
        try:
            response = await self._client.request(
                method, url, content=content, headers=headers, auth=self._auth
            )
        except httpx.RequestError as exc:
            raise TransportError.network_error(_SERVICE, str(exc)) from exc

        if response.status_code >= _HTTP_UNSUCCESSFUL_THRESHOLD:
            raise UpstreamRejectionError.unsuccessful(
                _SERVICE, response.status_code, response.reason_phrase
            )
        return response


class RegistryTagResolver(_RegistryClient):
    """Resolves tags with a single GET per lookup.

    Parameters
    ----------
    config
        Registry host and optional credentials. Credentials, when present,
        are sent so private repositories can be read.
    http_client
        Optional ``httpx.AsyncClient`` for tests.

    """

    async def resolve(self, repository: str, tag: str) -> str:
        """Return the image id ``tag`` points at.

        Raises
        ------
        TransportError
            If the registry cannot be reached.
        UpstreamRejectionError
            If the registry answers with a status of 300 or above.
        RegistryResponseShapeError
            If the body is not a JSON-encoded string.

        """
        response = await self._send("GET", self._tag_url(repository, tag))
        try:
            image_id = msgspec.json.decode(response.content, type=str)
        except msgspec.DecodeError as exc:
            raise RegistryResponseShapeError.not_an_image_id(response.text) from exc
        log_info(logger, "Resolved %s:%s to image %s", repository, tag, image_id)
        return image_id


class RegistryTagger(_RegistryClient):
    """Applies tags with an authenticated PUT.

    The PUT replaces whatever the tag pointed at before, so repeating it
    with the same arguments is harmless.
    """

    async def tag(self, repository: str, image_id: str, tag: str) -> None:
        """Point ``tag`` at ``image_id``.

        Raises
        ------
        TransportError
            If the registry cannot be reached.
        UpstreamRejectionError
            If the registry answers with a status of 300 or above; the
            message carries the registry's status text.

        """
        await self._send(
            "PUT",
            self._tag_url(repository, tag),
            content=msgspec.json.encode(image_id),
        )
        log_info(logger, "Tagged %s image %s as %s", repository, image_id, tag)
