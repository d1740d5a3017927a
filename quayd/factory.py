"""Construction of :class:`BuildEventHandler` instances from configuration.

``build_handler`` wires the network-backed adapters from explicit
credentials. ``build_handler_from_env`` reads the environment and resolves
each capability on its own. Anything left unconfigured falls back to an
in-process adapter that keeps no history, so an idle capability never grows
the process:

- ``QUAYD_GITHUB_TOKEN`` enables :class:`GitHubStatusSink`.
- ``QUAYD_REGISTRY_AUTH`` (``username:password``) enables
  :class:`RegistryTagResolver` and :class:`RegistryTagger`.
- ``QUAYD_GITHUB_API_URL`` and ``QUAYD_REGISTRY_HOST`` override endpoints.
"""

from __future__ import annotations

import os
import typing as typ

from quayd.handler import BuildEventHandler, HandlerDependencies
from quayd.logging import get_logger, log_info, log_warning
from quayd.registry.client import RegistryTagger, RegistryTagResolver
from quayd.registry.config import RegistryConfig
from quayd.registry.fake import DiscardingTagger, StaticTagResolver
from quayd.statuses.config import GitHubStatusConfig
from quayd.statuses.fake import DiscardingStatusSink
from quayd.statuses.github import GitHubStatusSink

if typ.TYPE_CHECKING:
    from quayd.statuses.protocol import CommitStatusSink

__all__ = ["build_handler", "build_handler_from_env"]

logger = get_logger(__name__)


def build_handler(
    token: str,
    registry_auth: str,
    *,
    registry_host: str = "quay.io",
) -> BuildEventHandler:
    """Build a handler backed by GitHub and the registry.

    Parameters
    ----------
    token
        GitHub access token for creating commit statuses.
    registry_auth
        Registry credentials as ``username:password``.
    registry_host
        Registry host name.

    Raises
    ------
    ConfigError
        If the token is blank or the credential pair is malformed.

    """
    registry = RegistryConfig.from_auth_string(registry_auth, host=registry_host)
    return BuildEventHandler(
        HandlerDependencies(
            status_sink=GitHubStatusSink(GitHubStatusConfig(token=token)),
            tag_resolver=RegistryTagResolver(registry),
            tagger=RegistryTagger(registry),
        )
    )


def build_handler_from_env() -> BuildEventHandler:
    """Build a handler from ``QUAYD_*`` environment variables.

    Raises
    ------
    ConfigError
        If a variable is present but invalid.

    """
    status_sink: CommitStatusSink
    if os.environ.get("QUAYD_GITHUB_TOKEN") is None:
        log_warning(
            logger, "QUAYD_GITHUB_TOKEN not set; commit statuses are discarded"
        )
        status_sink = DiscardingStatusSink()
    else:
        status_sink = GitHubStatusSink(GitHubStatusConfig.from_env())

    if os.environ.get("QUAYD_REGISTRY_AUTH") is None:
        log_warning(logger, "QUAYD_REGISTRY_AUTH not set; image tagging is disabled")
        deps = HandlerDependencies(
            status_sink=status_sink,
            tag_resolver=StaticTagResolver(record=False),
            tagger=DiscardingTagger(),
        )
    else:
        registry = RegistryConfig.from_env()
        log_info(
            logger, "Tagging images on %s as %s", registry.host, registry.username
        )
        deps = HandlerDependencies(
            status_sink=status_sink,
            tag_resolver=RegistryTagResolver(registry),
            tagger=RegistryTagger(registry),
        )

    return BuildEventHandler(deps)

