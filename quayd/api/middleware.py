"""Lifespan middleware that closes adapter HTTP clients on shutdown.

Usage
-----
Register the middleware when creating the Falcon app::

    app = falcon.asgi.App(middleware=[AdapterLifecycle(handler)])

"""

from __future__ import annotations

import typing as typ

from quayd.logging import get_logger, log_info

if typ.TYPE_CHECKING:
    from quayd.handler import BuildEventHandler

__all__ = ["AdapterLifecycle"]

logger = get_logger(__name__)


class AdapterLifecycle:
    """Closes every adapter exposing ``aclose`` when the server stops.

    Fakes have no ``aclose`` and are skipped. An adapter used for more than
    one capability is closed once.

    Parameters
    ----------
    handler
        Handler whose dependencies own the HTTP clients.

    """

    def __init__(self, handler: BuildEventHandler) -> None:
        """Initialise with the handler whose adapters are closed."""
        self._handler = handler

    async def process_shutdown(
        self,
        _scope: dict[str, typ.Any],
        _event: dict[str, typ.Any],
    ) -> None:
        """Close owned adapter clients on ASGI lifespan shutdown."""
        deps = self._handler.dependencies
        closed: set[int] = set()
        for adapter in (deps.status_sink, deps.tag_resolver, deps.tagger):
            aclose = getattr(adapter, "aclose", None)
            if aclose is None or id(adapter) in closed:
                continue
            closed.add(id(adapter))
            await aclose()
            log_info(logger, "Closed %s", type(adapter).__name__)
