"""Liveness and readiness probes.

Usage
-----
Register the probes on the Falcon app::

    from quayd.api.health.resources import HealthResource, ReadyResource

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource(handler))

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from quayd.handler import BuildEventHandler

__all__ = ["HealthResource", "ReadyResource"]


class HealthResource:
    """Liveness probe that always answers ``{"status": "ok"}``."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /health requests."""
        resp.media = {"status": "ok"}
        resp.status = HTTPStatus.OK


class ReadyResource:
    """Readiness probe naming the adapter behind each capability.

    Operators can tell from the response whether the process runs against
    GitHub and the registry or against the in-process fakes.

    Parameters
    ----------
    handler
        Handler whose dependencies are reported.

    """

    def __init__(self, handler: BuildEventHandler) -> None:
        """Initialise with the handler to describe."""
        self._handler = handler

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /ready requests."""
        deps = self._handler.dependencies
        resp.media = {
            "status": "ready",
            "adapters": {
                "status_sink": type(deps.status_sink).__name__,
                "tag_resolver": type(deps.tag_resolver).__name__,
                "tagger": type(deps.tagger).__name__,
            },
        }
        resp.status = HTTPStatus.OK
