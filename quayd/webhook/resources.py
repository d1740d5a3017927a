"""Falcon resource receiving Quay build webhooks at ``/quay/{state}``."""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

from quayd.logging import get_logger, log_info
from quayd.models import BuildState
from quayd.webhook.payload import build_event, decode_payload, is_manual_trigger

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from quayd.handler import BuildEventHandler

__all__ = ["WebhookResource"]

logger = get_logger(__name__)


class WebhookResource:
    """Turns webhook deliveries into handler calls.

    The path segment carries the build state. Unknown states, undecodable
    bodies and handler failures are raised and left to the app's error
    handlers; manual builds are acknowledged and dropped.

    Parameters
    ----------
    handler
        Handler the normalised events are dispatched to.

    """

    def __init__(self, handler: BuildEventHandler) -> None:
        """Initialise the resource with its handler."""
        self._handler = handler

    async def on_post(self, req: Request, resp: Response, state: str) -> None:
        """Handle POST /quay/{state}.

        Parameters
        ----------
        req
            Falcon request carrying the Quay JSON payload.
        resp
            Falcon response populated with the outcome.
        state
            Build state from the URL path.

        """
        build_state = BuildState.parse(state)
        payload = decode_payload(await req.stream.read())

        if is_manual_trigger(payload):
            log_info(
                logger,
                "Ignoring manually triggered %s build for %s",
                build_state,
                payload.repository,
            )
            resp.media = {"status": "ignored"}
            resp.status = HTTPStatus.OK
            return

        await self._handler.handle(build_event(payload, build_state))
        resp.media = {"status": "ok"}
        resp.status = HTTPStatus.OK
