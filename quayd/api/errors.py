"""Falcon error handlers translating quayd errors into HTTP responses.

Rejections of the delivery itself map to 400, failures talking to GitHub or
the registry map to 502 and are logged with their traceback.

Usage
-----
Register every handler on an app::

    from quayd.api.errors import register_error_handlers

    register_error_handlers(app)

"""

from __future__ import annotations

import typing as typ

import falcon

from quayd.errors import (
    InvalidPayloadError,
    MalformedRepositoryError,
    RegistryResponseShapeError,
    TransportError,
    UnrecognizedStateError,
    UpstreamRejectionError,
)
from quayd.logging import get_logger, log_exception

if typ.TYPE_CHECKING:
    import falcon.asgi
    from falcon.asgi import Request, Response

__all__ = [
    "handle_invalid_payload",
    "handle_malformed_repository",
    "handle_unrecognized_state",
    "handle_upstream_failure",
    "register_error_handlers",
]

logger = get_logger(__name__)


async def handle_unrecognized_state(
    _req: Request,
    resp: Response,
    ex: UnrecognizedStateError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``UnrecognizedStateError`` to an HTTP 400 JSON response."""
    resp.status = falcon.HTTP_400
    resp.media = {
        "title": "Unknown status",
        "description": str(ex),
    }


async def handle_invalid_payload(
    _req: Request,
    resp: Response,
    ex: InvalidPayloadError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``InvalidPayloadError`` to an HTTP 400 JSON response."""
    resp.status = falcon.HTTP_400
    media: dict[str, str] = {
        "title": "Invalid payload",
        "description": ex.reason,
    }
    if ex.field is not None:
        media["field"] = ex.field
    resp.media = media


async def handle_malformed_repository(
    _req: Request,
    resp: Response,
    ex: MalformedRepositoryError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``MalformedRepositoryError`` to an HTTP 400 JSON response."""
    resp.status = falcon.HTTP_400
    resp.media = {
        "title": "Malformed repository",
        "description": str(ex),
    }


async def handle_upstream_failure(
    req: Request,
    resp: Response,
    ex: Exception,
    _params: dict[str, typ.Any],
) -> None:
    """Log a GitHub or registry failure and answer with HTTP 502.

    Parameters
    ----------
    req
        Falcon request, used to name the failing delivery in the log.
    resp
        Falcon response whose status and media are set.
    ex
        ``TransportError``, ``UpstreamRejectionError`` or
        ``RegistryResponseShapeError`` raised by an adapter.
    _params
        URI template parameters (unused).

    """
    log_exception(logger, f"Webhook {req.path} failed: {ex}", ex)
    resp.status = falcon.HTTP_502
    resp.media = {
        "title": "Upstream failure",
        "description": str(ex),
    }


def register_error_handlers(app: falcon.asgi.App) -> None:
    """Attach every quayd error handler to ``app``."""
    app.add_error_handler(UnrecognizedStateError, handle_unrecognized_state)
    app.add_error_handler(InvalidPayloadError, handle_invalid_payload)
    app.add_error_handler(MalformedRepositoryError, handle_malformed_repository)
    app.add_error_handler(
        (TransportError, UpstreamRejectionError, RegistryResponseShapeError),
        handle_upstream_failure,
    )
