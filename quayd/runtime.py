"""quayd runtime entrypoint.

``create_app`` is the Granian factory target (``quayd.runtime:create_app``);
it builds the handler from the environment and delegates to
:func:`quayd.api.app.create_app`.

Configuration is driven by environment variables:

- ``QUAYD_HOST``: Bind address (default ``0.0.0.0``)
- ``QUAYD_PORT``: Listen port (default ``8080``)
- ``QUAYD_LOG_LEVEL``: Log level (default ``INFO``)
- ``QUAYD_GITHUB_TOKEN``: GitHub token (optional; enables commit statuses)
- ``QUAYD_REGISTRY_AUTH``: ``username:password`` (optional; enables tagging)

Run the service directly with ``python -m quayd.runtime``.
"""

from __future__ import annotations

import os
import typing as typ

from quayd.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    import falcon.asgi

__all__ = ["create_app", "main"]

logger = get_logger(__name__)

_MIN_PORT = 1
_MAX_PORT = 65535


def _parse_port(port_str: str) -> int:
    """Parse and validate a port number string.

    Raises
    ------
    SystemExit
        If port_str is not a valid integer in range 1-65535.

    """
    try:
        port = int(port_str)
        if not (_MIN_PORT <= port <= _MAX_PORT):
            msg = f"port {port} outside valid range {_MIN_PORT}-{_MAX_PORT}"
            raise ValueError(msg)  # noqa: TRY301 - unify conversion and range errors
    except ValueError as exc:
        log_error(
            logger,
            "Invalid QUAYD_PORT value: %r (must be %d-%d): %s",
            port_str,
            _MIN_PORT,
            _MAX_PORT,
            exc,
        )
        raise SystemExit(1) from exc
    return port


def create_app() -> falcon.asgi.App:
    """Create the Falcon ASGI application from environment configuration.

    Returns
    -------
    falcon.asgi.App
        App whose webhook dispatches to the adapters the environment
        configures, with fakes for the rest.

    """
    from quayd.api.app import AppDependencies
    from quayd.api.app import create_app as _create_api_app
    from quayd.factory import build_handler_from_env

    return _create_api_app(AppDependencies(handler=build_handler_from_env()))


def main() -> None:
    """Start the quayd server using Granian."""
    from granian import Granian
    from granian.constants import Interfaces

    host = os.environ.get("QUAYD_HOST", "0.0.0.0")  # noqa: S104 - bind all interfaces for container
    port = _parse_port(os.environ.get("QUAYD_PORT", "8080"))
    log_level_str = os.environ.get("QUAYD_LOG_LEVEL", "INFO")

    normalized_level, invalid_level = configure_logging(log_level_str)
    if invalid_level:
        log_warning(
            logger,
            "Invalid QUAYD_LOG_LEVEL %r, falling back to %s",
            log_level_str,
            normalized_level,
        )

    log_info(
        logger,
        "Starting quayd on %s:%d (log_level=%s)",
        host,
        port,
        normalized_level,
    )

    server = Granian(
        "quayd.runtime:create_app",
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        factory=True,
    )
    server.serve()


if __name__ == "__main__":
    main()
