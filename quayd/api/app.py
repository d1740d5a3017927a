"""Application factory for the quayd Falcon ASGI application.

Usage
-----
Create an app backed by in-process fakes::

    app = create_app()

Create an app dispatching to real adapters::

    from quayd.api.app import AppDependencies, create_app
    from quayd.factory import build_handler

    app = create_app(AppDependencies(handler=build_handler(token, auth)))

"""

from __future__ import annotations

import dataclasses as dc

import falcon.asgi

from quayd.api.errors import register_error_handlers
from quayd.api.health.resources import HealthResource, ReadyResource
from quayd.api.middleware import AdapterLifecycle
from quayd.handler import BuildEventHandler
from quayd.webhook.resources import WebhookResource

__all__ = ["AppDependencies", "create_app"]


@dc.dataclass(frozen=True, slots=True)
class AppDependencies:
    """Dependencies for the Falcon ASGI application.

    Attributes
    ----------
    handler
        Build event handler the webhook dispatches to. Defaults to a handler
        whose capabilities are all fakes.

    """

    handler: BuildEventHandler = dc.field(default_factory=BuildEventHandler)


def create_app(
    dependencies: AppDependencies | None = None,
) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    Registers ``/health``, ``/ready`` and ``POST /quay/{state}`` together
    with the error handlers for quayd exceptions.

    Parameters
    ----------
    dependencies
        Optional application dependencies. When ``None`` the webhook runs
        against fakes.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    deps = dependencies or AppDependencies()

    app = falcon.asgi.App(middleware=[AdapterLifecycle(deps.handler)])  # type: ignore[no-matching-overload]  # Falcon stubs

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource(deps.handler))
    app.add_route("/quay/{state}", WebhookResource(deps.handler))

    register_error_handlers(app)

    return app
