"""quayd HTTP API layer.

This package provides the Falcon Asynchronous Server Gateway Interface
(ASGI) application: health probes and the Quay webhook endpoint.

Public API
----------
create_app
    Application factory wiring the routes, error handlers and adapter
    lifecycle middleware.
"""

from quayd.api.app import AppDependencies, create_app

__all__ = ["AppDependencies", "create_app"]
