"""Application factory for the Themekeeper Falcon ASGI application.

Usage
-----
Create an app around a running worker::

    from themekeeper.api.app import AppDependencies, create_app

    worker = build_event_worker(config)
    worker.start()
    app = create_app(AppDependencies(worker=worker))

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import falcon.asgi

from themekeeper.api.errors import handle_malformed_event
from themekeeper.api.events.resources import EventsResource, RootResource
from themekeeper.api.health.resources import HealthResource, ReadyResource
from themekeeper.api.middleware import AccessLogMiddleware
from themekeeper.events import MalformedEventError

if typ.TYPE_CHECKING:
    from themekeeper.pipeline import EventWorker, PipelineEventLogger

__all__ = ["AppDependencies", "create_app"]


@dc.dataclass(frozen=True, slots=True)
class AppDependencies:
    """Dependencies for the Falcon ASGI application.

    Attributes
    ----------
    worker
        Event worker receiving accepted webhook events.
    event_logger
        Optional structured logger for activations and rejected bodies.

    """

    worker: EventWorker
    event_logger: PipelineEventLogger | None = None


def create_app(dependencies: AppDependencies) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    Registers ``GET /``, ``POST /events``, ``GET /health`` and ``GET /ready``
    and maps ``MalformedEventError`` to HTTP 400. The worker is not started
    here; callers own its lifecycle.

    Parameters
    ----------
    dependencies
        Application dependencies.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    app = falcon.asgi.App(middleware=[AccessLogMiddleware()])  # type: ignore[no-matching-overload]  # Falcon stubs

    app.add_route("/", RootResource())
    app.add_route(
        "/events",
        EventsResource(dependencies.worker, event_logger=dependencies.event_logger),
    )
    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource(dependencies.worker))

    app.add_error_handler(MalformedEventError, handle_malformed_event)

    return app
