"""Health probe resources for liveness and readiness checks.

``/health`` only proves the process answers HTTP. ``/ready`` additionally
reports whether the event worker thread is alive, since accepted events
would otherwise pile up in the queue unprocessed.

Usage
-----
Register health endpoints on the Falcon app::

    from themekeeper.api.health.resources import HealthResource, ReadyResource

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource(worker))

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

__all__ = ["HealthResource", "ReadyResource", "SupportsRunning"]


class SupportsRunning(typ.Protocol):
    """Anything exposing whether its background processing is alive."""

    @property
    def is_running(self) -> bool:
        """Return ``True`` while background processing is alive."""
        ...


class HealthResource:
    """Liveness probe resource returning ``{"status": "ok"}``."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /health requests.

        Parameters
        ----------
        _req
            Falcon request (unused).
        resp
            Falcon response populated with liveness status.

        """
        resp.media = {"status": "ok"}
        resp.status = HTTPStatus.OK


class ReadyResource:
    """Readiness probe reporting whether the event worker is running.

    Responds with HTTP 200 and ``{"status": "ready"}`` while the worker is
    alive, otherwise HTTP 503 and ``{"status": "unavailable"}``.

    """

    def __init__(self, worker: SupportsRunning) -> None:
        """Configure the probe with the worker it reports on."""
        self._worker = worker

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /ready requests.

        Parameters
        ----------
        _req
            Falcon request (unused).
        resp
            Falcon response populated with readiness status.

        """
        if self._worker.is_running:
            resp.media = {"status": "ready"}
            resp.status = HTTPStatus.OK
        else:
            resp.media = {"status": "unavailable"}
            resp.status = HTTPStatus.SERVICE_UNAVAILABLE
