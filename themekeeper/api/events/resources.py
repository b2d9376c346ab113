"""Webhook resources: event intake and the root greeting.

``POST /events`` parses the body and hands the event to the worker queue.
Acceptance is decoupled from processing, so a 204 only means the event was
queued; processing failures are visible in the logs alone. The
``activation`` handshake is answered inline and never queued.

Usage
-----
Register the resources on the Falcon app::

    app.add_route("/", RootResource())
    app.add_route("/events", EventsResource(worker))

"""

from __future__ import annotations

import asyncio
import html
import typing as typ

import falcon

from themekeeper.events import MalformedEventError, parse_event
from themekeeper.pipeline import PipelineEventLogger

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from themekeeper.events import ThemeEvent

__all__ = [
    "PING_HEADER",
    "PONG_HEADER",
    "EventSubmitter",
    "EventsResource",
    "RootResource",
]

PING_HEADER = "X-Hook-Ping"
PONG_HEADER = "X-Hook-Pong"


class EventSubmitter(typ.Protocol):
    """Queue that accepts parsed events for background processing."""

    def submit(self, event: ThemeEvent) -> None:
        """Enqueue ``event``, blocking while the queue is full."""
        ...


class EventsResource:
    """Accept theme change notifications."""

    def __init__(
        self,
        submitter: EventSubmitter,
        *,
        event_logger: PipelineEventLogger | None = None,
    ) -> None:
        """Configure the resource with the queue it feeds.

        Parameters
        ----------
        submitter
            Worker queue receiving accepted events.
        event_logger
            Structured logger for activations and rejected bodies.

        """
        self._submitter = submitter
        self._event_logger = event_logger or PipelineEventLogger()

    async def on_post(self, req: Request, resp: Response) -> None:
        """Handle ``POST /events``.

        Parameters
        ----------
        req
            Falcon request carrying one JSON event.
        resp
            Falcon response; always 204 once the body parses.

        Raises
        ------
        MalformedEventError
            If the body is empty or not a JSON event; mapped to HTTP 400.

        """
        body = await req.stream.read()
        try:
            event = parse_event(body)
        except MalformedEventError as exc:
            self._event_logger.log_event_rejected(exc)
            raise

        if event.is_activation:
            self._event_logger.log_hook_activated(event.shop_key)
            resp.set_header(PONG_HEADER, req.get_header(PING_HEADER, default=""))
        else:
            # A full queue blocks here; keep the event loop free meanwhile.
            await asyncio.to_thread(self._submitter.submit, event)

        resp.status = falcon.HTTP_204


class RootResource:
    """Plaintext greeting used as a trivial liveness probe."""

    async def on_get(self, req: Request, resp: Response) -> None:
        """Handle ``GET /`` with ``Hello, "<path>"``."""
        resp.content_type = falcon.MEDIA_TEXT
        resp.text = f'Hello, "{html.escape(req.path)}"'
        resp.status = falcon.HTTP_200
