"""Access logging middleware for the Falcon ASGI application.

Usage
-----
Register the middleware when creating the Falcon app::

    from themekeeper.api.middleware import AccessLogMiddleware

    app = falcon.asgi.App(middleware=[AccessLogMiddleware()])

"""

from __future__ import annotations

import time
import typing as typ

from themekeeper.logging import get_logger, log_info

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from themekeeper.logging import SupportsLog

__all__ = ["AccessLogMiddleware"]


class AccessLogMiddleware:
    """Log one line per request with method, path, status and duration.

    Parameters
    ----------
    logger
        Optional logger; defaults to this module's femtologging logger.

    """

    def __init__(self, logger: SupportsLog | None = None) -> None:
        """Initialise the middleware with its logger."""
        self._logger: SupportsLog = logger or get_logger(__name__)

    async def process_request(self, req: Request, _resp: Response) -> None:
        """Stamp the request start time on ``req.context``."""
        req.context.started_at = time.perf_counter()

    async def process_response(
        self,
        req: Request,
        resp: Response,
        _resource: object,
        req_succeeded: bool,  # noqa: FBT001 - Falcon middleware signature requires positional bool
    ) -> None:
        """Log the completed request.

        Parameters
        ----------
        req
            Falcon request carrying the start time in its context.
        resp
            Falcon response whose status is logged.
        _resource
            The matched Falcon resource (unused).
        req_succeeded
            ``True`` when no unhandled exception occurred.

        """
        started_at: float | None = getattr(req.context, "started_at", None)
        elapsed_ms = (
            (time.perf_counter() - started_at) * 1000 if started_at is not None else 0.0
        )
        log_info(
            self._logger,
            "%s %s %s succeeded=%s duration_ms=%.1f",
            req.method,
            req.path,
            resp.status,
            req_succeeded,
            elapsed_ms,
        )
