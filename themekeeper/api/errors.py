"""Falcon error handlers for the webhook API.

Usage
-----
Register error handlers on the Falcon app::

    from themekeeper.api.errors import handle_malformed_event
    from themekeeper.events import MalformedEventError

    app.add_error_handler(MalformedEventError, handle_malformed_event)

"""

from __future__ import annotations

import typing as typ

import falcon

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from themekeeper.events import MalformedEventError

__all__ = ["handle_malformed_event"]


async def handle_malformed_event(
    _req: Request,
    resp: Response,
    ex: MalformedEventError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``MalformedEventError`` to an HTTP 400 JSON response.

    Parameters
    ----------
    _req
        Falcon request (unused).
    resp
        Falcon response whose status and media are set.
    ex
        The parse failure describing what was wrong with the body.
    _params
        URI template parameters (unused).

    """
    resp.status = falcon.HTTP_400
    resp.media = {
        "title": "Malformed event",
        "description": str(ex),
    }
