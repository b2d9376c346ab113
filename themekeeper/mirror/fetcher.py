"""Asset fetchers: turn a download URL into a stream of bytes.

The mutation handlers depend on the ``FileFetcher`` protocol only, so tests
can substitute an in-memory implementation or an ``httpx.MockTransport``.
"""

from __future__ import annotations

import collections.abc as cabc
import contextlib
import typing as typ

import httpx

from .errors import AssetFetchError

_HTTP_ERROR_STATUS_THRESHOLD = 400


class FileFetcher(typ.Protocol):
    """Interface for opening remote asset content."""

    def open(
        self, url: str
    ) -> contextlib.AbstractContextManager[cabc.Iterable[bytes]]:
        """Open ``url`` and yield its body as byte chunks."""
        ...


class HttpxFileFetcher:
    """Stream assets over HTTP with a synchronous ``httpx.Client``.

    Parameters
    ----------
    client
        Optional preconfigured client; one is created when omitted.
    timeout_s
        Request timeout in seconds; ``None`` disables timeouts.

    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        timeout_s: float | None = None,
    ) -> None:
        """Create the fetcher, owning the client only when it builds one."""
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(timeout_s), follow_redirects=True
        )

    @contextlib.contextmanager
    def open(self, url: str) -> cabc.Iterator[cabc.Iterable[bytes]]:
        """Yield the response body of ``url`` as byte chunks.

        Raises
        ------
        AssetFetchError
            On transport errors or non-2xx responses.

        """
        try:
            with self._client.stream("GET", url) as response:
                if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
                    raise AssetFetchError.http_error(url, response.status_code)
                yield response.iter_bytes()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise AssetFetchError.transport(url, exc) from exc

    def close(self) -> None:
        """Close the underlying client when this fetcher created it."""
        if self._owns_client:
            self._client.close()


__all__ = ["FileFetcher", "HttpxFileFetcher"]
