"""Errors raised while mirroring theme files onto disk."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


class MirrorError(Exception):
    """Base exception for filesystem mirroring failures."""


class MissingShopKeyError(MirrorError):
    """Raised when an event cannot be mapped to a shop directory."""

    def __init__(self, topic: str) -> None:
        """Initialise with the topic of the offending event."""
        self.topic = topic
        super().__init__(f"Missing shop subdomain for event '{topic}'")


class UnsafePathError(MirrorError):
    """Raised when a name from a payload would escape its root directory."""

    def __init__(self, name: str, root: Path) -> None:
        """Initialise with the rejected name and the root it must stay under."""
        self.name = name
        self.root = root
        super().__init__(f"Refusing path '{name}' outside {root}")


class TargetNotFoundError(MirrorError):
    """Raised when a delete event names a file that does not exist."""

    def __init__(self, path: Path) -> None:
        """Initialise with the missing path."""
        self.path = path
        super().__init__(f"No such file to delete: {path}")


class AssetFetchError(MirrorError):
    """Raised when an asset download fails."""

    def __init__(self, message: str, *, url: str, status_code: int | None = None):
        """Initialise with a message, the URL and an optional HTTP status."""
        self.url = url
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(cls, url: str, status_code: int) -> AssetFetchError:
        """Return an error for non-2xx responses."""
        return cls(
            f"Asset download {url} failed with HTTP {status_code}",
            url=url,
            status_code=status_code,
        )

    @classmethod
    def transport(cls, url: str, exc: BaseException) -> AssetFetchError:
        """Return an error for connection-level failures."""
        return cls(f"Asset download {url} failed: {exc}", url=url)
