"""Runtime configuration for the Themekeeper webhook receiver.

Usage
-----
Create a configuration with defaults:

>>> config = ThemekeeperConfig()
>>> config.port
3004

Or load from environment variables:

>>> import os
>>> os.environ["THEMEKEEPER_BASE_DIR"] = "/srv/themes"
>>> ThemekeeperConfig.from_env().base_dir
PosixPath('/srv/themes')

"""

from __future__ import annotations

import dataclasses as dc
import os
from pathlib import Path

from themekeeper.history import GitIdentity
from themekeeper.pipeline import DEFAULT_QUEUE_CAPACITY

# TCP port number range limits
_MIN_PORT = 1
_MAX_PORT = 65535


def _read(env_var: str) -> str:
    return os.environ.get(env_var, "").strip()


def _parse_positive_int(env_var: str, default: int) -> int:
    """Read a positive integer env var, falling back to a default."""
    raw = _read(env_var)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        msg = f"{env_var} must be an integer, got: {raw!r}"
        raise ValueError(msg) from exc
    if value < 1:
        msg = f"{env_var} must be positive, got: {value}"
        raise ValueError(msg)
    return value


def _parse_optional_seconds(env_var: str) -> float | None:
    """Read an optional positive number of seconds."""
    raw = _read(env_var)
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        msg = f"{env_var} must be a number of seconds, got: {raw!r}"
        raise ValueError(msg) from exc
    if value <= 0:
        msg = f"{env_var} must be positive, got: {value}"
        raise ValueError(msg)
    return value


def parse_port(raw: str, *, env_var: str = "THEMEKEEPER_PORT") -> int:
    """Parse and validate a TCP port string.

    Raises
    ------
    ValueError
        If ``raw`` is not an integer in range 1-65535.

    """
    try:
        port = int(raw)
    except ValueError as exc:
        msg = f"{env_var} must be an integer, got: {raw!r}"
        raise ValueError(msg) from exc
    if not (_MIN_PORT <= port <= _MAX_PORT):
        msg = f"{env_var} {port} outside valid range {_MIN_PORT}-{_MAX_PORT}"
        raise ValueError(msg)
    return port


@dc.dataclass(frozen=True, slots=True)
class ThemekeeperConfig:
    """Configuration for the webhook receiver.

    Attributes
    ----------
    host
        Address the HTTP server binds to.
    port
        Port the HTTP server listens on.
    base_dir
        Directory under which one working tree per shop is created.
    log_level
        femtologging level name.
    queue_capacity
        Maximum number of accepted events waiting for the worker.
    fetch_timeout_s
        Optional asset download timeout; ``None`` waits indefinitely.
    git_identity
        Committer name and email used for every snapshot.

    """

    host: str = "localhost"
    port: int = 3004
    base_dir: Path = Path()
    log_level: str = "INFO"
    queue_capacity: int = DEFAULT_QUEUE_CAPACITY
    fetch_timeout_s: float | None = None
    git_identity: GitIdentity = dc.field(default_factory=GitIdentity)

    @classmethod
    def from_env(cls) -> ThemekeeperConfig:
        """Create configuration from environment variables.

        Reads ``THEMEKEEPER_HOST``, ``THEMEKEEPER_PORT``,
        ``THEMEKEEPER_BASE_DIR``, ``THEMEKEEPER_LOG_LEVEL``,
        ``THEMEKEEPER_QUEUE_CAPACITY``, ``THEMEKEEPER_FETCH_TIMEOUT``,
        ``THEMEKEEPER_GIT_USER_NAME`` and ``THEMEKEEPER_GIT_USER_EMAIL``.

        Raises
        ------
        ValueError
            If a numeric variable is malformed or out of range.

        """
        defaults = cls()
        raw_port = _read("THEMEKEEPER_PORT")
        raw_base_dir = _read("THEMEKEEPER_BASE_DIR")
        return cls(
            host=_read("THEMEKEEPER_HOST") or defaults.host,
            port=parse_port(raw_port) if raw_port else defaults.port,
            base_dir=Path(raw_base_dir) if raw_base_dir else defaults.base_dir,
            log_level=_read("THEMEKEEPER_LOG_LEVEL") or defaults.log_level,
            queue_capacity=_parse_positive_int(
                "THEMEKEEPER_QUEUE_CAPACITY", defaults.queue_capacity
            ),
            fetch_timeout_s=_parse_optional_seconds("THEMEKEEPER_FETCH_TIMEOUT"),
            git_identity=GitIdentity(
                name=_read("THEMEKEEPER_GIT_USER_NAME")
                or defaults.git_identity.name,
                email=_read("THEMEKEEPER_GIT_USER_EMAIL")
                or defaults.git_identity.email,
            ),
        )


__all__ = ["ThemekeeperConfig", "parse_port"]
