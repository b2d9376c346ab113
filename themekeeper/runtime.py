"""Themekeeper runtime entrypoint.

This module provides the ASGI application factory used by Granian and the
``main`` command that starts the server. Configuration is driven by
environment variables (see :class:`themekeeper.config.ThemekeeperConfig`);
``--host``, ``--port`` and ``--dir`` override them from the command line.

The event worker lives inside the serving process, so the server always runs
a single Granian worker: a second process would bring a second consumer and
break the one-writer-per-shop guarantee.

Run the service directly with ``python -m themekeeper.runtime``.
"""

from __future__ import annotations

import argparse
import os
import typing as typ

from themekeeper.config import ThemekeeperConfig
from themekeeper.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    import falcon.asgi

__all__ = ["create_app", "main"]

logger = get_logger(__name__)


def create_app() -> falcon.asgi.App:
    """Build the worker from the environment, start it and return the app.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application backed by a running worker.

    """
    from themekeeper.api.app import AppDependencies
    from themekeeper.api.app import create_app as _create_api_app
    from themekeeper.api.factory import build_event_worker

    config = ThemekeeperConfig.from_env()
    worker = build_event_worker(config)
    worker.start()
    log_info(logger, "Writing shop repositories to %s", config.base_dir.resolve())
    return _create_api_app(AppDependencies(worker=worker))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mirror theme webhooks into git")
    parser.add_argument("--host", help="address to serve the HTTP endpoint on")
    parser.add_argument("--port", help="port to serve the HTTP endpoint on")
    parser.add_argument("--dir", help="root directory to write git repositories into")
    return parser


def _apply_overrides(args: argparse.Namespace) -> None:
    """Export command-line overrides so the Granian factory sees them."""
    overrides: dict[str, str | None] = {
        "THEMEKEEPER_HOST": args.host,
        "THEMEKEEPER_PORT": args.port,
        "THEMEKEEPER_BASE_DIR": args.dir,
    }
    for key, value in overrides.items():
        if value is not None:
            os.environ[key] = value


def main(argv: cabc.Sequence[str] | None = None) -> None:
    """Start the Themekeeper server using Granian.

    Raises
    ------
    SystemExit
        If the configuration is invalid.

    """
    from granian import Granian
    from granian.constants import Interfaces

    _apply_overrides(_build_parser().parse_args(argv))

    try:
        config = ThemekeeperConfig.from_env()
    except ValueError as exc:
        # Use error() not exception() - validation failures need no traceback
        log_error(logger, "Invalid configuration: %s", exc)
        raise SystemExit(1) from exc

    normalized_level, invalid_level = configure_logging(config.log_level)
    if invalid_level:
        log_warning(
            logger,
            "Invalid THEMEKEEPER_LOG_LEVEL %r, falling back to %s",
            config.log_level,
            normalized_level,
        )

    log_info(
        logger,
        "Starting Themekeeper on %s:%d (log_level=%s)",
        config.host,
        config.port,
        normalized_level,
    )

    server = Granian(
        "themekeeper.runtime:create_app",
        address=config.host,
        port=config.port,
        interface=Interfaces.ASGI,
        factory=True,
        workers=1,
    )
    server.serve()


if __name__ == "__main__":
    main()
