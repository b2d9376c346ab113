"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import typing as typ

import falcon.testing
import pytest

from tests.helpers.fetchers import FakeFileFetcher
from tests.helpers.recording_logger import RecordingLogger
from themekeeper.api.app import AppDependencies, create_app
from themekeeper.api.factory import build_event_worker
from themekeeper.config import ThemekeeperConfig
from themekeeper.history import GitIdentity
from themekeeper.pipeline import PipelineEventLogger

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from themekeeper.pipeline import EventWorker


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    """Return the directory holding shop repositories for a test."""
    path = tmp_path / "repos"
    path.mkdir()
    return path


@pytest.fixture
def fetcher() -> FakeFileFetcher:
    """Return a fetcher serving ``b"test"`` for every URL."""
    return FakeFileFetcher()


@pytest.fixture
def recording_logger() -> RecordingLogger:
    """Return a logger double capturing pipeline events."""
    return RecordingLogger()


@pytest.fixture
def config(base_dir: Path) -> ThemekeeperConfig:
    """Return a configuration writing into ``base_dir``."""
    return ThemekeeperConfig(
        base_dir=base_dir,
        git_identity=GitIdentity(name="Themekeeper Tests", email="tests@example.test"),
    )


@pytest.fixture
def worker(
    config: ThemekeeperConfig,
    fetcher: FakeFileFetcher,
    recording_logger: RecordingLogger,
) -> cabc.Iterator[EventWorker]:
    """Yield a running worker wired to the fake fetcher."""
    event_worker = build_event_worker(
        config,
        fetcher=fetcher,
        event_logger=PipelineEventLogger(recording_logger),
    )
    event_worker.start()
    try:
        yield event_worker
    finally:
        event_worker.stop(timeout=5)


@pytest.fixture
def client(
    worker: EventWorker, recording_logger: RecordingLogger
) -> falcon.testing.TestClient:
    """Build a test client around the running worker."""
    deps = AppDependencies(
        worker=worker, event_logger=PipelineEventLogger(recording_logger)
    )
    return falcon.testing.TestClient(create_app(deps))
