"""Factory for building the event worker from configuration.

Usage
-----
Build and start a worker for the API layer::

    from themekeeper.api.factory import build_event_worker
    from themekeeper.config import ThemekeeperConfig

    worker = build_event_worker(ThemekeeperConfig.from_env())
    worker.start()

"""

from __future__ import annotations

import typing as typ

from themekeeper.history import CommitRecorder, GitSnapshotter
from themekeeper.mirror import HttpxFileFetcher, ShopDirectoryResolver, ThemeMutator
from themekeeper.pipeline import (
    EventProcessor,
    EventProcessorDependencies,
    EventWorker,
    PipelineEventLogger,
)

if typ.TYPE_CHECKING:
    from themekeeper.config import ThemekeeperConfig
    from themekeeper.mirror import FileFetcher

__all__ = ["build_event_worker"]


def build_event_worker(
    config: ThemekeeperConfig,
    *,
    fetcher: FileFetcher | None = None,
    event_logger: PipelineEventLogger | None = None,
) -> EventWorker:
    """Assemble the processing pipeline and wrap it in a stopped worker.

    Parameters
    ----------
    config
        Receiver configuration (base directory, queue size, git identity).
    fetcher
        Optional asset fetcher; defaults to an httpx-backed fetcher honouring
        ``config.fetch_timeout_s``.
    event_logger
        Optional structured logger shared by processor and worker.

    Returns
    -------
    EventWorker
        Worker ready to be started.

    """
    resolved_logger = event_logger or PipelineEventLogger()
    dependencies = EventProcessorDependencies(
        resolver=ShopDirectoryResolver(config.base_dir),
        mutator=ThemeMutator(
            fetcher or HttpxFileFetcher(timeout_s=config.fetch_timeout_s)
        ),
        recorder=CommitRecorder(GitSnapshotter(config.git_identity)),
    )
    processor = EventProcessor(dependencies, event_logger=resolved_logger)
    return EventWorker(
        processor,
        capacity=config.queue_capacity,
        event_logger=resolved_logger,
    )
