"""Process one webhook event from dispatch through commit.

The processor never raises for expected failures: missing fields, unsafe
names, absent files, download errors and filesystem errors drop the event
without a commit, and commit failures leave the mutation in place. Each
outcome is logged and returned so callers and tests can observe it.
"""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

from themekeeper.events import EventError
from themekeeper.history import CommitError
from themekeeper.mirror import MirrorError

from .dispatch import TOPIC_ROUTES, MutationKind, route_for
from .observability import PipelineEventLogger

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from themekeeper.events import Document, ThemeEvent
    from themekeeper.history import CommitRecorder
    from themekeeper.mirror import ShopDirectoryResolver, ThemeMutator

    from .dispatch import TopicRoute

    _Mutation: typ.TypeAlias = cabc.Callable[[Path, Document], str]


class ProcessingOutcome(enum.StrEnum):
    """Terminal states of a processed event."""

    IGNORED = "ignored"
    APPLIED = "applied"
    MUTATION_FAILED = "mutation_failed"
    COMMITTED = "committed"
    COMMIT_FAILED = "commit_failed"


@dataclasses.dataclass(frozen=True, slots=True)
class ProcessingResult:
    """Summary of processing a single event."""

    outcome: ProcessingOutcome
    kind: MutationKind
    directory: Path | None = None
    file_name: str | None = None
    commit_message: str | None = None
    error: BaseException | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class EventProcessorDependencies:
    """Collaborators of ``EventProcessor``."""

    resolver: ShopDirectoryResolver
    mutator: ThemeMutator
    recorder: CommitRecorder


class EventProcessor:
    """Apply an event to its shop directory and record the result."""

    def __init__(
        self,
        dependencies: EventProcessorDependencies,
        *,
        event_logger: PipelineEventLogger | None = None,
        routes: cabc.Mapping[str, TopicRoute] | None = None,
    ) -> None:
        """Bind the processor to its collaborators.

        ``routes`` replaces the default topic table; topics missing from it
        are ignored. Routes with ``commits=False`` stop after the mutation.
        """
        self._resolver = dependencies.resolver
        self._routes = TOPIC_ROUTES if routes is None else routes
        self._recorder = dependencies.recorder
        self._event_logger = event_logger or PipelineEventLogger()
        mutator = dependencies.mutator
        self._mutations: dict[MutationKind, _Mutation] = {
            MutationKind.REPLACE_THEME: mutator.replace_theme,
            MutationKind.WRITE_TEMPLATE: mutator.write_template,
            MutationKind.DELETE_TEMPLATE: mutator.delete_template,
            MutationKind.WRITE_ASSET: mutator.write_asset,
            MutationKind.DELETE_ASSET: mutator.delete_asset,
        }

    def process(self, event: ThemeEvent) -> ProcessingResult:
        """Process ``event`` to completion and return its outcome."""
        route = route_for(event.topic, self._routes)
        if route.kind is MutationKind.IGNORE:
            self._event_logger.log_event_ignored(event)
            return ProcessingResult(ProcessingOutcome.IGNORED, route.kind)

        try:
            directory = self._resolver.resolve(event)
            mutate = self._mutations[route.kind]
            file_name = mutate(directory, _target(route.kind, event))
        except (EventError, MirrorError, OSError) as exc:
            self._event_logger.log_mutation_failed(event, exc)
            return ProcessingResult(
                ProcessingOutcome.MUTATION_FAILED, route.kind, error=exc
            )

        self._event_logger.log_mutation_applied(
            event, route.kind, directory, file_name
        )
        if not route.commits:
            return ProcessingResult(
                ProcessingOutcome.APPLIED,
                route.kind,
                directory=directory,
                file_name=file_name,
            )

        try:
            message = self._recorder.record(directory, file_name, event)
        except CommitError as exc:
            self._event_logger.log_commit_failed(event, exc)
            return ProcessingResult(
                ProcessingOutcome.COMMIT_FAILED,
                route.kind,
                directory=directory,
                file_name=file_name,
                error=exc,
            )

        self._event_logger.log_commit_recorded(event, message)
        return ProcessingResult(
            ProcessingOutcome.COMMITTED,
            route.kind,
            directory=directory,
            file_name=file_name,
            commit_message=message,
        )


def _target(kind: MutationKind, event: ThemeEvent) -> Document:
    # Delete events carry only a top-level ``item_slug``, not an embedded item.
    if kind in {MutationKind.DELETE_TEMPLATE, MutationKind.DELETE_ASSET}:
        return event.payload
    return event.item


__all__ = [
    "EventProcessor",
    "EventProcessorDependencies",
    "ProcessingOutcome",
    "ProcessingResult",
]
