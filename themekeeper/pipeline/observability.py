"""Structured log events for the webhook pipeline.

Every stage of an event's life (acceptance, mutation, commit) is logged as a
``[event.type] key=value ...`` line so log aggregators can follow a shop's
history and alert on failure categories. Processing failures are never
visible to webhook callers, which makes these lines the only record of them.
"""

from __future__ import annotations

import enum
import typing as typ

from themekeeper.events import MalformedEventError, MissingFieldError
from themekeeper.history import CommitError
from themekeeper.logging import (
    get_logger,
    log_error,
    log_exception,
    log_info,
    log_warning,
)
from themekeeper.mirror import (
    AssetFetchError,
    MissingShopKeyError,
    TargetNotFoundError,
    UnsafePathError,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

    from themekeeper.events import ThemeEvent
    from themekeeper.logging import SupportsLog

    from .dispatch import MutationKind


class PipelineEventType(enum.StrEnum):
    """Structured log event types for webhook processing."""

    HOOK_ACTIVATED = "hook.activated"
    EVENT_REJECTED = "event.rejected"
    EVENT_ACCEPTED = "event.accepted"
    EVENT_IGNORED = "event.ignored"
    MUTATION_APPLIED = "mutation.applied"
    MUTATION_FAILED = "mutation.failed"
    COMMIT_RECORDED = "commit.recorded"
    COMMIT_FAILED = "commit.failed"
    WORKER_UNEXPECTED_ERROR = "worker.unexpected_error"


class ErrorCategory(enum.StrEnum):
    """Categories for error classification in alerts."""

    MALFORMED_EVENT = "malformed_event"
    MISSING_FIELD = "missing_field"
    INVALID_PATH = "invalid_path"
    NOT_FOUND = "not_found"
    TRANSPORT = "transport"
    VERSION_CONTROL = "version_control"
    FILESYSTEM = "filesystem"
    UNKNOWN = "unknown"


_EXCEPTION_CATEGORY_MAP: tuple[tuple[type[BaseException], ErrorCategory], ...] = (
    (MalformedEventError, ErrorCategory.MALFORMED_EVENT),
    (MissingShopKeyError, ErrorCategory.MISSING_FIELD),
    (MissingFieldError, ErrorCategory.MISSING_FIELD),
    (UnsafePathError, ErrorCategory.INVALID_PATH),
    (TargetNotFoundError, ErrorCategory.NOT_FOUND),
    (FileNotFoundError, ErrorCategory.NOT_FOUND),
    (AssetFetchError, ErrorCategory.TRANSPORT),
    (CommitError, ErrorCategory.VERSION_CONTROL),
    (OSError, ErrorCategory.FILESYSTEM),
)


def categorize_error(exc: BaseException) -> ErrorCategory:
    """Categorize an exception for alerting purposes."""
    for exc_type, category in _EXCEPTION_CATEGORY_MAP:
        if isinstance(exc, exc_type):
            return category
    return ErrorCategory.UNKNOWN


class PipelineEventLogger:
    """Emit structured pipeline events through femtologging.

    Success is logged at INFO, rejected requests at WARNING and processing
    failures at ERROR.
    """

    def __init__(self, logger: SupportsLog | None = None) -> None:
        """Log to ``logger``, defaulting to this module's femtologging logger."""
        self._logger: SupportsLog = logger or get_logger(__name__)

    def log_hook_activated(self, shop_key: str) -> None:
        """Log a webhook activation handshake."""
        log_info(
            self._logger, "[%s] shop=%s", PipelineEventType.HOOK_ACTIVATED, shop_key
        )

    def log_event_rejected(self, error: BaseException) -> None:
        """Log a request body that could not be parsed."""
        log_warning(
            self._logger,
            "[%s] error_category=%s error_message=%s",
            PipelineEventType.EVENT_REJECTED,
            categorize_error(error),
            str(error),
        )

    def log_event_accepted(self, event: ThemeEvent) -> None:
        """Log an event handed to the worker queue."""
        log_info(
            self._logger,
            "[%s] topic=%s shop=%s evt=%d",
            PipelineEventType.EVENT_ACCEPTED,
            event.topic,
            event.shop_key,
            event.event_id,
        )

    def log_event_ignored(self, event: ThemeEvent) -> None:
        """Log an event whose topic has no mutation."""
        log_info(
            self._logger,
            "[%s] topic=%s shop=%s evt=%d",
            PipelineEventType.EVENT_IGNORED,
            event.topic,
            event.shop_key,
            event.event_id,
        )

    def log_mutation_applied(
        self,
        event: ThemeEvent,
        kind: MutationKind,
        directory: Path,
        file_name: str,
    ) -> None:
        """Log a successful filesystem mutation."""
        log_info(
            self._logger,
            "[%s] topic=%s shop=%s evt=%d kind=%s directory=%s file=%s",
            PipelineEventType.MUTATION_APPLIED,
            event.topic,
            event.shop_key,
            event.event_id,
            kind,
            directory,
            file_name,
        )

    def log_mutation_failed(self, event: ThemeEvent, error: BaseException) -> None:
        """Log a mutation that failed; the event is dropped."""
        log_error(
            self._logger,
            "[%s] topic=%s shop=%s evt=%d error_type=%s error_category=%s "
            "error_message=%s",
            PipelineEventType.MUTATION_FAILED,
            event.topic,
            event.shop_key,
            event.event_id,
            type(error).__name__,
            categorize_error(error),
            str(error),
        )

    def log_commit_recorded(self, event: ThemeEvent, message: str) -> None:
        """Log a recorded snapshot."""
        log_info(
            self._logger,
            "[%s] topic=%s shop=%s evt=%d message=%r",
            PipelineEventType.COMMIT_RECORDED,
            event.topic,
            event.shop_key,
            event.event_id,
            message,
        )

    def log_commit_failed(self, event: ThemeEvent, error: BaseException) -> None:
        """Log a snapshot failure; the mutation is left in place."""
        log_error(
            self._logger,
            "[%s] topic=%s shop=%s evt=%d error_category=%s error_message=%s",
            PipelineEventType.COMMIT_FAILED,
            event.topic,
            event.shop_key,
            event.event_id,
            categorize_error(error),
            str(error),
        )

    def log_unexpected_error(self, event: ThemeEvent, error: BaseException) -> None:
        """Log an exception that escaped processing, with its traceback."""
        log_exception(
            self._logger,
            "[%s] topic=%s shop=%s evt=%d error_type=%s error_message=%s",
            PipelineEventType.WORKER_UNEXPECTED_ERROR,
            event.topic,
            event.shop_key,
            event.event_id,
            type(error).__name__,
            str(error),
            exc=error,
        )


__all__ = [
    "ErrorCategory",
    "PipelineEventLogger",
    "PipelineEventType",
    "categorize_error",
]
