"""Event pipeline: topic dispatch, processing and the single-consumer worker."""

from __future__ import annotations

from .dispatch import (
    IGNORED_ROUTE,
    TOPIC_ROUTES,
    MutationKind,
    TopicRoute,
    route_for,
)
from .observability import (
    ErrorCategory,
    PipelineEventLogger,
    PipelineEventType,
    categorize_error,
)
from .processor import (
    EventProcessor,
    EventProcessorDependencies,
    ProcessingOutcome,
    ProcessingResult,
)
from .worker import DEFAULT_QUEUE_CAPACITY, EventHandler, EventWorker

__all__ = [
    "DEFAULT_QUEUE_CAPACITY",
    "IGNORED_ROUTE",
    "TOPIC_ROUTES",
    "ErrorCategory",
    "EventHandler",
    "EventProcessor",
    "EventProcessorDependencies",
    "EventWorker",
    "MutationKind",
    "PipelineEventLogger",
    "PipelineEventType",
    "ProcessingOutcome",
    "ProcessingResult",
    "TopicRoute",
    "categorize_error",
    "route_for",
]
