"""Unit tests for pipeline error categorisation and structured log lines."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.helpers.event_builders import event_from, template_payload
from tests.helpers.recording_logger import RecordingLogger
from themekeeper.events import MalformedEventError, MissingFieldError
from themekeeper.history import CommitError
from themekeeper.mirror import (
    AssetFetchError,
    MissingShopKeyError,
    TargetNotFoundError,
    UnsafePathError,
)
from themekeeper.pipeline import (
    ErrorCategory,
    MutationKind,
    PipelineEventLogger,
    PipelineEventType,
    categorize_error,
)


@pytest.mark.parametrize(
    ("error", "category"),
    [
        (MalformedEventError.empty_body(), ErrorCategory.MALFORMED_EVENT),
        (MissingFieldError("body"), ErrorCategory.MISSING_FIELD),
        (MissingShopKeyError("themes.updated"), ErrorCategory.MISSING_FIELD),
        (UnsafePathError("../x", Path("/srv")), ErrorCategory.INVALID_PATH),
        (TargetNotFoundError(Path("/srv/acme/x")), ErrorCategory.NOT_FOUND),
        (FileNotFoundError("x"), ErrorCategory.NOT_FOUND),
        (AssetFetchError.http_error("https://x.test", 404), ErrorCategory.TRANSPORT),
        (CommitError.git_missing(), ErrorCategory.VERSION_CONTROL),
        (PermissionError("denied"), ErrorCategory.FILESYSTEM),
        (RuntimeError("??"), ErrorCategory.UNKNOWN),
    ],
)
def test_categorize_error(error: BaseException, category: ErrorCategory) -> None:
    """Each failure maps to the alerting category for its cause."""
    assert categorize_error(error) is category


class TestPipelineEventLogger:
    """Tests for the structured log lines."""

    @pytest.fixture
    def logger(self) -> RecordingLogger:
        """Return a logger double."""
        return RecordingLogger()

    @pytest.fixture
    def event_logger(self, logger: RecordingLogger) -> PipelineEventLogger:
        """Return an event logger writing to the double."""
        return PipelineEventLogger(logger)

    def test_event_accepted(
        self, logger: RecordingLogger, event_logger: PipelineEventLogger
    ) -> None:
        """Accepted events are logged at INFO with their identifiers."""
        event_logger.log_event_accepted(event_from(template_payload(sequence=7)))

        assert logger.messages("INFO") == [
            "[event.accepted] topic=themes.updated.templates.created shop=acme evt=7"
        ]

    def test_event_rejected_is_a_warning(
        self, logger: RecordingLogger, event_logger: PipelineEventLogger
    ) -> None:
        """Malformed bodies are logged at WARNING with their category."""
        event_logger.log_event_rejected(MalformedEventError.empty_body())

        (message,) = logger.messages("WARNING")
        assert message.startswith(f"[{PipelineEventType.EVENT_REJECTED}]")
        assert "error_category=malformed_event" in message

    def test_hook_activated(
        self, logger: RecordingLogger, event_logger: PipelineEventLogger
    ) -> None:
        """Activation handshakes are logged with the shop."""
        event_logger.log_hook_activated("acme")
        assert logger.messages("INFO") == ["[hook.activated] shop=acme"]

    def test_mutation_applied(
        self, logger: RecordingLogger, event_logger: PipelineEventLogger
    ) -> None:
        """Mutation lines name the kind, directory and file."""
        event_logger.log_mutation_applied(
            event_from(template_payload()),
            MutationKind.WRITE_TEMPLATE,
            Path("/srv/acme"),
            "foo.html",
        )

        (message,) = logger.messages("INFO")
        assert "kind=write_template" in message
        assert "directory=/srv/acme" in message
        assert message.endswith("file=foo.html")

    def test_mutation_failed_is_an_error(
        self, logger: RecordingLogger, event_logger: PipelineEventLogger
    ) -> None:
        """Failed mutations are logged at ERROR with type and category."""
        event_logger.log_mutation_failed(
            event_from(template_payload()), MissingFieldError("body")
        )

        (message,) = logger.messages("ERROR")
        assert message.startswith("[mutation.failed]")
        assert "error_type=MissingFieldError" in message
        assert "error_category=missing_field" in message
        assert "error_message=Field 'body' is missing" in message

    def test_commit_recorded_quotes_message(
        self, logger: RecordingLogger, event_logger: PipelineEventLogger
    ) -> None:
        """Commit lines quote the commit message."""
        event_logger.log_commit_recorded(
            event_from(template_payload()), "Joe Bloggs: created foo.html - evt:1"
        )

        (message,) = logger.messages("INFO")
        assert message.endswith("message='Joe Bloggs: created foo.html - evt:1'")

    def test_commit_failed(
        self, logger: RecordingLogger, event_logger: PipelineEventLogger
    ) -> None:
        """Commit failures are logged at ERROR as version-control errors."""
        event_logger.log_commit_failed(
            event_from(template_payload()), CommitError.git_missing()
        )

        (message,) = logger.messages("ERROR")
        assert "error_category=version_control" in message

    def test_unexpected_error_attaches_exception(
        self, logger: RecordingLogger, event_logger: PipelineEventLogger
    ) -> None:
        """Unexpected worker errors carry the exception for a traceback."""
        exc = RuntimeError("surprise")
        event_logger.log_unexpected_error(event_from(template_payload()), exc)

        ((level, message, exc_info, _),) = logger.calls
        assert level == "ERROR", "unexpected errors log at ERROR"
        assert message == (
            "[worker.unexpected_error] topic=themes.updated.templates.created "
            "shop=acme evt=1 error_type=RuntimeError error_message=surprise"
        ), "unexpected error line is malformed"
        assert exc_info is exc, "exception must travel as exc_info"
