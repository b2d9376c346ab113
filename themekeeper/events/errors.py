"""Webhook event decoding errors."""

from __future__ import annotations


class EventError(Exception):
    """Base exception for event decoding and field access failures."""


class MalformedEventError(EventError):
    """Raised when a request body cannot be turned into an event."""

    @classmethod
    def empty_body(cls) -> MalformedEventError:
        """Return an error for a request without a body."""
        return cls("Please send a request body")

    @classmethod
    def invalid_json(cls, detail: object) -> MalformedEventError:
        """Return an error for a body that is not valid JSON."""
        return cls(f"Invalid JSON payload: {detail}")

    @classmethod
    def not_an_object(cls) -> MalformedEventError:
        """Return an error for a JSON document that is not an object."""
        return cls("Event payload must be a JSON object")

    @classmethod
    def missing_topic(cls) -> MalformedEventError:
        """Return an error for a payload without a string ``topic``."""
        return cls("Event payload is missing a string 'topic'")


class MissingFieldError(EventError):
    """Raised when a required document field is absent or mistyped.

    Attributes
    ----------
    path
        Dotted key path of the field that could not be read.

    """

    def __init__(self, path: str, reason: str = "is missing") -> None:
        """Initialise with the dotted field path and a short reason."""
        self.path = path
        super().__init__(f"Field '{path}' {reason}")

    @classmethod
    def wrong_type(cls, path: str, expected: str) -> MissingFieldError:
        """Return an error for a field holding an unexpected JSON type."""
        return cls(path, f"is not of type {expected}")
