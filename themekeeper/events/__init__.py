"""Webhook event decoding: structured documents and typed events."""

from __future__ import annotations

from .document import Document
from .errors import EventError, MalformedEventError, MissingFieldError
from .models import ACTIVATION_TOPIC, ThemeEvent, parse_event

__all__ = [
    "ACTIVATION_TOPIC",
    "Document",
    "EventError",
    "MalformedEventError",
    "MissingFieldError",
    "ThemeEvent",
    "parse_event",
]
