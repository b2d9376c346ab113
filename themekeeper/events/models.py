"""Typed webhook event model and its JSON parser.

Only ``topic`` is mandatory at parse time. Every other field is extracted on
a best-effort basis because the handler matched by the topic is the one that
knows which fields it needs.
"""

from __future__ import annotations

import dataclasses
import typing as typ

import msgspec

from .document import Document
from .errors import MalformedEventError

ACTIVATION_TOPIC = "activation"


@dataclasses.dataclass(frozen=True, slots=True)
class ThemeEvent:
    """A single change notification from the theme editor.

    Attributes
    ----------
    topic
        Dot-segmented event kind, e.g. ``themes.updated.assets.created``.
    event_id
        Source sequence number; only used in commit messages.
    actor_name
        Display name of the user who triggered the change.
    actor_id
        Identifier of the user who triggered the change.
    shop_key
        Shop subdomain; empty when the payload omitted it.
    created_at
        Opaque source timestamp, passed through untouched.
    item
        The embedded entity (theme, template or asset).
    payload
        The whole decoded document; delete events only carry ``item_slug``
        at the top level.

    """

    topic: str
    event_id: int = 0
    actor_name: str = ""
    actor_id: int = 0
    shop_key: str = ""
    created_at: str = ""
    item: Document = dataclasses.field(default_factory=Document, hash=False)
    payload: Document = dataclasses.field(default_factory=Document, hash=False)

    @property
    def verb(self) -> str:
        """Return the last dot-segment of the topic."""
        return self.topic.rsplit(".", 1)[-1]

    @property
    def is_activation(self) -> bool:
        """Return ``True`` for the webhook activation handshake."""
        return self.topic == ACTIVATION_TOPIC

    @classmethod
    def from_document(cls, document: Document) -> ThemeEvent:
        """Build an event from an already decoded payload document.

        Raises
        ------
        MalformedEventError
            If the document has no string ``topic``.

        """
        topic = document.string_or("topic")
        if not topic:
            raise MalformedEventError.missing_topic()
        return cls(
            topic=topic,
            event_id=document.int_or("sequence"),
            actor_name=document.string_or("user_name"),
            actor_id=document.int_or("user_id"),
            shop_key=document.string_or("shop_subdomain"),
            created_at=document.string_or("created_on"),
            item=document.object_or_empty("_embedded", "item"),
            payload=document,
        )


def parse_event(body: bytes) -> ThemeEvent:
    """Decode a request body into a ``ThemeEvent``.

    Parameters
    ----------
    body
        Raw JSON bytes from the webhook request.

    Returns
    -------
    ThemeEvent
        The parsed event.

    Raises
    ------
    MalformedEventError
        If the body is empty, is not a JSON object, or lacks a topic.

    """
    if not body or not body.strip():
        raise MalformedEventError.empty_body()
    try:
        decoded = msgspec.json.decode(body, type=dict[str, typ.Any])
    except msgspec.ValidationError as exc:
        raise MalformedEventError.not_an_object() from exc
    except msgspec.DecodeError as exc:
        raise MalformedEventError.invalid_json(exc) from exc
    return ThemeEvent.from_document(Document(decoded))


__all__ = ["ACTIVATION_TOPIC", "ThemeEvent", "parse_event"]
