"""Topic dispatch table.

Maps webhook topics onto the mutation they trigger and whether the result is
committed. Created and updated topics share a route because both are full
overwrites. Topics outside the table are ignored so that new event kinds from
the theme editor never break the receiver.
"""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class MutationKind(enum.StrEnum):
    """Kinds of filesystem mutation an event can trigger."""

    REPLACE_THEME = "replace_theme"
    WRITE_TEMPLATE = "write_template"
    DELETE_TEMPLATE = "delete_template"
    WRITE_ASSET = "write_asset"
    DELETE_ASSET = "delete_asset"
    IGNORE = "ignore"


@dataclasses.dataclass(frozen=True, slots=True)
class TopicRoute:
    """Dispatch decision for one topic."""

    kind: MutationKind
    commits: bool = True


IGNORED_ROUTE = TopicRoute(MutationKind.IGNORE, commits=False)

TOPIC_ROUTES: dict[str, TopicRoute] = {
    "themes.updated": TopicRoute(MutationKind.REPLACE_THEME),
    "themes.updated.templates.created": TopicRoute(MutationKind.WRITE_TEMPLATE),
    "themes.updated.templates.updated": TopicRoute(MutationKind.WRITE_TEMPLATE),
    "themes.updated.templates.deleted": TopicRoute(MutationKind.DELETE_TEMPLATE),
    "themes.updated.assets.created": TopicRoute(MutationKind.WRITE_ASSET),
    "themes.updated.assets.updated": TopicRoute(MutationKind.WRITE_ASSET),
    "themes.updated.assets.deleted": TopicRoute(MutationKind.DELETE_ASSET),
}


def route_for(
    topic: str, routes: cabc.Mapping[str, TopicRoute] = TOPIC_ROUTES
) -> TopicRoute:
    """Return the route for ``topic`` in ``routes``, or ``IGNORED_ROUTE``."""
    return routes.get(topic, IGNORED_ROUTE)


__all__ = ["IGNORED_ROUTE", "TOPIC_ROUTES", "MutationKind", "TopicRoute", "route_for"]
