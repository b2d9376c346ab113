"""Unit tests for the topic dispatch table."""

from __future__ import annotations

import pytest

from themekeeper.pipeline import IGNORED_ROUTE, MutationKind, TopicRoute, route_for


@pytest.mark.parametrize(
    ("topic", "kind"),
    [
        ("themes.updated", MutationKind.REPLACE_THEME),
        ("themes.updated.templates.created", MutationKind.WRITE_TEMPLATE),
        ("themes.updated.templates.updated", MutationKind.WRITE_TEMPLATE),
        ("themes.updated.templates.deleted", MutationKind.DELETE_TEMPLATE),
        ("themes.updated.assets.created", MutationKind.WRITE_ASSET),
        ("themes.updated.assets.updated", MutationKind.WRITE_ASSET),
        ("themes.updated.assets.deleted", MutationKind.DELETE_ASSET),
    ],
)
def test_known_topics_commit(topic: str, kind: MutationKind) -> None:
    """Every recognised topic maps to its mutation and commits."""
    assert route_for(topic) == TopicRoute(kind, commits=True)


@pytest.mark.parametrize(
    "topic",
    [
        "activation",
        "themes.created",
        "themes.updated.pages.created",
        "",
        "THEMES.UPDATED",
    ],
)
def test_unknown_topics_are_ignored(topic: str) -> None:
    """Unrecognised topics are a silent no-op without a commit."""
    route = route_for(topic)
    assert route is IGNORED_ROUTE
    assert route.kind is MutationKind.IGNORE
    assert route.commits is False


def test_created_and_updated_share_routes() -> None:
    """Create and update are indistinguishable overwrites."""
    for entity in ("templates", "assets"):
        created = route_for(f"themes.updated.{entity}.created")
        updated = route_for(f"themes.updated.{entity}.updated")
        assert created == updated
