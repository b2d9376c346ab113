"""Version-control history for mirrored shop directories."""

from __future__ import annotations

from .errors import CommitError
from .git import (
    CommitRecorder,
    GitIdentity,
    GitSnapshotter,
    Snapshotter,
    compose_commit_message,
)

__all__ = [
    "CommitError",
    "CommitRecorder",
    "GitIdentity",
    "GitSnapshotter",
    "Snapshotter",
    "compose_commit_message",
]
