"""Record shop directories as git history.

Each processed event becomes exactly one commit that snapshots the whole
working tree, so handlers that touch many files (theme replace) still map to
a single history entry.
"""

from __future__ import annotations

import dataclasses
import shutil
import subprocess
import typing as typ

from .errors import CommitError

if typ.TYPE_CHECKING:
    from pathlib import Path

    from themekeeper.events import ThemeEvent


def compose_commit_message(event: ThemeEvent, file_name: str) -> str:
    """Return ``"<actor>: <verb> <file> - evt:<id>"`` for ``event``.

    >>> from themekeeper.events import ThemeEvent
    >>> evt = ThemeEvent(
    ...     topic="themes.updated.templates.created",
    ...     event_id=1,
    ...     actor_name="Joe Bloggs",
    ... )
    >>> compose_commit_message(evt, "foo.html")
    'Joe Bloggs: created foo.html - evt:1'

    """
    return f"{event.actor_name}: {event.verb} {file_name} - evt:{event.event_id}"


@dataclasses.dataclass(frozen=True, slots=True)
class GitIdentity:
    """Committer identity passed to git for every snapshot."""

    name: str = "themekeeper"
    email: str = "themekeeper@localhost"


class Snapshotter(typ.Protocol):
    """Interface for durably recording a directory's current contents."""

    def snapshot(self, directory: Path, message: str) -> None:
        """Record ``directory`` with ``message`` or raise ``CommitError``."""
        ...


class GitSnapshotter:
    """Snapshot directories by invoking the ``git`` binary.

    Parameters
    ----------
    identity
        Committer name and email; avoids depending on global git config.
    timeout_s
        Optional per-command timeout in seconds.

    """

    def __init__(
        self,
        identity: GitIdentity | None = None,
        *,
        timeout_s: float | None = None,
    ) -> None:
        """Configure committer identity and the optional command timeout."""
        self._identity = identity or GitIdentity()
        self._timeout_s = timeout_s

    def snapshot(self, directory: Path, message: str) -> None:
        """Initialise (if needed), stage everything and commit ``directory``.

        Raises
        ------
        CommitError
            If git is unavailable or any git command fails.

        """
        git = shutil.which("git")
        if git is None:
            raise CommitError.git_missing()

        if not (directory / ".git").exists():
            self._run([git, "init", "--quiet", "."], directory)
        self._run([git, "add", "--all", "."], directory)
        self._run(
            [
                git,
                "-c",
                f"user.name={self._identity.name}",
                "-c",
                f"user.email={self._identity.email}",
                "commit",
                "--allow-empty",
                "--quiet",
                "-m",
                message,
            ],
            directory,
        )

    def _run(self, command: list[str], directory: Path) -> None:
        try:
            result = subprocess.run(  # noqa: S603  # argv built from fixed git subcommands
                command,
                cwd=directory,
                check=False,
                capture_output=True,
                text=True,
                timeout=self._timeout_s,
            )
        except subprocess.TimeoutExpired as exc:
            raise CommitError.timed_out(command) from exc
        except OSError as exc:
            raise CommitError.not_started(command, exc) from exc
        if result.returncode != 0:
            raise CommitError.command_failed(command, result.returncode, result.stderr)


class CommitRecorder:
    """Compose commit messages for events and snapshot their directories."""

    def __init__(self, snapshotter: Snapshotter | None = None) -> None:
        """Create a recorder backed by ``snapshotter`` (git by default)."""
        self._snapshotter = snapshotter or GitSnapshotter()

    def record(self, directory: Path, file_name: str, event: ThemeEvent) -> str:
        """Snapshot ``directory`` for ``event`` and return the commit message."""
        message = compose_commit_message(event, file_name)
        self._snapshotter.snapshot(directory, message)
        return message


__all__ = [
    "CommitRecorder",
    "GitIdentity",
    "GitSnapshotter",
    "Snapshotter",
    "compose_commit_message",
]
