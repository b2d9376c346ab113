"""Version-control errors."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class CommitError(RuntimeError):
    """Raised when a shop directory cannot be snapshotted.

    Attributes
    ----------
    command
        The git argument vector that failed, when one ran.
    returncode
        Exit status of the failed command, when one ran.
    stderr
        Captured standard error of the failed command.

    """

    def __init__(
        self,
        message: str,
        *,
        command: cabc.Sequence[str] = (),
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        """Initialise with a message and optional command diagnostics."""
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)

    @classmethod
    def git_missing(cls) -> CommitError:
        """Return an error when no git binary is on ``PATH``."""
        return cls("git executable not found on PATH")

    @classmethod
    def command_failed(
        cls, command: cabc.Sequence[str], returncode: int, stderr: str
    ) -> CommitError:
        """Return an error for a git command exiting non-zero."""
        detail = stderr.strip() or "no output"
        return cls(
            f"{' '.join(command[1:])} exited with {returncode}: {detail}",
            command=command,
            returncode=returncode,
            stderr=stderr,
        )

    @classmethod
    def timed_out(cls, command: cabc.Sequence[str]) -> CommitError:
        """Return an error for a git command that did not finish in time."""
        return cls(f"{' '.join(command[1:])} timed out", command=command)

    @classmethod
    def not_started(cls, command: cabc.Sequence[str], exc: OSError) -> CommitError:
        """Return an error for a git command that could not be launched."""
        return cls(
            f"{' '.join(command[1:])} could not start: {exc}", command=command
        )
