"""Data structures for backup operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Sequence, Union

from .._exclude import DEFAULT_IGNORE_FILENAMES

# Default blacklist of the desktop front end.
DEFAULT_BLACKLIST = ("node_modules", ".git", "dist", "target", "build")


class CollisionPolicy(str, Enum):
    """What to do when a destination file already exists.

    Members: ``OVERWRITE``, ``SKIP``, ``RENAME``.
    """
    OVERWRITE = "overwrite"
    SKIP = "skip"
    RENAME = "rename"

    def __str__(self) -> str:          # noqa: D105
        return self.value

    @classmethod
    def parse(cls, value: CollisionPolicy | str | None) -> CollisionPolicy:
        """Convert *value* to a policy; unrecognized values mean ``OVERWRITE``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OVERWRITE


@dataclass
class BackupRequest:
    """Everything one backup run needs.

    Attributes:
        source_paths: Files or directories to back up, processed in order.
        target_path: Directory the sources are copied into (created if
            missing).
        blacklist: Glob patterns or literal names to exclude.
        respect_ignore_files: Honor ``.gitignore``-style files inside the
            source trees.
        include_source_root_name: Copy a directory source ``src`` to
            ``target/src`` rather than pouring its contents into ``target``.
        collision_policy: :class:`CollisionPolicy` (a plain string is
            accepted and parsed).
        ignore_filenames: Ignore-file names read when
            *respect_ignore_files* is set.
    """
    source_paths: Sequence[str | Path]
    target_path: str | Path
    blacklist: Sequence[str] = ()
    respect_ignore_files: bool = False
    include_source_root_name: bool = True
    collision_policy: CollisionPolicy | str = CollisionPolicy.OVERWRITE
    ignore_filenames: Sequence[str] = DEFAULT_IGNORE_FILENAMES

    def __post_init__(self) -> None:
        self.collision_policy = CollisionPolicy.parse(self.collision_policy)


@dataclass(frozen=True)
class TraversalEntry:
    """A directory or file found under a source root.

    Attributes:
        abs_path: Full path on disk.
        rel_path: Path relative to the source root (forward slashes).
        is_dir: ``True`` for directories.
    """
    abs_path: Path
    rel_path: str
    is_dir: bool


@dataclass(frozen=True)
class WalkError:
    """A traversal failure reported in-band by the walker."""
    path: str
    message: str


@dataclass(frozen=True)
class WriteTo:
    """Collision outcome: write the file to *path*."""
    path: Path


@dataclass(frozen=True)
class Skip:
    """Collision outcome: leave the existing destination alone."""


CollisionAction = Union[WriteTo, Skip]


@dataclass(frozen=True)
class ProgressEvent:
    """Emitted after each successful file copy.

    ``copied_count + skipped_count`` may exceed ``total_count`` if the
    source tree changed after it was counted.
    """
    current_file: str
    copied_count: int
    skipped_count: int
    total_count: int


@dataclass(frozen=True)
class ErrorEvent:
    """Emitted for each failed filesystem operation."""
    message: str
    file: str | None = None


@dataclass
class FileError:
    """A path that failed during a backup.

    Attributes:
        path: The path that caused the error.
        error: Human-readable error message.
    """
    path: str
    error: str


@dataclass
class BackupResult:
    """Outcome of :func:`~dirbackup.run_backup`.

    Attributes:
        success: ``True`` if no error occurred and the run was not
            cancelled.
        copied_count: Files written.
        skipped_count: Files left alone because of the ``skip`` policy.
        message: One-line summary.
        total_count: Files counted before copying (advisory).
        errors: Per-path errors.
        cancelled: ``True`` if the run stopped early on request.
    """
    success: bool
    copied_count: int
    skipped_count: int
    message: str
    total_count: int = 0
    errors: list[FileError] = field(default_factory=list)
    cancelled: bool = False


class BackupObserver:
    """Receives backup events.  Subclass and override what you need.

    Delivery is best-effort: an exception raised by a handler is logged
    and otherwise ignored.
    """

    def on_progress(self, event: ProgressEvent) -> None:
        pass

    def on_error(self, event: ErrorEvent) -> None:
        pass

    def on_complete(self, result: BackupResult) -> None:
        pass


def format_summary(copied: int, skipped: int, errors: int, *, cancelled: bool = False) -> str:
    """Build the completion message.

    The skip count is only mentioned when no error occurred.
    """
    if cancelled:
        return f"Cancelled after copying {copied} files"
    if errors:
        return f"Copied {copied} files with {errors} errors"
    if skipped:
        return f"Copied {copied} files, skipped {skipped}"
    return f"Successfully copied {copied} files"
