"""The backup engine."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol

from .._exclude import PathMatcher
from ..exceptions import NoSourcesError, SourceNotFoundError, TargetCreateError
from ._io import copy_file, ensure_dir
from ._resolve import resolve_collision
from ._types import (
    BackupObserver,
    BackupRequest,
    BackupResult,
    CollisionPolicy,
    ErrorEvent,
    FileError,
    ProgressEvent,
    Skip,
    WalkError,
    format_summary,
)
from ._walk import count_files, walk_tree

logger = logging.getLogger(__name__)


class CancelToken(Protocol):
    """Anything with an ``is_set()`` method, e.g. :class:`threading.Event`."""

    def is_set(self) -> bool: ...


# ---------------------------------------------------------------------------
# Run state
# ---------------------------------------------------------------------------

class _Run:
    """Counters, errors and event delivery for one backup invocation."""

    def __init__(self, observer: BackupObserver | None, total: int,
                 cancel: CancelToken | None) -> None:
        self.observer = observer
        self.total = total
        self.cancel = cancel
        self.copied = 0
        self.skipped = 0
        self.errors: list[FileError] = []
        self.cancelled = False

    def check_cancelled(self) -> bool:
        if not self.cancelled and self.cancel is not None and self.cancel.is_set():
            logger.debug("backup cancelled after %d files", self.copied)
            self.cancelled = True
        return self.cancelled

    def emit(self, method: str, payload) -> None:
        """Deliver *payload* to the observer; failures are logged and dropped."""
        if self.observer is None:
            return
        try:
            getattr(self.observer, method)(payload)
        except Exception:
            logger.warning("observer %s failed", method, exc_info=True)

    def fail(self, path: str, error: str, exc: OSError | str, *, file: str | None = None) -> None:
        logger.warning("%s", error)
        self.errors.append(FileError(path=path, error=error))
        self.emit("on_error", ErrorEvent(message=str(exc), file=file))

    def copy(self, src: Path, dest: Path, label: str, policy: CollisionPolicy) -> None:
        """Copy *src* to *dest* after applying the collision policy."""
        action = resolve_collision(dest, policy)
        if isinstance(action, Skip):
            logger.debug("skipping existing %s", dest)
            self.skipped += 1
            return
        if action.path != dest:
            logger.debug("renaming %s -> %s", dest, action.path.name)
        try:
            copy_file(src, action.path)
        except OSError as exc:
            self.fail(str(src), f"Failed to copy {src}: {exc}", exc, file=str(src))
            return
        self.copied += 1
        self.emit("on_progress", ProgressEvent(
            current_file=label,
            copied_count=self.copied,
            skipped_count=self.skipped,
            total_count=self.total,
        ))


# ---------------------------------------------------------------------------
# Per-source handling
# ---------------------------------------------------------------------------

def _backup_file(run: _Run, source: Path, target: Path,
                 matcher: PathMatcher, policy: CollisionPolicy) -> None:
    name = source.name
    if not name or matcher.is_excluded(name):
        return
    run.copy(source, target / name, name, policy)


def _backup_dir(run: _Run, source: Path, target: Path,
                matcher: PathMatcher, request: BackupRequest,
                policy: CollisionPolicy) -> None:
    if request.include_source_root_name and source.name:
        dest_root = target / source.name
    else:
        dest_root = target
    try:
        ensure_dir(dest_root)
    except OSError as exc:
        run.fail(str(dest_root), f"Failed to create target dir {dest_root}: {exc}",
                 exc, file=str(dest_root))
        return

    for item in walk_tree(
        source, request.respect_ignore_files,
        ignore_filenames=request.ignore_filenames,
    ):
        if run.check_cancelled():
            return
        if isinstance(item, WalkError):
            run.fail(item.path, f"Walker error: {item.path}: {item.message}",
                     item.message, file=item.path)
            continue
        if matcher.is_excluded(item.rel_path):
            continue

        dest = dest_root.joinpath(*item.rel_path.split("/"))
        if item.is_dir:
            try:
                ensure_dir(dest)
            except OSError as exc:
                run.fail(str(dest), f"Failed to create dir {dest}: {exc}",
                         exc, file=str(item.abs_path))
            continue

        try:
            ensure_dir(dest.parent)
        except OSError as exc:
            run.fail(str(dest.parent), f"Failed to create parent dir {dest.parent}: {exc}",
                     exc, file=str(item.abs_path))
            continue
        run.copy(item.abs_path, dest, item.rel_path, policy)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def _validate(request: BackupRequest) -> None:
    if not request.source_paths:
        raise NoSourcesError()
    for source in request.source_paths:
        if not os.path.exists(source):
            raise SourceNotFoundError(str(source))


def run_backup(
    request: BackupRequest,
    observer: BackupObserver | None = None,
    *,
    cancel: CancelToken | None = None,
) -> BackupResult:
    """Copy the request's sources into its target directory.

    Raises a :class:`~dirbackup.exceptions.BackupRequestError` subclass,
    before touching the filesystem, if the source list is empty or a
    source does not exist, and if the target directory cannot be created.
    Every other failure is recorded in the result's ``errors``, reported
    to *observer* and does not stop the run.

    Progress events carry a total computed by a counting pass made before
    any copy; it can drift if the tree changes in between.

    If *cancel* is set during the run, processing stops at the next entry
    and the result is marked ``cancelled``.  The observer's
    ``on_complete`` is called exactly once, with the returned result.
    """
    _validate(request)
    target = Path(request.target_path)
    try:
        ensure_dir(target)
    except OSError as exc:
        raise TargetCreateError(str(target), exc) from exc

    matcher = PathMatcher(request.blacklist)
    logger.debug("blacklist: %r", matcher)
    total = count_files(
        request.source_paths, matcher, request.respect_ignore_files,
        ignore_filenames=request.ignore_filenames,
    )
    logger.debug("%d files to copy", total)

    run = _Run(observer, total, cancel)
    policy = CollisionPolicy.parse(request.collision_policy)
    for raw in request.source_paths:
        if run.check_cancelled():
            break
        # Resolves "." and ".." so the source name is a real directory name
        source = Path(os.path.abspath(raw))
        logger.debug("backing up %s", source)
        if source.is_file():
            _backup_file(run, source, target, matcher, policy)
        elif source.is_dir():
            _backup_dir(run, source, target, matcher, request, policy)

    message = format_summary(run.copied, run.skipped, len(run.errors),
                             cancelled=run.cancelled)
    result = BackupResult(
        success=not run.errors and not run.cancelled,
        copied_count=run.copied,
        skipped_count=run.skipped,
        message=message,
        total_count=total,
        errors=run.errors,
        cancelled=run.cancelled,
    )
    run.emit("on_complete", result)
    return result
