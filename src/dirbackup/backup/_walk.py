"""Source-tree traversal and the counting pass."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, Sequence

from .._exclude import DEFAULT_IGNORE_FILENAMES, IgnoreRules, PathMatcher
from ._types import TraversalEntry, WalkError


# ---------------------------------------------------------------------------
# Directory walking
# ---------------------------------------------------------------------------

def _list_dir(path: Path) -> list[os.DirEntry]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda e: e.name)


def _relative(base: Path, path: str) -> str | None:
    try:
        rel = Path(path).relative_to(base)
    except ValueError:
        return None
    return str(rel).replace(os.sep, "/")


def walk_tree(
    root: str | os.PathLike,
    respect_ignore_files: bool = False,
    *,
    ignore_filenames: Sequence[str] = DEFAULT_IGNORE_FILENAMES,
) -> Iterator[TraversalEntry | WalkError]:
    """Yield every directory and file under *root*, depth-first.

    Entries of one directory come in name order, and a directory is always
    yielded before its descendants.  The root itself is not yielded.
    Hidden entries are included.  Symlinked directories are yielded but
    not descended into; symlinks to files are yielded as files.  Anything
    that is neither a file nor a directory is left out.

    When *respect_ignore_files* is set, entries matched by ignore files are
    not yielded and ignored directories are not descended into.  Blacklist
    filtering is left to the caller, entry by entry.

    Unreadable directories (and ignore files) are yielded as
    :class:`WalkError` and the walk goes on.
    """
    base = Path(root)
    rules: IgnoreRules | None = None
    if respect_ignore_files:
        rules = IgnoreRules(base, filenames=ignore_filenames)
        try:
            rules.load_exclude_file()
        except OSError as exc:
            yield WalkError(str(base / ".git" / "info" / "exclude"), str(exc))

    stack: list[Iterator[os.DirEntry]] = []

    def descend(abs_dir: Path, rel_dir: str) -> WalkError | None:
        if rules is not None:
            try:
                rules.enter_directory(abs_dir, rel_dir)
            except OSError as exc:
                return WalkError(str(abs_dir), str(exc))
        try:
            entries = _list_dir(abs_dir)
        except OSError as exc:
            return WalkError(str(abs_dir), str(exc))
        stack.append(iter(entries))
        return None

    err = descend(base, "")
    if err is not None:
        yield err

    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        rel = _relative(base, entry.path)
        if not rel:
            continue
        try:
            is_dir = entry.is_dir()
            is_file = not is_dir and entry.is_file()
            is_link = entry.is_symlink()
        except OSError as exc:
            yield WalkError(entry.path, str(exc))
            continue
        if not is_dir and not is_file:
            continue

        if rules is not None and rules.is_ignored(rel, is_dir=is_dir):
            continue

        abs_path = Path(entry.path)
        yield TraversalEntry(abs_path, rel, is_dir)

        if is_dir and not is_link:
            err = descend(abs_path, rel)
            if err is not None:
                yield err


# ---------------------------------------------------------------------------
# Counting pass
# ---------------------------------------------------------------------------

def count_files(
    sources: Sequence[str | os.PathLike],
    matcher: PathMatcher,
    respect_ignore_files: bool = False,
    *,
    ignore_filenames: Sequence[str] = DEFAULT_IGNORE_FILENAMES,
) -> int:
    """Return how many files a backup of *sources* would copy.

    Walks each source exactly as the copy pass does, with the same
    *matcher*, and counts files only.  A file source counts once unless
    its name is excluded.  Walk errors are skipped.  The tree may change
    before the copy pass, so the number is an estimate.
    """
    total = 0
    for source in sources:
        path = Path(os.path.abspath(source))
        if path.is_file():
            if path.name and not matcher.is_excluded(path.name):
                total += 1
        elif path.is_dir():
            for item in walk_tree(
                path, respect_ignore_files,
                ignore_filenames=ignore_filenames,
            ):
                if (isinstance(item, TraversalEntry) and not item.is_dir
                        and not matcher.is_excluded(item.rel_path)):
                    total += 1
    return total
