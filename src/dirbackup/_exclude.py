"""Exclusion support for backup walks.

Two independent mechanisms decide whether an entry is left out:

* :class:`PathMatcher` -- the user's blacklist (glob patterns or literal
  names), compiled once per backup and checked against the whole relative
  path and against every path component on its own.
* :class:`IgnoreRules` -- version-control ignore files (``.gitignore``,
  ``.ignore``, ``.git/info/exclude``) found inside a source tree, loaded
  lazily per directory while walking.  Pattern syntax follows gitignore
  rules (implemented by ``dulwich.ignore.IgnoreFilter``).
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Iterable, Sequence

from dulwich.ignore import IgnoreFilter, read_ignore_patterns

from ._glob import GlobSyntaxError, translate, translate_literal

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_FILENAMES = (".gitignore", ".ignore")


class PathMatcher:
    """Compiled blacklist.

    Each pattern is classified once, at construction: a valid glob is
    anchored to the whole relative path, anything else is taken as a
    literal name matched at any depth.  All patterns end up in a single
    compiled regex, so :meth:`is_excluded` never looks at the
    pattern text.
    """

    __slots__ = ("_regex", "_patterns")

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        kept: list[str] = []
        sources: list[str] = []
        for pattern in patterns:
            if not pattern or not pattern.strip():
                continue
            try:
                source = translate(pattern)
            except GlobSyntaxError as exc:
                logger.debug("treating %r as a literal name: %s", pattern, exc)
                source = translate_literal(pattern)
            kept.append(pattern)
            sources.append(f"(?:{source})")

        regex: re.Pattern[str] | None = None
        if sources:
            try:
                regex = re.compile("|".join(sources), re.DOTALL)
            except re.error as exc:
                logger.warning("blacklist could not be compiled, nothing will be excluded: %s", exc)
                kept = []
        self._regex = regex
        self._patterns = tuple(kept)

    def __repr__(self) -> str:
        return f"PathMatcher({list(self._patterns)!r})"

    @property
    def patterns(self) -> tuple[str, ...]:
        """Patterns that made it into the compiled matcher."""
        return self._patterns

    @property
    def active(self) -> bool:
        """True if any pattern is configured."""
        return self._regex is not None

    def matches(self, path: str) -> bool:
        """True if *path* as a whole matches any pattern."""
        if self._regex is None:
            return False
        return self._regex.fullmatch(path) is not None

    def is_excluded(self, rel_path: str) -> bool:
        """True if *rel_path*, or any single component of it, matches."""
        if self._regex is None:
            return False
        rel = rel_path.replace(os.sep, "/")
        if self._regex.fullmatch(rel) is not None:
            return True
        for part in rel.split("/"):
            if part and self._regex.fullmatch(part) is not None:
                return True
        return False


class IgnoreRules:
    """Hierarchy of ignore files under one source root."""

    def __init__(
        self,
        root: str | os.PathLike,
        *,
        filenames: Sequence[str] = DEFAULT_IGNORE_FILENAMES,
    ) -> None:
        self._root = Path(root)
        self._filenames = tuple(filenames)
        self._exclude: IgnoreFilter | None = None
        # {rel_dir: IgnoreFilter | None} -- lazily loaded per directory
        self._dir_filters: dict[str, IgnoreFilter | None] = {}

    # ------------------------------------------------------------------
    def load_exclude_file(self) -> None:
        """Load ``.git/info/exclude`` under the root, if present.

        Raises :class:`OSError` if the file exists but cannot be read.
        """
        path = self._root / ".git" / "info" / "exclude"
        if path.is_file():
            self._exclude = IgnoreFilter.from_path(str(path))

    # ------------------------------------------------------------------
    def enter_directory(self, abs_dir: Path, rel_dir: str) -> None:
        """Load the ignore files of *abs_dir* (once per directory).

        Patterns from all configured filenames are combined in order, so a
        later file (``.ignore``) overrides an earlier one (``.gitignore``).
        Raises :class:`OSError` if an ignore file cannot be read; the
        directory is then treated as having no rules.
        """
        if rel_dir in self._dir_filters:
            return
        self._dir_filters[rel_dir] = None
        lines: list[bytes] = []
        for name in self._filenames:
            path = abs_dir / name
            if path.is_file():
                with open(path, "rb") as f:
                    lines.extend(read_ignore_patterns(f))
        if lines:
            self._dir_filters[rel_dir] = IgnoreFilter(lines)

    # ------------------------------------------------------------------
    def is_ignored(self, rel_path: str, *, is_dir: bool = False) -> bool:
        """Check *rel_path* against the loaded hierarchy.

        Called during the walk after :meth:`enter_directory` has been
        invoked for every ancestor.  The deepest ignore file with an
        opinion wins; an explicit negation (``!pattern``) re-includes.
        """
        parts = rel_path.split("/")
        for depth in range(len(parts) - 1, -1, -1):
            filt = self._dir_filters.get("/".join(parts[:depth]))
            if filt is None:
                continue
            # Path relative to this ignore file's directory
            sub = "/".join(parts[depth:])
            result = filt.is_ignored(sub + "/" if is_dir else sub)
            if result is not None:
                return result

        if self._exclude is not None:
            check = rel_path + "/" if is_dir else rel_path
            return self._exclude.is_ignored(check) is True
        return False
