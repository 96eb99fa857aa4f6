"""Glob-to-regex translation for blacklist patterns.

Patterns are matched against a whole relative path (forward slashes).
Unlike shell globbing, ``*`` and ``?`` also match ``/``, so ``*.log``
matches ``logs/app.log``.  ``**`` is recursive when it forms a whole path
segment (``**/x``, ``x/**``, ``a/**/b``); elsewhere it behaves like ``*``.
"""

from __future__ import annotations

import re


class GlobSyntaxError(ValueError):
    """Raised when a pattern is not a valid glob."""


def translate(pattern: str) -> str:
    """Return a regex source string that fully matches *pattern*.

    Raises :class:`GlobSyntaxError` for unclosed ``[`` / ``{``, an
    unopened ``}``, nested ``{``, a dangling ``\\`` or a reversed range.
    """
    out: list[str] = []
    i = 0
    n = len(pattern)
    in_alt = False
    while i < n:
        c = pattern[i]
        if c == "*":
            j = i
            while j < n and pattern[j] == "*":
                j += 1
            at_start = i == 0 or pattern[i - 1] == "/"
            at_end = j == n or pattern[j] == "/"
            if j - i >= 2 and at_start and at_end:
                if j == n:
                    out.append(".*")
                else:
                    # Swallow the separator: "a/**/b" also matches "a/b"
                    out.append("(?:.*/)?")
                    j += 1
            else:
                out.append(".*")
            i = j
        elif c == "?":
            out.append(".")
            i += 1
        elif c == "[":
            cls, i = _translate_class(pattern, i)
            out.append(cls)
        elif c == "{":
            if in_alt:
                raise GlobSyntaxError(f"nested alternates in {pattern!r}")
            in_alt = True
            out.append("(?:")
            i += 1
        elif c == "}":
            if not in_alt:
                raise GlobSyntaxError(f"unopened alternate in {pattern!r}")
            in_alt = False
            out.append(")")
            i += 1
        elif c == "," and in_alt:
            out.append("|")
            i += 1
        elif c == "\\":
            if i + 1 >= n:
                raise GlobSyntaxError(f"dangling escape in {pattern!r}")
            out.append(re.escape(pattern[i + 1]))
            i += 2
        else:
            out.append(re.escape(c))
            i += 1
    if in_alt:
        raise GlobSyntaxError(f"unclosed alternate in {pattern!r}")
    return "".join(out)


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    """Translate the ``[...]`` class opening at *start*.

    Returns the regex fragment and the index just past the closing ``]``.
    """
    n = len(pattern)
    i = start + 1
    negate = False
    if i < n and pattern[i] in "!^":
        negate = True
        i += 1
    items: list[tuple[str, str]] = []
    first = True
    while True:
        if i >= n:
            raise GlobSyntaxError(f"unclosed character class in {pattern!r}")
        c = pattern[i]
        if c == "]" and not first:
            i += 1
            break
        first = False
        if i + 2 < n and pattern[i + 1] == "-" and pattern[i + 2] != "]":
            lo, hi = c, pattern[i + 2]
            if lo > hi:
                raise GlobSyntaxError(
                    f"invalid range {lo}-{hi} in {pattern!r}"
                )
            items.append((lo, hi))
            i += 3
        else:
            items.append((c, c))
            i += 1
    body = "".join(
        re.escape(lo) if lo == hi else f"{re.escape(lo)}-{re.escape(hi)}"
        for lo, hi in items
    )
    return ("[^" if negate else "[") + body + "]", i


def translate_literal(name: str) -> str:
    """Regex source matching *name* literally as the last path segment, at any depth."""
    return "(?:.*/)?" + re.escape(name)
