"""Destination collision handling."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ._types import CollisionAction, CollisionPolicy, Skip, WriteTo

logger = logging.getLogger(__name__)

_MAX_RENAME_ATTEMPTS = 10000


def find_available_name(path: Path) -> Path:
    """Return *path* or the first free ``stem_N.ext`` sibling of it.

    Gives up after 10,000 candidates and returns *path* itself.
    """
    if not path.exists():
        return path
    stem, ext = path.stem, path.suffix
    for counter in range(1, _MAX_RENAME_ATTEMPTS + 1):
        candidate = path.with_name(f"{stem}_{counter}{ext}")
        if not candidate.exists():
            return candidate
    logger.warning("no free name for %s, overwriting it", path)
    return path


def resolve_collision(dest: str | os.PathLike, policy: CollisionPolicy | str) -> CollisionAction:
    """Decide where a file bound for *dest* should go.

    Only checks for existence; never touches the filesystem otherwise.
    """
    dest = Path(dest)
    if not dest.exists():
        return WriteTo(dest)
    policy = CollisionPolicy.parse(policy)
    if policy is CollisionPolicy.SKIP:
        return Skip()
    if policy is CollisionPolicy.RENAME:
        return WriteTo(find_available_name(dest))
    return WriteTo(dest)
