"""File I/O helpers: directory creation and byte copies."""

from __future__ import annotations

import os
import shutil
from pathlib import Path


def ensure_dir(path: str | os.PathLike) -> None:
    """Create *path* and its parents; a no-op if it already is a directory."""
    Path(path).mkdir(parents=True, exist_ok=True)


def copy_file(src: str | os.PathLike, dest: str | os.PathLike) -> None:
    """Copy the bytes of *src* to *dest*, replacing any existing file.

    Symlinks are followed.  Permissions and timestamps are not carried
    over.
    """
    shutil.copyfile(src, dest)
