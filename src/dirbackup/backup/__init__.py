"""Back up files and directories into a target directory.

Sources are walked depth-first; entries matching the blacklist (or, on
request, ``.gitignore``-style files) are left out, existing destinations
are handled by a :class:`CollisionPolicy`, and progress is reported to a
:class:`BackupObserver`.
"""

from ._types import (
    DEFAULT_BLACKLIST,
    BackupObserver,
    BackupRequest,
    BackupResult,
    CollisionAction,
    CollisionPolicy,
    ErrorEvent,
    FileError,
    ProgressEvent,
    Skip,
    TraversalEntry,
    WalkError,
    WriteTo,
    format_summary,
)
from ._walk import walk_tree, count_files
from ._resolve import find_available_name, resolve_collision
from ._io import copy_file, ensure_dir
from ._ops import CancelToken, run_backup

__all__ = [
    # Public types
    "BackupObserver", "BackupRequest", "BackupResult", "CancelToken",
    "CollisionAction", "CollisionPolicy", "ErrorEvent", "FileError",
    "ProgressEvent", "Skip", "TraversalEntry", "WalkError", "WriteTo",
    "DEFAULT_BLACKLIST",
    # Public functions
    "run_backup", "count_files", "walk_tree",
    "resolve_collision", "find_available_name",
    "copy_file", "ensure_dir", "format_summary",
]
