from ._exclude import PathMatcher, IgnoreRules
from .exceptions import BackupRequestError, NoSourcesError, SourceNotFoundError, TargetCreateError
from .backup import run_backup, count_files, walk_tree, resolve_collision
from .backup import BackupRequest, BackupResult, BackupObserver, CollisionPolicy
from .backup import ProgressEvent, ErrorEvent, FileError, TraversalEntry, WalkError
from .backup import WriteTo, Skip, DEFAULT_BLACKLIST

__all__ = [
    "PathMatcher", "IgnoreRules",
    "BackupRequestError", "NoSourcesError", "SourceNotFoundError", "TargetCreateError",
    "run_backup", "count_files", "walk_tree", "resolve_collision",
    "BackupRequest", "BackupResult", "BackupObserver", "CollisionPolicy",
    "ProgressEvent", "ErrorEvent", "FileError", "TraversalEntry", "WalkError",
    "WriteTo", "Skip", "DEFAULT_BLACKLIST",
]
