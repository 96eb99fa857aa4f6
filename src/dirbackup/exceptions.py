"""Exceptions for dirbackup."""

from __future__ import annotations


class BackupRequestError(Exception):
    """A backup request was rejected before any file was touched.

    Per-file failures are never raised; they are collected in
    :attr:`~dirbackup.BackupResult.errors`.
    """


class NoSourcesError(BackupRequestError):
    """The request names no source paths."""

    def __init__(self, message: str = "No source paths provided") -> None:
        super().__init__(message)


class SourceNotFoundError(BackupRequestError):
    """A source path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Source path does not exist: {path}")
        self.path = path


class TargetCreateError(BackupRequestError):
    """The target directory could not be created."""

    def __init__(self, path: str, reason: OSError) -> None:
        super().__init__(f"Failed to create target directory {path}: {reason}")
        self.path = path
