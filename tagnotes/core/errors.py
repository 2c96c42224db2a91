from __future__ import annotations


class StorageError(Exception):
    """Base class for persistence failures."""


class StorageReadError(StorageError):
    """Persisted blob could not be read or is corrupt."""


class StorageWriteError(StorageError):
    """Persisted blob could not be written."""
