from __future__ import annotations

from typing import Protocol


class StorageAdapter(Protocol):
    """
    Key-value store holding one serialized blob.

    load() -> None when nothing was ever written.
    Failures are raised as StorageReadError / StorageWriteError.
    """

    def load(self) -> str | None:
        ...

    def save(self, blob: str) -> None:
        ...


class MemoryStorage:
    def __init__(self, *, key: str = "notes", initial: dict[str, str] | None = None):
        self.key = key
        self._data: dict[str, str] = dict(initial or {})

    def load(self) -> str | None:
        return self._data.get(self.key)

    def save(self, blob: str) -> None:
        self._data[self.key] = blob
