from __future__ import annotations

from pathlib import Path

from tagnotes.core.errors import StorageReadError, StorageWriteError
from tagnotes.storage.filesystem import atomic_write_text


class JsonFileStorage:
    """Blob kept in a single file, replaced atomically on every save."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> str | None:
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"cannot read {self.path}: {e}") from e

    def save(self, blob: str) -> None:
        try:
            atomic_write_text(self.path, blob, encoding="utf-8")
        except OSError as e:
            raise StorageWriteError(f"cannot write {self.path}: {e}") from e
