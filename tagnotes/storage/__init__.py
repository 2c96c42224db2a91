from __future__ import annotations

import logging
from pathlib import Path

from tagnotes.core.errors import StorageError, StorageReadError, StorageWriteError
from tagnotes.settings import APP_NAME, DATA_PATH, ORG_NAME, STORAGE_KEY, STORAGE_KINDS
from .base import MemoryStorage, StorageAdapter
from .json_file import JsonFileStorage

log = logging.getLogger(__name__)


def open_storage(kind: str, *, data_path: Path | None = None) -> StorageAdapter:
    kind = (kind or "").strip().lower()
    if kind not in STORAGE_KINDS:
        raise ValueError(f"Unknown storage backend: {kind!r} (expected one of {', '.join(STORAGE_KINDS)})")

    if kind == "file":
        path = Path(data_path) if data_path else DATA_PATH
        log.info("Storage: json file path=%s", path)
        return JsonFileStorage(path)

    if kind == "memory":
        log.warning("Storage: in-memory, notes will not survive a restart")
        return MemoryStorage(key=STORAGE_KEY)

    from PySide6.QtCore import QSettings
    from .qsettings import QSettingsStorage

    if data_path:
        settings = QSettings(str(data_path), QSettings.Format.IniFormat)
    else:
        settings = QSettings(ORG_NAME, APP_NAME)
    log.info("Storage: QSettings file=%s", settings.fileName())
    return QSettingsStorage(settings, key=STORAGE_KEY)


__all__ = [
    "StorageAdapter",
    "MemoryStorage",
    "JsonFileStorage",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "open_storage",
]
