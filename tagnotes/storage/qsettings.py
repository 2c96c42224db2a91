from __future__ import annotations

from PySide6.QtCore import QByteArray, QSettings

from tagnotes.core.errors import StorageReadError, StorageWriteError


class QSettingsStorage:
    """
    Blob stored under one QSettings key.

    QSettings is the platform key-value store (registry, plist or ini file).
    The blob is written as UTF-8 bytes so ini backends never reinterpret
    commas in it as a string list.
    """

    def __init__(self, settings: QSettings, *, key: str = "notes"):
        self._settings = settings
        self.key = key

    def load(self) -> str | None:
        self._settings.sync()
        if self._settings.status() != QSettings.Status.NoError:
            raise StorageReadError(f"QSettings read failed: {self._settings.status()}")

        val = self._settings.value(self.key)
        if val is None:
            return None
        try:
            if isinstance(val, QByteArray):
                return val.data().decode("utf-8")
            if isinstance(val, (bytes, bytearray)):
                return bytes(val).decode("utf-8")
        except UnicodeDecodeError as e:
            raise StorageReadError(f"QSettings value is not UTF-8: {e}") from e
        if isinstance(val, str):
            return val
        raise StorageReadError(f"unexpected QSettings value type: {type(val).__name__}")

    def save(self, blob: str) -> None:
        self._settings.setValue(self.key, QByteArray(blob.encode("utf-8")))
        self._settings.sync()
        if self._settings.status() != QSettings.Status.NoError:
            raise StorageWriteError(f"QSettings write failed: {self._settings.status()}")
