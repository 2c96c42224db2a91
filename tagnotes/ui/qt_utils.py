from __future__ import annotations

from contextlib import contextmanager

from PySide6.QtCore import QSettings

from tagnotes.logging_setup import log


@contextmanager
def blocked_signals(obj):
    """Temporarily silence Qt signals of obj, always re-enabling them."""
    if obj is None:
        yield
        return
    try:
        obj.blockSignals(True)
        yield
    finally:
        try:
            obj.blockSignals(False)
        except RuntimeError:
            # underlying C++ object already deleted
            pass


def safe_set_setting(settings: QSettings, key: str, value) -> None:
    try:
        settings.setValue(key, value)
    except Exception:
        log.exception("Failed to write setting: key=%s", key)
