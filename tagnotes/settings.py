from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

APP_NAME = "tagnotes"
ORG_NAME = "tagnotes"

APP_HOME = Path(os.environ.get("TAGNOTES_HOME", Path.home() / f".{APP_NAME}"))
LOG_DIR = APP_HOME / "logs"
LOG_PATH = LOG_DIR / f"{APP_NAME}.log"
DATA_PATH = APP_HOME / "notes.json"

STORAGE_KINDS = ("qsettings", "file", "memory")
DEFAULT_STORAGE = os.environ.get("TAGNOTES_STORAGE", "qsettings")

STORAGE_KEY = "notes"
MESSAGE_TIMEOUT_MS = 3000


@dataclass(frozen=True)
class SettingsKeys:
    UI_GEOMETRY: str = "ui/geometry"
    UI_STATE: str = "ui/windowState"
