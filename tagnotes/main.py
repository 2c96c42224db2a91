"""App entrypoint.

Single window: add, edit, complete, delete and search tagged notes.
Notes are stored as one JSON blob (QSettings by default).
"""

from __future__ import annotations

import argparse
from pathlib import Path

from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QApplication

from tagnotes.core.note_store import NoteStore
from tagnotes.logging_setup import SESSION_ID, install_global_exception_hooks, log
from tagnotes.settings import APP_NAME, DEFAULT_STORAGE, ORG_NAME, STORAGE_KINDS
from tagnotes.storage import open_storage
from tagnotes.ui.main_window import NotesWindow
from tagnotes.workers.save_notes import SaveDispatcher


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog=APP_NAME, description="Tagged notes")
    p.add_argument(
        "--storage",
        choices=STORAGE_KINDS,
        default=DEFAULT_STORAGE if DEFAULT_STORAGE in STORAGE_KINDS else "qsettings",
        help="Where notes are persisted",
    )
    p.add_argument(
        "--data-path",
        type=Path,
        default=None,
        help="Storage file (json for 'file', ini for 'qsettings')",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    install_global_exception_hooks()

    app = QApplication([])
    app.setOrganizationName(ORG_NAME)
    app.setApplicationName(APP_NAME)

    dispatcher = SaveDispatcher(
        on_failed=lambda req_id, err: log.warning("Background save failed: req=%d err=%s", req_id, err),
    )
    store = NoteStore(open_storage(args.storage, data_path=args.data_path), dispatch=dispatcher)
    store.load()

    win = NotesWindow(store, settings=QSettings(ORG_NAME, APP_NAME))
    win.show()
    log.info("Application started, SID=%s storage=%s", SESSION_ID, args.storage)

    code = app.exec()
    if not dispatcher.wait(5000):
        log.warning("Pending saves did not finish before exit")
    return code


if __name__ == "__main__":
    raise SystemExit(main())
