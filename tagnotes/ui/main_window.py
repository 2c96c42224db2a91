from __future__ import annotations

from PySide6.QtCore import QSettings, QTimer, Slot
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QHBoxLayout, QLabel, QLineEdit, QListWidget, QListWidgetItem,
    QMainWindow, QPushButton, QVBoxLayout, QWidget,
)

from tagnotes.core.form import NoteForm
from tagnotes.core.note_store import NoteStore
from tagnotes.logging_setup import log
from tagnotes.settings import MESSAGE_TIMEOUT_MS, SettingsKeys
from tagnotes.ui.note_item import NoteItemWidget
from tagnotes.ui.qt_utils import blocked_signals, safe_set_setting

ADD_LABEL = "Add note"
UPDATE_LABEL = "Save changes"


class NotesWindow(QMainWindow):
    def __init__(self, store: NoteStore, *, settings: QSettings | None = None):
        super().__init__()
        self.setWindowTitle("Notes")

        self.store = store
        self.form = NoteForm()
        self._settings = settings

        # UI
        title = QLabel("Notes")
        font = title.font()
        font.setPointSize(18)
        title.setFont(font)

        self.input = QLineEdit()
        self.input.setPlaceholderText("Type your note…")
        self.tags = QLineEdit()
        self.tags.setPlaceholderText("Add tags separated by commas")

        self.submit_btn = QPushButton(ADD_LABEL)
        self.cancel_btn = QPushButton("Cancel edit")
        self.cancel_btn.setVisible(False)
        buttons = QHBoxLayout()
        buttons.addWidget(self.submit_btn, 1)
        buttons.addWidget(self.cancel_btn)

        self.search = QLineEdit()
        self.search.setPlaceholderText("Search notes…")

        self.message = QLabel()
        self.message.setStyleSheet(
            "background: #ffcccc; color: #ff0000; font-weight: bold;"
            " padding: 10px; border-radius: 5px;"
        )
        self.message.setVisible(False)

        self.listw = QListWidget()
        self.listw.setSpacing(4)
        self.empty_label = QLabel("No notes found :(")

        root = QWidget()
        layout = QVBoxLayout(root)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.addWidget(title)
        layout.addWidget(self.input)
        layout.addWidget(self.tags)
        layout.addLayout(buttons)
        layout.addSpacing(12)
        layout.addWidget(self.search)
        layout.addWidget(self.message)
        layout.addWidget(self.listw, 1)
        layout.addWidget(self.empty_label)
        layout.addStretch(0)
        self.setCentralWidget(root)

        # Feedback banner lifetime
        self.message_timer = QTimer(self)
        self.message_timer.setSingleShot(True)
        self.message_timer.setInterval(MESSAGE_TIMEOUT_MS)
        self.message_timer.timeout.connect(self.clear_message)

        # Signals
        self.input.textChanged.connect(self._on_input_changed)
        self.tags.textChanged.connect(self._on_tags_changed)
        self.search.textChanged.connect(self._on_search_changed)
        self.input.returnPressed.connect(self.submit)
        self.tags.returnPressed.connect(self.submit)
        self.submit_btn.clicked.connect(self.submit)
        self.cancel_btn.clicked.connect(self.cancel_edit)
        QShortcut(QKeySequence("Escape"), self, activated=self.cancel_edit)

        self.store.subscribe(self.show_message)

        self._restore_geometry()
        self.refresh_list()

    # ───────────────────────── window state ─────────────────────────

    def _restore_geometry(self) -> None:
        if self._settings is None:
            self.resize(520, 720)
            return
        geo = self._settings.value(SettingsKeys.UI_GEOMETRY)
        if geo:
            self.restoreGeometry(geo)
        else:
            self.resize(520, 720)
        st = self._settings.value(SettingsKeys.UI_STATE)
        if st:
            self.restoreState(st)

    def closeEvent(self, event):  # type: ignore[override]
        if self._settings is not None:
            safe_set_setting(self._settings, SettingsKeys.UI_GEOMETRY, self.saveGeometry())
            safe_set_setting(self._settings, SettingsKeys.UI_STATE, self.saveState())
        super().closeEvent(event)

    # ───────────────────────── form ─────────────────────────

    def _on_input_changed(self, text: str):
        self.form.text = text

    def _on_tags_changed(self, text: str):
        self.form.tags = text

    def _on_search_changed(self, text: str):
        self.form.search = text
        self.refresh_list()

    def _sync_inputs_from_form(self) -> None:
        with blocked_signals(self.input):
            self.input.setText(self.form.text)
        with blocked_signals(self.tags):
            self.tags.setText(self.form.tags)
        self.submit_btn.setText(UPDATE_LABEL if self.form.editing else ADD_LABEL)
        self.cancel_btn.setVisible(self.form.editing)

    @Slot()
    def submit(self):
        editing = self.form.editing
        if self.form.submit(self.store):
            log.debug("Form submitted: mode=%s", "update" if editing else "add")
            self._sync_inputs_from_form()
            self.refresh_list()

    @Slot()
    def cancel_edit(self):
        if not self.form.editing:
            return
        self.form.cancel_edit()
        self._sync_inputs_from_form()
        self.refresh_list()

    # ───────────────────────── row actions ─────────────────────────

    @Slot(int)
    def complete_note(self, index: int):
        if self.store.complete(index):
            self._schedule_refresh()

    @Slot(int)
    def uncomplete_note(self, index: int):
        if self.store.uncomplete(index):
            self._schedule_refresh()

    @Slot(int)
    def edit_note(self, index: int):
        if self.form.begin_edit(self.store, index):
            self._sync_inputs_from_form()
            self.input.setFocus()
            self._schedule_refresh()

    @Slot(int)
    def delete_note(self, index: int):
        if self.store.delete(index):
            self.form.note_deleted(index)
            self._sync_inputs_from_form()
            self._schedule_refresh()

    # ───────────────────────── rendering ─────────────────────────

    def _schedule_refresh(self) -> None:
        # rows are rebuilt after the clicked row's signal has returned
        QTimer.singleShot(0, self.refresh_list)

    def refresh_list(self):
        matches = list(self.store.search(self.form.search).indexed())

        with blocked_signals(self.listw):
            self.listw.clear()
            for index, note in matches:
                row = NoteItemWidget(index, note, editing=(index == self.form.edit_index))
                row.completeClicked.connect(self.complete_note)
                row.uncompleteClicked.connect(self.uncomplete_note)
                row.editClicked.connect(self.edit_note)
                row.deleteClicked.connect(self.delete_note)

                item = QListWidgetItem(self.listw)
                item.setSizeHint(row.sizeHint())
                self.listw.setItemWidget(item, row)

        self.listw.setVisible(bool(matches))
        self.empty_label.setVisible(not matches)

    def show_message(self, text: str):
        self.message.setText(text)
        self.message.setVisible(True)
        self.message_timer.start()

    def clear_message(self):
        self.message.clear()
        self.message.setVisible(False)
