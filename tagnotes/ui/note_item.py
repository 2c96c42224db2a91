from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout

from tagnotes.core.models import Note, join_tags

_ROW_STYLE = """
QFrame#noteRow {{ background: {bg}; border-radius: 5px; }}
QLabel#noteTags {{ color: #888; font-style: italic; }}
"""

_BUTTONS = (
    # attribute, label, background, foreground
    ("complete_btn", "Complete", "green", "#fff"),
    ("uncomplete_btn", "Uncomplete", "yellow", "#000"),
    ("edit_btn", "Edit", "blue", "#fff"),
    ("delete_btn", "Delete", "red", "#fff"),
)


class NoteItemWidget(QFrame):
    """One row of the note list. Signals carry the note's collection index."""

    completeClicked = Signal(int)
    uncompleteClicked = Signal(int)
    editClicked = Signal(int)
    deleteClicked = Signal(int)

    def __init__(self, index: int, note: Note, *, editing: bool = False):
        super().__init__()
        self.index = index
        self.setObjectName("noteRow")
        bg = "#dcdcdc" if note.completed else "#f0f0f0"
        if editing:
            bg = "#dde8f8"
        self.setStyleSheet(_ROW_STYLE.format(bg=bg))

        self.text_label = QLabel(note.text)
        self.text_label.setWordWrap(True)
        font = self.text_label.font()
        font.setStrikeOut(note.completed)
        self.text_label.setFont(font)

        self.tags_label = QLabel(join_tags(note.tags))
        self.tags_label.setObjectName("noteTags")

        buttons = QHBoxLayout()
        buttons.setContentsMargins(0, 5, 0, 0)
        for attr, label, bg_color, fg_color in _BUTTONS:
            btn = QPushButton(label)
            btn.setStyleSheet(
                f"background: {bg_color}; color: {fg_color}; padding: 5px; border-radius: 5px;"
            )
            setattr(self, attr, btn)
            buttons.addWidget(btn)
        buttons.addStretch(1)

        self.complete_btn.clicked.connect(lambda: self.completeClicked.emit(self.index))
        self.uncomplete_btn.clicked.connect(lambda: self.uncompleteClicked.emit(self.index))
        self.edit_btn.clicked.connect(lambda: self.editClicked.emit(self.index))
        self.delete_btn.clicked.connect(lambda: self.deleteClicked.emit(self.index))

        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.addWidget(self.text_label)
        layout.addWidget(self.tags_label)
        layout.addLayout(buttons)
