from __future__ import annotations

import logging
from dataclasses import dataclass

from tagnotes.core.note_store import NoteStore

log = logging.getLogger(__name__)


@dataclass
class NoteForm:
    """
    Transient input state owned by the window.

    Idle (edit_index is None) -> begin_edit(i) -> Editing(i) -> submit() -> Idle.
    submit() routes to NoteStore.update while editing, else to NoteStore.add.
    """
    text: str = ""
    tags: str = ""
    search: str = ""
    edit_index: int | None = None

    @property
    def editing(self) -> bool:
        return self.edit_index is not None

    def clear_inputs(self) -> None:
        self.text = ""
        self.tags = ""

    def begin_edit(self, store: NoteStore, index: int) -> bool:
        draft = store.edit(index)
        if draft is None:
            return False
        self.text = draft.text
        self.tags = draft.tags_input
        self.edit_index = index
        return True

    def cancel_edit(self) -> None:
        if self.edit_index is not None:
            log.debug("Edit cancelled: index=%d", self.edit_index)
        self.edit_index = None
        self.clear_inputs()

    def submit(self, store: NoteStore) -> bool:
        if self.editing:
            ok = store.update(self.edit_index, self.text, self.tags)
            if ok:
                self.edit_index = None
                self.clear_inputs()
            return ok

        ok = store.add(self.text, self.tags)
        if ok:
            self.clear_inputs()
        return ok

    def note_deleted(self, index: int) -> None:
        """Keep the pending edit pointing at the same note after a delete."""
        if self.edit_index is None:
            return
        if index == self.edit_index:
            self.cancel_edit()
        elif index < self.edit_index:
            self.edit_index -= 1
