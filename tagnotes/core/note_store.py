from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Callable, Iterator

from tagnotes.core.errors import StorageError
from tagnotes.core.models import EditDraft, Note, join_tags, notes_from_blob, notes_to_blob, split_tags
from tagnotes.storage.base import StorageAdapter

log = logging.getLogger(__name__)

MSG_ADDED = "Note added!"
MSG_COMPLETED = "Note completed!"
MSG_UNCOMPLETED = "Note marked as not completed!"
MSG_DELETED = "Note deleted!"
MSG_EDITED = "Note edited!"

EventListener = Callable[[str], None]
Dispatcher = Callable[[Callable[[], object]], None]


class NoteView:
    """
    Filtered, read-only view over the store's current notes.

    Each iteration starts from the collection as it is at that moment, so the
    view can be iterated again after mutations.
    """

    def __init__(self, source: Callable[[], tuple[Note, ...]], query: str):
        self._source = source
        self.query = query or ""

    def indexed(self) -> Iterator[tuple[int, Note]]:
        """Yield (collection_index, note) for every matching note."""
        q = self.query.lower()
        for i, note in enumerate(self._source()):
            if q in note.text.lower():
                yield i, note

    def __iter__(self) -> Iterator[Note]:
        for _, note in self.indexed():
            yield note


class NoteStore:
    """
    Ordered, index-addressed note collection persisted as one blob.

    Mutations happen on the caller's thread. Persistence goes through
    ``dispatch`` when one is given (e.g. a thread pool), otherwise it runs
    inline. Every save serializes the collection as it is when the write
    starts, and writes never overlap.
    """

    def __init__(self, storage: StorageAdapter, *, dispatch: Dispatcher | None = None):
        self._storage = storage
        self._dispatch = dispatch
        self._notes: list[Note] = []
        self._lock = threading.Lock()
        self._save_lock = threading.Lock()
        self._listeners: list[EventListener] = []

    # ───────────────────────── read side ─────────────────────────

    @property
    def notes(self) -> tuple[Note, ...]:
        with self._lock:
            return tuple(self._notes)

    def __len__(self) -> int:
        return len(self._notes)

    def search(self, query: str) -> NoteView:
        return NoteView(lambda: self.notes, query)

    # ───────────────────────── events ─────────────────────────

    def subscribe(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def _emit(self, message: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(message)
            except Exception:
                log.exception("Event listener failed: message=%s", message)

    # ───────────────────────── persistence ─────────────────────────

    def load(self) -> bool:
        """Replace the collection with the persisted one. False if nothing was loaded."""
        try:
            blob = self._storage.load()
            if blob is None:
                log.info("No saved notes found")
                return False
            loaded = notes_from_blob(blob)
        except StorageError:
            log.exception("Error loading notes")
            return False

        with self._lock:
            self._notes = loaded
        log.info("Notes loaded: count=%d", len(loaded))
        return True

    def save(self) -> bool:
        with self._save_lock:
            with self._lock:
                blob = notes_to_blob(self._notes)
                count = len(self._notes)
            try:
                self._storage.save(blob)
            except StorageError:
                log.exception("Error saving notes")
                return False
        log.debug("Notes saved: count=%d bytes=%d", count, len(blob))
        return True

    def _persist(self) -> None:
        if self._dispatch is None:
            self.save()
        else:
            self._dispatch(self.save)

    def _valid(self, index: int | None, op: str) -> bool:
        if index is None or not (0 <= index < len(self._notes)):
            log.debug("%s ignored: index=%s size=%d", op, index, len(self._notes))
            return False
        return True

    # ───────────────────────── mutations ─────────────────────────

    def add(self, text: str, tags_input: str) -> bool:
        if not text:
            return False
        note = Note(text=text, tags=split_tags(tags_input), completed=False)
        with self._lock:
            self._notes.append(note)
        log.info("Note added: index=%d tags=%d", len(self._notes) - 1, len(note.tags))
        self._persist()
        self._emit(MSG_ADDED)
        return True

    def edit(self, index: int) -> EditDraft | None:
        if not self._valid(index, "edit"):
            return None
        note = self._notes[index]
        return EditDraft(text=note.text, tags_input=join_tags(note.tags))

    def update(self, index: int | None, text: str, tags_input: str) -> bool:
        """Overwrite text and tags of a pending edit; the completed flag is kept."""
        if not self._valid(index, "update"):
            return False
        if not text:
            log.debug("update ignored: empty text index=%s", index)
            return False
        with self._lock:
            self._notes[index] = replace(self._notes[index], text=text, tags=split_tags(tags_input))
        log.info("Note edited: index=%d", index)
        self._persist()
        self._emit(MSG_EDITED)
        return True

    def complete(self, index: int) -> bool:
        return self._set_completed(index, True, MSG_COMPLETED)

    def uncomplete(self, index: int) -> bool:
        return self._set_completed(index, False, MSG_UNCOMPLETED)

    def _set_completed(self, index: int, value: bool, message: str) -> bool:
        if not self._valid(index, "complete" if value else "uncomplete"):
            return False
        with self._lock:
            self._notes[index] = replace(self._notes[index], completed=value)
        log.info("Note completed=%s: index=%d", value, index)
        self._persist()
        self._emit(message)
        return True

    def delete(self, index: int) -> bool:
        if not self._valid(index, "delete"):
            return False
        with self._lock:
            del self._notes[index]
        log.info("Note deleted: index=%d remaining=%d", index, len(self._notes))
        self._persist()
        self._emit(MSG_DELETED)
        return True
