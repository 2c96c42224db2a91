from .errors import StorageError, StorageReadError, StorageWriteError
from .form import NoteForm
from .models import EditDraft, Note, join_tags, notes_from_blob, notes_to_blob, split_tags
from .note_store import NoteStore, NoteView

__all__ = ["StorageError",
           "StorageReadError",
           "StorageWriteError",
           "NoteForm",
           "EditDraft",
           "Note",
           "join_tags",
           "split_tags",
           "notes_from_blob",
           "notes_to_blob",
           "NoteStore",
           "NoteView",
           ]
