from .save_notes import SaveDispatcher, SaveNotesWorker

__all__ = [
    "SaveDispatcher",
    "SaveNotesWorker",
]
