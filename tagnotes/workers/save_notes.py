from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal


class SaveNotesSignals(QObject):
    finished = Signal(int, bool)   # req_id, saved
    failed = Signal(int, str)      # req_id, error


class SaveNotesWorker(QRunnable):
    """
    Runs one store save off the UI thread.

    The save callable serializes whatever the collection holds when it runs,
    not when the worker was queued.
    """

    def __init__(self, *, req_id: int, save: Callable[[], bool]):
        super().__init__()
        self.req_id = req_id
        self.save = save
        self.signals = SaveNotesSignals()

    def run(self):
        try:
            ok = bool(self.save())
            self.signals.finished.emit(self.req_id, ok)
        except Exception as e:
            self.signals.failed.emit(self.req_id, str(e))


class SaveDispatcher:
    """NoteStore dispatcher that queues saves on a QThreadPool."""

    def __init__(self, pool: QThreadPool | None = None, *, on_finished=None, on_failed=None):
        self._pool = pool or QThreadPool.globalInstance()
        self._req_id = 0  # monotonically increasing
        self._on_finished = on_finished
        self._on_failed = on_failed

    @property
    def last_req_id(self) -> int:
        return self._req_id

    def make_worker(self, save: Callable[[], bool]) -> SaveNotesWorker:
        self._req_id += 1
        worker = SaveNotesWorker(req_id=self._req_id, save=save)
        if self._on_finished is not None:
            worker.signals.finished.connect(self._on_finished)
        if self._on_failed is not None:
            worker.signals.failed.connect(self._on_failed)
        return worker

    def __call__(self, save: Callable[[], bool]) -> None:
        self._pool.start(self.make_worker(save))

    def wait(self, msecs: int = -1) -> bool:
        return self._pool.waitForDone(msecs)
