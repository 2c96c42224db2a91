import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtTest import QTest
from PySide6.QtWidgets import QApplication

from tagnotes.core.note_store import MSG_DELETED, NoteStore
from tagnotes.settings import MESSAGE_TIMEOUT_MS
from tagnotes.storage.base import MemoryStorage
from tagnotes.ui.main_window import ADD_LABEL, UPDATE_LABEL, NotesWindow


@pytest.fixture(scope="module")
def qapp():
    return QApplication.instance() or QApplication([])


@pytest.fixture
def window(qapp):
    store = NoteStore(MemoryStorage())
    win = NotesWindow(store)
    yield win
    win.close()
    win.deleteLater()
    qapp.processEvents()


def rows(win):
    return [win.listw.itemWidget(win.listw.item(i)) for i in range(win.listw.count())]


def test_row_action_on_filtered_list_hits_collection_note(window, qapp):
    window.store.add("eggs", "")
    window.store.add("milk", "")
    window.search.setText("milk")

    shown = rows(window)
    assert [r.text_label.text() for r in shown] == ["milk"]
    assert shown[0].index == 1

    shown[0].deleteClicked.emit(shown[0].index)
    QTest.qWait(20)

    assert [n.text for n in window.store.notes] == ["eggs"]
    assert window.listw.count() == 0
    assert not window.empty_label.isHidden()

    # feedback banner is shown and cleared by its timer
    assert window.message.text() == MSG_DELETED
    assert not window.message.isHidden()
    assert window.message_timer.isActive()
    assert window.message_timer.interval() == MESSAGE_TIMEOUT_MS

    window.message_timer.setInterval(20)
    window.show_message("again")
    QTest.qWait(200)
    qapp.processEvents()
    assert window.message.isHidden()
    assert window.message.text() == ""


def test_complete_on_filtered_row(window, qapp):
    window.store.add("eggs", "")
    window.store.add("oat milk", "")
    window.search.setText("MILK")

    row = rows(window)[0]
    row.completeClicked.emit(row.index)
    QTest.qWait(20)

    assert [n.completed for n in window.store.notes] == [False, True]


def test_edit_and_submit_through_the_form(window, qapp):
    window.store.add("a", "x")
    window.store.add("b", "y")
    window.refresh_list()

    row = rows(window)[1]
    row.editClicked.emit(row.index)
    QTest.qWait(20)
    assert window.input.text() == "b"
    assert window.submit_btn.text() == UPDATE_LABEL
    assert not window.cancel_btn.isHidden()

    window.input.setText("B")
    window.tags.setText("z")
    window.submit()
    qapp.processEvents()

    assert [n.text for n in window.store.notes] == ["a", "B"]
    assert window.store.notes[1].tags == ["z"]
    assert window.submit_btn.text() == ADD_LABEL
    assert window.input.text() == ""


def test_cancel_edit_clears_fields(window, qapp):
    window.store.add("a", "x")
    window.refresh_list()
    row = rows(window)[0]
    row.editClicked.emit(row.index)
    QTest.qWait(20)

    window.cancel_edit()
    assert not window.form.editing
    assert window.input.text() == ""
    assert window.cancel_btn.isHidden()
    assert window.store.notes[0].text == "a"
