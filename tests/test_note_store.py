import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import dataclasses

import pytest

from tagnotes.core.errors import StorageReadError, StorageWriteError
from tagnotes.core.models import EditDraft, Note, notes_from_blob, notes_to_blob
from tagnotes.core.note_store import MSG_ADDED, MSG_DELETED, MSG_EDITED, NoteStore
from tagnotes.storage.base import MemoryStorage


class FailingStorage:
    def load(self):
        raise StorageReadError("disk gone")

    def save(self, blob):
        raise StorageWriteError("disk gone")


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    s = NoteStore(storage)
    s.messages = []
    s.subscribe(s.messages.append)
    return s


def dump(store):
    return [n.to_dict() for n in store.notes]


def persisted(storage):
    return notes_from_blob(storage.load())


def test_starts_empty(store):
    assert store.notes == ()
    assert len(store) == 0


def test_add_appends_incomplete_note_and_persists(store, storage):
    assert store.add("Buy milk", "errand,home")
    assert store.notes == (Note("Buy milk", ["errand", "home"], False),)
    assert persisted(storage) == list(store.notes)
    assert store.messages == [MSG_ADDED]


def test_add_goes_to_the_end(store):
    store.add("a", "")
    store.add("b", "")
    store.add("c", "x")
    assert [n.text for n in store.notes] == ["a", "b", "c"]
    assert store.notes[-1].completed is False


def test_add_empty_text_is_noop(store, storage):
    store.add("a", "")
    before = dump(store)
    assert not store.add("", "anything")
    assert dump(store) == before
    assert store.messages == [MSG_ADDED]


def test_add_with_empty_tags_keeps_single_empty_tag(store):
    store.add("a", "")
    assert store.notes[0].tags == [""]


def test_delete_removes_and_shifts(store, storage):
    for t in "abcd":
        store.add(t, "")
    assert store.delete(1)
    assert [n.text for n in store.notes] == ["a", "c", "d"]
    assert [n.text for n in persisted(storage)] == ["a", "c", "d"]
    assert store.messages[-1] == MSG_DELETED


@pytest.mark.parametrize("index", [-1, 1, 5, None])
def test_out_of_range_index_is_silent_noop(store, storage, index):
    store.add("a", "t")
    blob = storage.load()
    assert not store.complete(index)
    assert not store.uncomplete(index)
    assert not store.delete(index)
    assert not store.update(index, "x", "y")
    assert store.edit(index) is None
    assert storage.load() == blob
    assert store.messages == [MSG_ADDED]


def test_complete_is_idempotent(store):
    store.add("a", "t")
    store.complete(0)
    once = dump(store)
    store.complete(0)
    assert dump(store) == once
    assert store.notes[0].completed is True


def test_uncomplete_restores_flag_only(store, storage):
    store.add("a", "t1,t2")
    store.complete(0)
    store.uncomplete(0)
    assert store.notes[0] == Note("a", ["t1", "t2"], False)
    assert persisted(storage)[0].completed is False


def test_edit_returns_draft_without_persisting(store, storage):
    store.add("a", "x,y")
    blob = storage.load()
    assert store.edit(0) == EditDraft(text="a", tags_input="x, y")
    assert storage.load() == blob


def test_edit_update_round_trip_leaves_others(store):
    store.add("a", "1")
    store.add("b", "2")
    store.add("c", "3")
    before = dump(store)
    store.edit(1)
    assert store.update(1, "B", "x,y")
    after = dump(store)
    assert after[1] == {"text": "B", "tags": ["x", "y"], "completed": False}
    assert after[0] == before[0]
    assert after[2] == before[2]
    assert store.messages[-1] == MSG_EDITED


def test_update_with_empty_text_is_rejected(store):
    store.add("a", "1")
    assert not store.update(0, "", "2")
    assert store.notes[0].text == "a"


def test_search_is_case_insensitive_subsequence(store):
    store.add("Buy MILK", "")
    store.add("eggs", "")
    store.add("milkshake", "")
    assert [n.text for n in store.search("milk")] == ["Buy MILK", "milkshake"]
    assert list(store.search("bread")) == []


def test_search_empty_query_returns_all_in_order(store):
    for t in "abc":
        store.add(t, "")
    assert list(store.search("")) == list(store.notes)


def test_search_ignores_tags(store):
    store.add("a", "milk")
    assert list(store.search("milk")) == []


def test_search_view_is_restartable_and_live(store):
    store.add("milk", "")
    view = store.search("milk")
    assert len(list(view)) == 1
    assert len(list(view)) == 1
    store.add("more milk", "")
    assert len(list(view)) == 2


def test_search_indexed_reports_collection_positions(store):
    store.add("eggs", "")
    store.add("milk", "")
    store.add("bread", "")
    store.add("oat milk", "")
    assert [i for i, _ in store.search("milk").indexed()] == [1, 3]


def test_search_does_not_mutate(store):
    store.add("a", "")
    before = dump(store)
    list(store.search("zzz"))
    assert dump(store) == before


def test_load_restores_persisted_collection(storage):
    storage.save(notes_to_blob([Note("a", ["x"], True), Note("b", [""], False)]))
    store = NoteStore(storage)
    assert store.load()
    assert store.notes == (Note("a", ["x"], True), Note("b", [""], False))


def test_load_without_blob_leaves_collection(store):
    store.add("a", "")
    fresh = NoteStore(MemoryStorage())
    assert not fresh.load()
    assert fresh.notes == ()


def test_load_corrupt_blob_keeps_current_collection(storage):
    store = NoteStore(storage)
    store.add("a", "")
    storage.save("{broken")
    assert not store.load()
    assert [n.text for n in store.notes] == ["a"]


def test_storage_failures_never_raise():
    store = NoteStore(FailingStorage())
    assert not store.load()
    assert store.add("a", "")
    assert store.complete(0)
    assert store.notes == (Note("a", [""], True),)
    assert not store.save()


def test_listener_errors_are_contained(store):
    def boom(msg):
        raise RuntimeError(msg)

    store.subscribe(boom)
    assert store.add("a", "")
    assert store.messages == [MSG_ADDED]


def test_dispatch_receives_save_and_writes_latest_state(storage):
    queued = []
    store = NoteStore(storage, dispatch=queued.append)
    store.add("a", "")
    store.add("b", "")
    store.delete(0)
    assert storage.load() is None
    assert len(queued) == 3

    # run out of order: each write serializes the current collection
    queued[2]()
    queued[0]()
    assert [n.text for n in persisted(storage)] == ["b"]


def test_scenario_end_to_end(storage):
    store = NoteStore(storage)
    store.add("Buy milk", "errand,home")
    assert dump(store) == [{"text": "Buy milk", "tags": ["errand", "home"], "completed": False}]

    store.complete(0)
    assert store.notes[0].completed is True
    assert len(list(store.search("milk"))) == 1
    assert list(store.search("eggs")) == []

    store.edit(0)
    store.update(0, "Buy eggs", "errand")
    assert dump(store) == [{"text": "Buy eggs", "tags": ["errand"], "completed": True}]

    store.delete(0)
    assert store.notes == ()
    assert list(store.search("eggs")) == []

    reloaded = NoteStore(storage)
    reloaded.load()
    assert reloaded.notes == ()


def test_snapshot_is_not_changed_by_later_mutations(store):
    store.add("a", "t")
    before = store.notes
    store.complete(0)
    store.update(0, "b", "u")
    assert before[0].completed is False
    assert before[0].text == "a"
    assert store.notes[0] == Note("b", ["u"], True)


def test_notes_cannot_be_modified_behind_the_store(store, storage):
    store.add("a", "t")
    with pytest.raises(dataclasses.FrozenInstanceError):
        store.notes[0].text = "hacked"
    assert store.notes[0].text == "a"
    assert persisted(storage)[0].text == "a"


def test_search_results_are_snapshots(store):
    store.add("milk", "")
    found = list(store.search("milk"))
    store.complete(0)
    assert found[0].completed is False
