"""
Store behaviour: creation, validation, ordering and persist-before-acknowledge.
"""
from __future__ import annotations

import datetime

import pytest

from reptile_log.data import codec
from reptile_log.data.entries import EntryType
from reptile_log.infrastructure.errors import (
    PersistenceCorruptError,
    PersistenceWriteError,
    ValidationError,
)
from reptile_log.services.storage import MemoryStorage
from reptile_log.services.store import Store


class FailingStorage(MemoryStorage):
    """MemoryStorage whose writes can be switched off."""

    def __init__(self):
        super().__init__()
        self.fail = False

    def save(self, key, records):
        if self.fail:
            raise PersistenceWriteError(key, "quota exceeded")
        super().save(key, records)


def test_add_reptile_trims_name_and_assigns_distinct_ids():
    store = Store(MemoryStorage())
    a = store.add_reptile("  Spike ")
    b = store.add_reptile("Spike")

    assert a.name == "Spike"
    assert b.name == "Spike"
    assert a.id != b.id
    assert store.list_reptiles() == [a, b]
    assert store.reptile_count == 2


@pytest.mark.parametrize("name", ["", "   ", "\t\n", None])
def test_add_reptile_rejects_blank_names(store, storage, name):
    with pytest.raises(ValidationError):
        store.add_reptile(name)

    assert store.list_reptiles() == []
    assert storage.load(codec.REPTILES_KEY) is None


def test_add_reptile_persists_whole_collection(store, storage):
    store.add_reptile("Spike")
    store.add_reptile("Noodle")

    assert storage.load(codec.REPTILES_KEY) == [
        {"id": "id-1", "name": "Spike"},
        {"id": "id-2", "name": "Noodle"},
    ]


def test_list_reptiles_returns_a_snapshot(store):
    store.add_reptile("Spike")
    snapshot = store.list_reptiles()
    snapshot.clear()

    assert len(store.list_reptiles()) == 1


def test_add_entry_sets_timestamp_and_trims_notes(store, clock):
    spike = store.add_reptile("Spike")
    entry = store.add_entry(spike.id, EntryType.FEEDING, "  crickets  ")

    assert entry.reptile_id == spike.id
    assert entry.type is EntryType.FEEDING
    assert entry.timestamp == clock.now
    assert entry.notes == "crickets"


def test_add_entry_accepts_string_type_and_blank_notes(store):
    spike = store.add_reptile("Spike")
    entry = store.add_entry(spike.id, "vet", "   ")

    assert entry.type is EntryType.VET
    assert entry.notes is None


def test_add_entry_rejects_unknown_reptile(store, storage):
    store.add_reptile("Spike")

    with pytest.raises(ValidationError):
        store.add_entry("nope", EntryType.BATH)

    assert storage.load(codec.ENTRIES_KEY) is None


def test_add_entry_rejects_unknown_type(store):
    spike = store.add_reptile("Spike")

    with pytest.raises(ValidationError):
        store.add_entry(spike.id, "shedding")

    assert store.list_entries_for(spike.id) == []


def test_spike_scenario(store, clock):
    spike = store.add_reptile("Spike")
    t1 = clock.now
    first = store.add_entry(spike.id, EntryType.FEEDING, "crickets")
    t2 = clock.advance(hours=1)
    second = store.add_entry(spike.id, EntryType.FEEDING)
    t3 = clock.advance(hours=1)
    bath = store.add_entry(spike.id, EntryType.BATH)

    entries = store.list_entries_for(spike.id)
    assert entries == [bath, second, first]
    assert [e.timestamp for e in entries] == [t3, t2, t1]
    assert first.notes == "crickets"
    assert second.notes is None


def test_entries_are_isolated_per_reptile(store, clock):
    a = store.add_reptile("A")
    b = store.add_reptile("B")
    store.add_entry(a.id, EntryType.FEEDING)
    clock.advance(minutes=5)
    store.add_entry(b.id, EntryType.BATH)
    clock.advance(minutes=5)
    store.add_entry(a.id, EntryType.VET)

    assert {e.reptile_id for e in store.list_entries_for(a.id)} == {a.id}
    assert {e.reptile_id for e in store.list_entries_for(b.id)} == {b.id}
    assert len(store.list_entries_for(a.id)) == 2
    assert len(store.list_entries_for(b.id)) == 1


def test_equal_timestamps_keep_a_stable_order(store):
    spike = store.add_reptile("Spike")
    # The clock is not advanced, so all three share one timestamp.
    created = [store.add_entry(spike.id, t) for t in (EntryType.TOILET, EntryType.BATH, EntryType.VET)]

    first_call = store.list_entries_for(spike.id)
    assert first_call == created
    assert store.list_entries_for(spike.id) == first_call


def test_failed_reptile_save_leaves_store_unchanged():
    storage = FailingStorage()
    store = Store(storage)
    store.add_reptile("Spike")
    storage.fail = True

    with pytest.raises(PersistenceWriteError):
        store.add_reptile("Noodle")

    assert [r.name for r in store.list_reptiles()] == ["Spike"]


def test_failed_entry_save_leaves_store_unchanged():
    storage = FailingStorage()
    store = Store(storage)
    spike = store.add_reptile("Spike")
    store.add_entry(spike.id, EntryType.FEEDING)
    storage.fail = True

    with pytest.raises(PersistenceWriteError):
        store.add_entry(spike.id, EntryType.BATH)

    assert [e.type for e in store.list_entries_for(spike.id)] == [EntryType.FEEDING]


def test_store_reloads_what_it_saved(store, storage, clock):
    spike = store.add_reptile("Spike")
    store.add_entry(spike.id, EntryType.FEEDING, "crickets")
    clock.advance(seconds=1)
    store.add_entry(spike.id, EntryType.TOILET)

    reopened = Store(storage)

    assert reopened.list_reptiles() == store.list_reptiles()
    assert reopened.list_entries_for(spike.id) == store.list_entries_for(spike.id)


def test_orphaned_entries_load_but_are_never_listed_for_others():
    storage = MemoryStorage({
        "reptiles": [{"id": "r1", "name": "Spike"}],
        "entries": [
            {"id": "e1", "reptileId": "gone", "type": "bath", "timestamp": "2024-05-01T08:00:00+00:00"},
        ],
    })
    store = Store(storage)

    assert store.list_entries_for("r1") == []
    assert len(store.list_entries_for("gone")) == 1


def test_corrupt_storage_fails_at_startup():
    storage = MemoryStorage({"entries": [{"id": "e1", "reptileId": "r1", "type": "nap"}]})

    with pytest.raises(PersistenceCorruptError):
        Store(storage)


def test_default_clock_is_timezone_aware_utc():
    store = Store(MemoryStorage())
    spike = store.add_reptile("Spike")
    entry = store.add_entry(spike.id, EntryType.BATH)

    assert entry.timestamp.utcoffset() == datetime.timedelta(0)
