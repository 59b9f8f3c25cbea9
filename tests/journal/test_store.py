"""Tests for journali.journal.store."""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from journali.core.exceptions import EntryNotFoundError
from journali.core.storage import (
    BlobStorage,
    InMemoryBlobStorage,
    LocalBlobStorage,
    StorageReadError,
    StorageWriteError,
)
from journali.journal.codec import decode, encode
from journali.journal.models import Entry
from journali.journal.store import EntryStore


class FailingStorage(BlobStorage):
    """Storage whose reads and/or writes blow up."""

    def __init__(self, fail_read=False, fail_write=False):
        self.fail_read = fail_read
        self.fail_write = fail_write
        self.data = None

    def read(self):
        if self.fail_read:
            raise StorageReadError("disk on fire")
        return self.data

    def write(self, data):
        if self.fail_write:
            raise StorageWriteError("disk full")
        self.data = data


class TestLoad:
    def test_first_run_is_empty(self, store):
        assert store.snapshot() == ()
        assert len(store) == 0

    def test_restores_persisted_entries(self, sample_entries):
        storage = InMemoryBlobStorage(encode(sample_entries))
        store = EntryStore(storage)
        store.load()
        assert list(store.snapshot()) == sample_entries

    def test_malformed_blob_is_empty_and_quarantined(self):
        storage = InMemoryBlobStorage(b"{ definitely not json")
        store = EntryStore(storage)
        store.load()
        assert len(store) == 0
        assert storage.quarantined == [b"{ definitely not json"]

    def test_read_failure_is_empty(self):
        store = EntryStore(FailingStorage(fail_read=True))
        store.load()
        assert len(store) == 0

    def test_read_failure_is_empty_and_quarantined(self):
        storage = FailingStorage(fail_read=True)
        storage.quarantine = MagicMock(return_value="entries.json.corrupt.20260101_000000")
        store = EntryStore(storage)
        store.load()
        assert len(store) == 0
        storage.quarantine.assert_called_once_with()

    def test_corrupt_gzip_on_disk_is_kept_before_next_write(self, tmp_path):
        storage = LocalBlobStorage(base_path=str(tmp_path), compress=True)
        store = EntryStore(storage)
        store.upsert(Entry.new(title="Only copy"))
        truncated = storage.path.read_bytes()[:-8]
        storage.path.write_bytes(truncated)

        reopened = EntryStore(LocalBlobStorage(base_path=str(tmp_path), compress=True))
        reopened.load()
        assert len(reopened) == 0
        reopened.upsert(Entry.new(title="After the crash"))

        (backup,) = tmp_path.glob("entries.json.gz.corrupt.*")
        assert backup.read_bytes() == truncated

    def test_load_replaces_state(self, memory_storage, sample_entries):
        store = EntryStore(memory_storage)
        store.upsert(Entry.new(title="in memory only"))
        memory_storage.data = encode(sample_entries)
        store.load()
        assert [e.id for e in store.snapshot()] == ["a", "b", "c"]


class TestUpsert:
    def test_new_entry_goes_to_front(self, store):
        first = Entry.new(title="First")
        second = Entry.new(title="Second")
        store.upsert(first)
        store.upsert(second)
        assert store.snapshot() == (second, first)

    def test_existing_entry_replaced_in_place(self, store):
        entries = [Entry.new(title=f"e{i}") for i in range(3)]
        for e in entries:
            store.upsert(e)
        # canonical order is now e2, e1, e0
        edited = entries[1].with_changes(title="edited")
        store.upsert(edited)
        assert [e.title for e in store.snapshot()] == ["e2", "edited", "e0"]

    def test_replace_keeps_created_at_and_audio_ref(self, store, memory_storage):
        original = Entry.new(title="Voice", audio_ref="/rec_1.m4a", now=datetime(2026, 1, 1, 9, 0))
        store.upsert(original)
        store.upsert(
            Entry(
                id=original.id,
                title="Renamed",
                created_at=datetime(2030, 1, 1),
                is_bookmarked=True,
                audio_ref="/other.m4a",
            )
        )
        stored = store.get(original.id)
        assert stored.created_at == datetime(2026, 1, 1, 9, 0)
        assert stored.audio_ref == "/rec_1.m4a"
        assert (stored.title, stored.is_bookmarked) == ("Renamed", True)
        assert decode(memory_storage.data) == [stored]

    def test_ids_stay_unique(self, store):
        entry = Entry.new(title="once")
        for title in ("a", "b", "c"):
            store.upsert(entry.with_changes(title=title))
        ids = [e.id for e in store.snapshot()]
        assert len(ids) == len(set(ids)) == 1

    def test_persists_every_time(self, store, memory_storage):
        store.upsert(Entry.new(title="one"))
        store.upsert(Entry.new(title="two"))
        assert memory_storage.writes == 2
        assert decode(memory_storage.data) == list(store.snapshot())


class TestDelete:
    def test_removes_entry(self, store):
        keep = Entry.new(title="keep")
        drop = Entry.new(title="drop")
        store.upsert(keep)
        store.upsert(drop)
        store.delete(drop.id)
        assert store.snapshot() == (keep,)
        assert decode(store._storage.data) == [keep]

    def test_idempotent(self, store):
        entry = Entry.new(title="x")
        store.upsert(entry)
        store.upsert(Entry.new(title="y"))
        store.delete(entry.id)
        after_once = store.snapshot()
        store.delete(entry.id)
        assert store.snapshot() == after_once

    def test_unknown_id_is_noop(self, store, memory_storage):
        store.upsert(Entry.new(title="x"))
        before = store.snapshot()
        store.delete("nope")
        assert store.snapshot() == before


class TestToggleBookmark:
    def test_flips_and_persists(self, store, memory_storage):
        entry = Entry.new(title="x")
        store.upsert(entry)
        store.toggle_bookmark(entry.id)
        assert store.get(entry.id).is_bookmarked is True
        assert decode(memory_storage.data)[0].is_bookmarked is True
        store.toggle_bookmark(entry.id)
        assert store.get(entry.id).is_bookmarked is False

    def test_position_unchanged(self, store):
        entries = [Entry.new(title=f"e{i}") for i in range(3)]
        for e in entries:
            store.upsert(e)
        store.toggle_bookmark(entries[1].id)
        assert [e.id for e in store.snapshot()] == [entries[2].id, entries[1].id, entries[0].id]

    def test_unknown_id_is_noop(self, store):
        store.upsert(Entry.new(title="x"))
        before = store.snapshot()
        store.toggle_bookmark("nope")
        assert store.snapshot() == before


class TestVoiceNote:
    def test_adds_voice_note_at_front(self, store):
        store.upsert(Entry.new(title="older"))
        entry = store.add_voice_note("/rec/rec_1.m4a")
        assert store.snapshot()[0] == entry
        assert entry.title == "Voice Note"
        assert entry.audio_ref == "/rec/rec_1.m4a"


class TestQueries:
    def test_snapshot_is_immutable(self, store):
        store.upsert(Entry.new(title="x"))
        snap = store.snapshot()
        assert isinstance(snap, tuple)
        store.upsert(Entry.new(title="y"))
        assert len(snap) == 1

    def test_get_and_contains(self, store):
        entry = Entry.new(title="x")
        store.upsert(entry)
        assert store.get(entry.id) == entry
        assert store.get("missing") is None
        assert entry.id in store
        assert "missing" not in store

    def test_iterates_in_canonical_order(self, store):
        first = Entry.new(title="1")
        second = Entry.new(title="2")
        store.upsert(first)
        store.upsert(second)
        assert list(store) == [second, first]

    def test_resolve_by_prefix(self, store):
        entry = Entry(id="abc123", title="x")
        store.upsert(entry)
        store.upsert(Entry(id="abd999", title="y"))
        assert store.resolve("abc") == entry
        assert store.resolve("abc123") == entry

    def test_resolve_ambiguous(self, store):
        store.upsert(Entry(id="abc1", title="x"))
        store.upsert(Entry(id="abc2", title="y"))
        with pytest.raises(EntryNotFoundError, match="matches 2"):
            store.resolve("abc")

    def test_resolve_missing(self, store):
        with pytest.raises(EntryNotFoundError):
            store.resolve("zzz")
        with pytest.raises(EntryNotFoundError):
            store.resolve("")


class TestWriteFailure:
    def test_state_kept_and_flagged(self):
        storage = FailingStorage(fail_write=True)
        store = EntryStore(storage)
        entry = Entry.new(title="x")
        store.upsert(entry)
        assert store.snapshot() == (entry,)
        assert store.last_write_ok is False

    def test_recovers_flag_after_success(self):
        storage = FailingStorage(fail_write=True)
        store = EntryStore(storage)
        store.upsert(Entry.new(title="x"))
        storage.fail_write = False
        store.upsert(Entry.new(title="y"))
        assert store.last_write_ok is True
        assert len(decode(storage.data)) == 2
