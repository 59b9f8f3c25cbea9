"""EntryStore: the canonical, persisted sequence of journal entries.

The store owns the only authoritative list of entries. Every completed
mutation writes the full list back to blob storage, so storage always matches
the last mutation that finished. Readers get an immutable snapshot and derive
what to show from it with ``journali.journal.projector.project()``.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from loguru import logger

from journali.core.exceptions import DecodeError, EntryNotFoundError
from journali.core.storage import BlobStorage, StorageError

from . import codec
from .models import Entry


class EntryStore:
    """In-memory journal backed by a single persisted blob.

    Example::

        store = EntryStore(LocalBlobStorage("~/.journali-data"))
        store.load()
        store.upsert(Entry.new(title="Morning Walk"))
        for entry in project(store.snapshot(), "walk", SortMode.BY_DATE):
            print(entry.title)
    """

    def __init__(self, storage: BlobStorage) -> None:
        self._storage = storage
        self._entries: list[Entry] = []
        self.last_write_ok = True

    # -- Lifecycle ----------------------------------------------------------

    def load(self) -> None:
        """Replace in-memory state with the last persisted journal.

        Missing, unreadable or undecodable blobs all yield an empty journal.
        Whatever is on disk is quarantined first when it can't be used, so the
        next write can't destroy what is left of it.
        """
        try:
            self._entries = codec.decode_strict(self._storage.read())
        except (StorageError, DecodeError) as e:
            self._entries = []
            where = self._storage.quarantine()
            suffix = f" (kept a copy at {where})" if where else ""
            logger.warning(f"Journal blob is unreadable, starting empty{suffix}: {e}")
            return

        logger.info(f"Loaded {len(self._entries)} journal entries")

    def _persist(self) -> None:
        """Write the full sequence. Failures are logged, never raised."""
        try:
            self._storage.write(codec.encode(self._entries))
        except StorageError as e:
            self.last_write_ok = False
            logger.error(f"Failed to save journal ({len(self._entries)} entries kept in memory): {e}")
        else:
            self.last_write_ok = True

    # -- Mutations ----------------------------------------------------------

    def _index_of(self, entry_id: str) -> int | None:
        for i, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return i
        return None

    def upsert(self, entry: Entry) -> None:
        """Replace the entry with the same id in place, or insert it at the front.

        A replacement only changes title, content and bookmark: ``created_at``
        and ``audio_ref`` stay as first stored.
        """
        i = self._index_of(entry.id)
        if i is None:
            self._entries.insert(0, entry)
            logger.debug(f"Added entry {entry.id}")
        else:
            current = self._entries[i]
            if (entry.created_at, entry.audio_ref) != (current.created_at, current.audio_ref):
                logger.warning(f"Entry {entry.id}: created_at and audio_ref can't change, keeping stored values")
            self._entries[i] = current.with_changes(
                title=entry.title,
                content=entry.content,
                is_bookmarked=entry.is_bookmarked,
            )
            logger.debug(f"Updated entry {entry.id} at position {i}")
        self._persist()

    def delete(self, entry_id: str) -> None:
        """Remove the entry with *entry_id*. Unknown ids are a no-op."""
        i = self._index_of(entry_id)
        if i is not None:
            del self._entries[i]
            logger.debug(f"Deleted entry {entry_id}")
        self._persist()

    def toggle_bookmark(self, entry_id: str) -> None:
        """Flip the bookmark flag of *entry_id*. Unknown ids are a no-op."""
        i = self._index_of(entry_id)
        if i is not None:
            entry = self._entries[i]
            self._entries[i] = entry.with_changes(is_bookmarked=not entry.is_bookmarked)
        self._persist()

    def add_voice_note(self, audio_ref: str | Path) -> Entry:
        """Record a finished voice recording as a new entry."""
        entry = Entry.voice_note(audio_ref)
        self.upsert(entry)
        return entry

    # -- Queries ------------------------------------------------------------

    def snapshot(self) -> tuple[Entry, ...]:
        """Current canonical sequence, newest-created first unless edited in place."""
        return tuple(self._entries)

    def get(self, entry_id: str) -> Entry | None:
        i = self._index_of(entry_id)
        return self._entries[i] if i is not None else None

    def resolve(self, id_prefix: str) -> Entry:
        """Find the single entry whose id starts with *id_prefix*.

        Raises EntryNotFoundError when no entry or more than one entry matches.
        """
        exact = self.get(id_prefix)
        if exact is not None:
            return exact
        matches = [e for e in self._entries if id_prefix and e.id.startswith(id_prefix)]
        if len(matches) == 1:
            return matches[0]
        if not matches:
            raise EntryNotFoundError(f"No entry with id '{id_prefix}'")
        raise EntryNotFoundError(f"Id prefix '{id_prefix}' matches {len(matches)} entries")

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return isinstance(entry_id, str) and self._index_of(entry_id) is not None

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.snapshot())
