"""Core data models for the journal.

Entries are immutable values. Editing an entry means building a new value
with ``with_changes()`` and handing it to ``EntryStore.upsert()``.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import StrEnum
from pathlib import Path

VOICE_NOTE_TITLE = "Voice Note"


def new_entry_id() -> str:
    """Generate a fresh, never-reused entry id."""
    return str(uuid.uuid4())


class SortMode(StrEnum):
    """How the entry list is ordered for display."""

    BY_BOOKMARK = "bookmark"  # Bookmarked first, oldest first within each group
    BY_DATE = "date"  # Newest first

    @classmethod
    def default(cls) -> SortMode:
        return cls.BY_DATE


@dataclass(frozen=True)
class Entry:
    """One journal record.

    Attributes:
        id: Opaque unique identifier, assigned at creation.
        title: Entry title. Empty only while the entry is a draft.
        content: Free text body, may be empty.
        created_at: When the entry was first created (not when it was saved),
            as naive local time. Aware datetimes are converted on construction.
        is_bookmarked: Whether the user bookmarked the entry.
        audio_ref: Path of an attached voice recording. The journal only
            stores the reference; it never opens or deletes the file.
    """

    id: str
    title: str
    content: str = ""
    created_at: datetime = field(default_factory=datetime.now)
    is_bookmarked: bool = False
    audio_ref: str | None = None

    def __post_init__(self):
        if not self.id or not isinstance(self.id, str):
            raise ValueError("Entry id must be a non-empty string")
        if not isinstance(self.title, str) or not isinstance(self.content, str):
            raise ValueError("Entry title and content must be strings")
        if not isinstance(self.created_at, datetime):
            raise ValueError("Entry created_at must be a datetime")
        if self.created_at.tzinfo is not None:
            # Journal times are naive local time; aware and naive values don't compare
            object.__setattr__(self, "created_at", self.created_at.astimezone().replace(tzinfo=None))
        if isinstance(self.audio_ref, Path):
            object.__setattr__(self, "audio_ref", str(self.audio_ref))
        if self.audio_ref is not None and not isinstance(self.audio_ref, str):
            raise ValueError("Entry audio_ref must be a path string or None")

    @classmethod
    def new(
        cls,
        title: str = "",
        content: str = "",
        audio_ref: str | Path | None = None,
        now: datetime | None = None,
    ) -> Entry:
        """Create an entry with a fresh id, timestamped now."""
        return cls(
            id=new_entry_id(),
            title=title,
            content=content,
            created_at=now or datetime.now(),
            audio_ref=str(audio_ref) if audio_ref is not None else None,
        )

    @classmethod
    def voice_note(cls, audio_ref: str | Path, now: datetime | None = None) -> Entry:
        """Create the entry that wraps a finished voice recording."""
        return cls.new(title=VOICE_NOTE_TITLE, audio_ref=audio_ref, now=now)

    def with_changes(
        self,
        *,
        title: str | None = None,
        content: str | None = None,
        is_bookmarked: bool | None = None,
    ) -> Entry:
        """Return a copy with the mutable fields changed. id, created_at and audio_ref never change."""
        changes = {}
        if title is not None:
            changes["title"] = title
        if content is not None:
            changes["content"] = content
        if is_bookmarked is not None:
            changes["is_bookmarked"] = is_bookmarked
        return replace(self, **changes)

    @property
    def has_audio(self) -> bool:
        return self.audio_ref is not None

    def __repr__(self) -> str:
        preview = self.title[:40] + "..." if len(self.title) > 40 else self.title
        mark = ", bookmarked" if self.is_bookmarked else ""
        return f"Entry(id='{self.id[:8]}', title='{preview}'{mark})"
