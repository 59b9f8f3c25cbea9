"""Editor session: one create-or-edit interaction over a draft entry.

The draft is a private, mutable copy. Nothing reaches the store until
``save()`` succeeds, and cancelling never touches the store at all.

State machine::

    EDITING --request_cancel (dirty)--> CONFIRMING_DISCARD
    EDITING --request_cancel (clean)--> CLOSED
    CONFIRMING_DISCARD --keep_editing--> EDITING
    CONFIRMING_DISCARD --discard--> CLOSED
    EDITING --save (title not blank)--> CLOSED
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from loguru import logger

from journali.core.exceptions import EditorStateError

from .models import Entry
from .store import EntryStore


class EditorState(StrEnum):
    EDITING = "editing"
    CONFIRMING_DISCARD = "confirming_discard"
    CLOSED = "closed"


# Valid transitions: from_state -> set of allowed to_states
_TRANSITIONS: dict[EditorState, set[EditorState]] = {
    EditorState.EDITING: {EditorState.CONFIRMING_DISCARD, EditorState.CLOSED},
    EditorState.CONFIRMING_DISCARD: {EditorState.EDITING, EditorState.CLOSED},
    EditorState.CLOSED: set(),
}


class EditorSession:
    """Draft state for creating a new entry or editing an existing one.

    Use ``EditorSession.create()`` for a new entry and ``EditorSession.edit()``
    for an existing one. A new entry's ``created_at`` is fixed when the
    session opens, not when it is saved.
    """

    def __init__(self, store: EntryStore, original: Entry, *, is_new: bool, always_confirm: bool = False) -> None:
        self._store = store
        self._original = original
        self._title = original.title
        self._content = original.content
        self.is_new = is_new
        self.always_confirm = always_confirm
        self.state = EditorState.EDITING
        self.saved: Entry | None = None

    @classmethod
    def create(
        cls,
        store: EntryStore,
        *,
        title: str = "",
        content: str = "",
        now: datetime | None = None,
        always_confirm: bool = False,
    ) -> EditorSession:
        """Open a session on a brand-new draft."""
        draft = Entry.new(title=title, content=content, now=now)
        return cls(store, draft, is_new=True, always_confirm=always_confirm)

    @classmethod
    def edit(cls, store: EntryStore, entry: Entry, *, always_confirm: bool = False) -> EditorSession:
        """Open a session on a copy of an existing entry."""
        return cls(store, entry, is_new=False, always_confirm=always_confirm)

    # -- Draft fields -------------------------------------------------------

    def _require(self, state: EditorState, action: str) -> None:
        if self.state != state:
            raise EditorStateError(f"Cannot {action} while {self.state.value}")

    def _move_to(self, new_state: EditorState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise EditorStateError(f"Cannot go from {self.state.value} to {new_state.value}")
        logger.debug(f"Editor {self._original.id[:8]}: {self.state.value} -> {new_state.value}")
        self.state = new_state

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        self._require(EditorState.EDITING, "change the title")
        self._title = value

    @property
    def content(self) -> str:
        return self._content

    @content.setter
    def content(self, value: str) -> None:
        self._require(EditorState.EDITING, "change the content")
        self._content = value

    @property
    def draft(self) -> Entry:
        """The draft as an Entry value, title untrimmed."""
        return self._original.with_changes(title=self._title, content=self._content)

    @property
    def is_dirty(self) -> bool:
        return self._title != self._original.title or self._content != self._original.content

    @property
    def can_save(self) -> bool:
        return self.state == EditorState.EDITING and bool(self._title.strip())

    # -- Transitions --------------------------------------------------------

    def save(self) -> Entry | None:
        """Commit the draft to the store.

        Returns the saved entry, or None when the trimmed title is blank (the
        session stays open and the store is untouched).
        """
        self._require(EditorState.EDITING, "save")
        if not self.can_save:
            logger.debug("Save rejected: title is blank")
            return None

        base = self._original
        if not self.is_new:
            # A bookmark toggled while the session was open must survive the save
            base = self._store.get(base.id) or base
        entry = base.with_changes(title=self._title.strip(), content=self._content)
        self._store.upsert(entry)
        self.saved = entry
        self._move_to(EditorState.CLOSED)
        return entry

    def request_cancel(self) -> EditorState:
        """Ask to leave without saving. Confirms first if there is anything to lose."""
        self._require(EditorState.EDITING, "cancel")
        if self.always_confirm or self.is_dirty:
            self._move_to(EditorState.CONFIRMING_DISCARD)
        else:
            self._move_to(EditorState.CLOSED)
        return self.state

    def keep_editing(self) -> None:
        """Back out of the discard confirmation."""
        self._require(EditorState.CONFIRMING_DISCARD, "keep editing")
        self._move_to(EditorState.EDITING)

    def discard(self) -> None:
        """Throw the draft away. The store is never touched."""
        self._move_to(EditorState.CLOSED)

    @property
    def is_closed(self) -> bool:
        return self.state == EditorState.CLOSED
