"""View projection: which entries to display, and in what order.

``project()`` is a pure function over a snapshot. It never touches the store
and never mutates its input, so the CLI can call it as often as it likes.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import Entry, SortMode


def matches(entry: Entry, search_term: str) -> bool:
    """Case-insensitive substring match on title or content."""
    needle = search_term.casefold()
    return needle in entry.title.casefold() or needle in entry.content.casefold()


def project(
    entries: Iterable[Entry],
    search_term: str = "",
    sort_mode: SortMode = SortMode.BY_DATE,
) -> list[Entry]:
    """Filter by *search_term*, then order by *sort_mode*.

    Both sorts are stable: entries equal on every key keep their input order.

    Args:
        entries: Canonical sequence, usually ``store.snapshot()``.
        search_term: Substring to look for. Empty keeps everything.
        sort_mode: BY_BOOKMARK puts bookmarked entries first, oldest first
            within each group. BY_DATE is newest first.

    Returns:
        A new list; the input is left untouched.
    """
    shown = [e for e in entries if matches(e, search_term)] if search_term else list(entries)

    if SortMode(sort_mode) == SortMode.BY_BOOKMARK:
        shown.sort(key=lambda e: (not e.is_bookmarked, e.created_at))
    else:
        shown.sort(key=lambda e: e.created_at, reverse=True)
    return shown
