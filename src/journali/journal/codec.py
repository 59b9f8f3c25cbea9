"""Entry codec: the whole journal as one JSON blob.

Layout::

    {"version": 1, "entries": [{"id": ..., "title": ..., "content": ...,
                                "created_at": "2026-01-02T08:30:00.123456",
                                "is_bookmarked": false,
                                "audio_ref": "/path/rec_ab12cd34.m4a"}]}

``audio_ref`` is written only when an entry has a recording, so a missing key
reads back as "no audio". Unknown keys are ignored on read to let newer
versions add fields without breaking older readers.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from loguru import logger

from journali.core.exceptions import DecodeError

from .models import Entry

FORMAT_VERSION = 1


def _entry_to_dict(entry: Entry) -> dict[str, Any]:
    d: dict[str, Any] = {
        "id": entry.id,
        "title": entry.title,
        "content": entry.content,
        "created_at": entry.created_at.isoformat(),
        "is_bookmarked": entry.is_bookmarked,
    }
    if entry.audio_ref is not None:
        d["audio_ref"] = entry.audio_ref
    return d


def _entry_from_dict(d: Any, position: int) -> Entry:
    if not isinstance(d, dict):
        raise DecodeError(f"Entry #{position} is not an object")
    for key in ("id", "title", "created_at"):
        if key not in d:
            raise DecodeError(f"Entry #{position} is missing '{key}'")

    try:
        created_at = datetime.fromisoformat(d["created_at"])
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Entry #{position} has a bad created_at: {d['created_at']!r}") from e

    is_bookmarked = d.get("is_bookmarked", False)
    if not isinstance(is_bookmarked, bool):
        raise DecodeError(f"Entry #{position} has a non-boolean is_bookmarked")

    try:
        return Entry(
            id=d["id"],
            title=d["title"],
            content=d.get("content", ""),
            created_at=created_at,
            is_bookmarked=is_bookmarked,
            audio_ref=d.get("audio_ref"),
        )
    except ValueError as e:
        raise DecodeError(f"Entry #{position} is invalid: {e}") from e


def encode(entries: Iterable[Entry]) -> bytes:
    """Serialize entries, in order, to a UTF-8 JSON blob."""
    doc = {
        "version": FORMAT_VERSION,
        "entries": [_entry_to_dict(e) for e in entries],
    }
    return json.dumps(doc, ensure_ascii=False, indent=2).encode("utf-8")


def decode_strict(blob: bytes | None) -> list[Entry]:
    """Parse a blob produced by ``encode()``.

    An empty or missing blob is an empty journal. Anything malformed raises
    DecodeError; no partial result is ever returned.
    """
    if not blob or not blob.strip():
        return []

    try:
        doc = json.loads(blob.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        raise DecodeError(f"Blob is not valid JSON: {e}") from e

    # Bare lists predate the envelope
    if isinstance(doc, list):
        raw_entries = doc
    elif isinstance(doc, dict):
        version = doc.get("version", FORMAT_VERSION)
        if not isinstance(version, int):
            raise DecodeError(f"Blob has a non-integer version: {version!r}")
        if version > FORMAT_VERSION:
            logger.warning(f"Journal blob has format version {version}, newer than {FORMAT_VERSION}; reading known fields")
        raw_entries = doc.get("entries", [])
        if not isinstance(raw_entries, list):
            raise DecodeError("Blob 'entries' is not a list")
    else:
        raise DecodeError(f"Blob top level is a {type(doc).__name__}, expected an object")

    entries = [_entry_from_dict(d, i) for i, d in enumerate(raw_entries)]

    seen: set[str] = set()
    for entry in entries:
        if entry.id in seen:
            raise DecodeError(f"Duplicate entry id {entry.id}")
        seen.add(entry.id)
    return entries


def decode(blob: bytes | None) -> list[Entry]:
    """Parse a blob, treating any malformed input as an empty journal."""
    try:
        return decode_strict(blob)
    except DecodeError as e:
        logger.warning(f"Ignoring unreadable journal blob: {e}")
        return []
