"""Journal core: entries, their persisted store, and derived views.

Provides the Entry model, the JSON blob codec, the EntryStore that owns the
canonical entry list, the pure ``project()`` view function, and the editor
session that mediates create and edit.
"""

from .audio import AudioCapture, ExistingFileCapture, VoiceNoteRecorder
from .codec import decode, decode_strict, encode
from .editor import EditorSession, EditorState
from .models import Entry, SortMode
from .preferences import PreferenceStore
from .projector import project
from .store import EntryStore

__all__ = [
    "AudioCapture",
    "EditorSession",
    "EditorState",
    "Entry",
    "EntryStore",
    "ExistingFileCapture",
    "PreferenceStore",
    "SortMode",
    "VoiceNoteRecorder",
    "decode",
    "decode_strict",
    "encode",
    "project",
]
