"""Voice notes: glue between an audio capture backend and the store.

The capture backend is the only part with real duration (the recording
itself). The journal only sees its result: a file reference once ``stop()``
returns, which becomes a "Voice Note" entry.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from loguru import logger

from journali.core.exceptions import AudioCaptureError

from .models import Entry
from .store import EntryStore


@runtime_checkable
class AudioCapture(Protocol):
    """Protocol for recording backends.

    ``start()`` raises AudioCaptureError (or any OSError from the device)
    when recording cannot begin. ``stop()`` returns the recorded file, or
    None if nothing usable was captured.
    """

    def start(self) -> None: ...

    def stop(self) -> str | Path | None: ...


class VoiceNoteRecorder:
    """Mirrors the microphone button: tap to start, tap again to save."""

    def __init__(self, store: EntryStore, capture: AudioCapture) -> None:
        self._store = store
        self._capture = capture
        self.is_recording = False
        self.notice: str | None = None

    def start(self) -> bool:
        """Begin recording. Returns False (and sets ``notice``) on failure."""
        if self.is_recording:
            return True
        self.notice = None
        try:
            self._capture.start()
        except (AudioCaptureError, OSError) as e:
            self.notice = f"Could not start recording: {e}"
            logger.warning(self.notice)
            return False
        self.is_recording = True
        return True

    def stop(self) -> Entry | None:
        """Finish recording and add a voice-note entry if a file came back."""
        if not self.is_recording:
            return None
        self.is_recording = False
        audio_ref = self._capture.stop()
        if audio_ref is None:
            logger.info("Recording stopped without a file; no entry created")
            return None
        return self._store.add_voice_note(audio_ref)

    def toggle(self) -> Entry | None:
        """Start when idle, stop (and maybe create an entry) when recording."""
        if self.is_recording:
            return self.stop()
        self.start()
        return None


class ExistingFileCapture:
    """Capture backend that "records" a file that already exists on disk.

    Used by ``journali voice-note PATH`` to attach recordings made elsewhere.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()
        self._started = False

    def start(self) -> None:
        if not self.path.is_file():
            raise AudioCaptureError(f"No audio file at {self.path}")
        self._started = True

    def stop(self) -> str | None:
        if not self._started:
            return None
        self._started = False
        return str(self.path.resolve())
