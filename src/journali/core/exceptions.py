"""
Journali exception hierarchy.

All journali exceptions inherit from JournaliError, making it easy for callers
to catch library-level errors while still distinguishing specific failure modes.
Storage errors live in ``journali.core.storage`` and share the same base.
"""


class JournaliError(Exception):
    """Base exception class for all journali errors."""


class ConfigurationError(JournaliError):
    """Raised for configuration errors (missing keys, invalid values)."""


class DecodeError(JournaliError):
    """Raised when a persisted blob cannot be decoded into entries."""


class AudioCaptureError(JournaliError):
    """Raised by audio capture backends when a recording cannot be started."""


class EditorStateError(JournaliError):
    """Raised when an editor operation is not allowed in the current state."""


class EntryNotFoundError(JournaliError, KeyError):
    """Raised when an entry id (or id prefix) does not resolve to one entry."""
