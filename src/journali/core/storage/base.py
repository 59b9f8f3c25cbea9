"""
Abstract base class for blob storage backends.

The journal persists its whole state as one opaque blob. A backend only
needs to hand back the last blob it was given and to overwrite it wholesale.
"""

from abc import ABC, abstractmethod

from ..exceptions import JournaliError


class BlobStorage(ABC):
    """Holds a single byte blob across process restarts."""

    @abstractmethod
    def read(self) -> bytes | None:
        """Return the last written blob, or None if nothing was ever written.

        Raises StorageReadError if the blob exists but cannot be read.
        """

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Replace the stored blob with *data*. Raises StorageWriteError on failure."""

    def quarantine(self) -> str | None:
        """Set aside the current blob so a later write can't destroy it.

        Called when the blob was readable but undecodable. Returns a
        description of where it went, or None if the backend keeps no copy.
        """
        return None


class StorageError(JournaliError):
    """Base exception for storage errors."""


class StorageReadError(StorageError):
    """Raised when the stored blob exists but cannot be read."""


class StorageWriteError(StorageError):
    """Raised when a new blob cannot be written."""
