"""In-memory blob storage, for tests and throwaway sessions."""

from .base import BlobStorage


class InMemoryBlobStorage(BlobStorage):
    """Keeps the blob in a Python attribute. Nothing survives the process."""

    def __init__(self, initial: bytes | None = None):
        self.data = initial
        self.writes = 0
        self.quarantined: list[bytes] = []

    def read(self) -> bytes | None:
        return self.data

    def write(self, data: bytes) -> None:
        self.data = bytes(data)
        self.writes += 1

    def quarantine(self) -> str | None:
        if self.data is None:
            return None
        self.quarantined.append(self.data)
        return f"memory[{len(self.quarantined) - 1}]"
