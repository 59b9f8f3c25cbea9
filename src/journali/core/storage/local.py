"""
Local filesystem blob storage.

The blob lives in one file under ``base_path``. Writes go through a temp file
and ``os.replace`` so the file always holds either the previous or the new
blob, never a torn one.
"""

import zlib
from pathlib import Path

from loguru import logger

from ..utils.file_io import atomic_write_bytes, backup_file
from .base import BlobStorage, StorageReadError, StorageWriteError
from .compression import CompressionType, compress_bytes, decompress_bytes, detect_compression


class LocalBlobStorage(BlobStorage):
    """Single-file blob storage on the local filesystem."""

    def __init__(self, base_path: str = "~/.journali-data", blob_name: str = "entries.json", compress: bool = False):
        self.base_path = Path(base_path).expanduser().resolve()
        self.compression = CompressionType.GZIP if compress else CompressionType.NONE
        if "/" in blob_name or "\\" in blob_name or blob_name in ("", ".", ".."):
            raise ValueError(f"Blob name must be a plain file name, got {blob_name!r}")
        if self.compression == CompressionType.GZIP and not blob_name.endswith(".gz"):
            blob_name += ".gz"
        self.path = self.base_path / blob_name

    def read(self) -> bytes | None:
        if not self.path.exists():
            return None
        try:
            data = self.path.read_bytes()
        except OSError as e:
            raise StorageReadError(f"Cannot read {self.path}: {e}") from e

        # Honour what is on disk rather than the current setting, so toggling
        # compression doesn't make an existing journal unreadable.
        try:
            return decompress_bytes(data, detect_compression(data))
        except (OSError, EOFError, zlib.error) as e:
            raise StorageReadError(f"Corrupt gzip payload in {self.path}: {e}") from e

    def write(self, data: bytes) -> None:
        payload = compress_bytes(data, self.compression)
        try:
            atomic_write_bytes(self.path, payload)
        except OSError as e:
            raise StorageWriteError(f"Cannot write to {self.path}: {e}") from e
        logger.debug(f"Wrote {len(payload)} bytes to {self.path}")

    def quarantine(self) -> str | None:
        return backup_file(self.path, suffix="corrupt")

    def __repr__(self) -> str:
        return f"LocalBlobStorage(path='{self.path}', compression={self.compression.value})"
