"""
Storage backends for journali.

Provides single-blob storage with optional gzip compression and a pluggable
backend interface (local filesystem by default, in-memory for tests).
"""

from .base import BlobStorage, StorageError, StorageReadError, StorageWriteError
from .compression import CompressionType, compress_bytes, decompress_bytes, detect_compression
from .local import LocalBlobStorage
from .memory import InMemoryBlobStorage

__all__ = [
    "BlobStorage",
    "CompressionType",
    "InMemoryBlobStorage",
    "LocalBlobStorage",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "compress_bytes",
    "decompress_bytes",
    "detect_compression",
]
