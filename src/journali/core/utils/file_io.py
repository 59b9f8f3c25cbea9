"""
File I/O utilities: atomic whole-file writes and timestamped backups.

All functions operate on explicit paths, no implicit directory lookups.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path

from loguru import logger


def atomic_write_bytes(filepath: str | Path, data: bytes) -> None:
    """Atomic write: temp file + rename so a kill can't leave a half-written file."""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)  # atomic on POSIX
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def backup_file(file_path: str | Path, suffix: str = "backup", backup_dir: str | None = None) -> str | None:
    """Create a timestamped copy of a file. Returns backup path or None."""
    src = Path(file_path)
    if not src.exists():
        return None

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_name = f"{src.name}.{suffix}.{timestamp}"

    if backup_dir:
        backup_path = Path(backup_dir) / backup_name
        backup_path.parent.mkdir(parents=True, exist_ok=True)
    else:
        backup_path = src.parent / backup_name

    try:
        shutil.copy2(str(src), str(backup_path))
        return str(backup_path)
    except OSError as e:
        logger.warning(f"Could not back up {src} to {backup_path}: {e}")
        return None
