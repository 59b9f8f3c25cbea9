"""User preferences that live outside the entry blob.

Currently just the list sort mode, kept in a small YAML file so it survives
between sessions without touching the journal itself.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from loguru import logger

from journali.core.utils.file_io import atomic_write_bytes

from .models import SortMode


class PreferenceStore:
    """YAML-file-backed preferences."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Ignoring unreadable preferences {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring preferences {self.path}: expected a mapping")
            return {}
        return data

    def _write(self, data: dict) -> None:
        text = yaml.safe_dump(data, default_flow_style=False, sort_keys=True)
        atomic_write_bytes(self.path, text.encode("utf-8"))

    @property
    def sort_mode(self) -> SortMode:
        raw = self._read().get("sort_mode")
        if raw is None:
            return SortMode.default()
        try:
            return SortMode(raw)
        except ValueError:
            logger.warning(f"Unknown sort_mode {raw!r} in {self.path}; using {SortMode.default().value}")
            return SortMode.default()

    @sort_mode.setter
    def sort_mode(self, mode: SortMode | str) -> None:
        data = self._read()
        data["sort_mode"] = SortMode(mode).value
        self._write(data)
