"""Shared setup logic for CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import click

from journali.core.config import Config
from journali.core.exceptions import EntryNotFoundError
from journali.journal.models import Entry
from journali.journal.preferences import PreferenceStore
from journali.journal.store import EntryStore

JOURNALI_DIR = Path.home() / ".journali"
CONFIG_PATH = JOURNALI_DIR / "config.yaml"


@dataclass
class AppContext:
    """Objects built once per CLI invocation and handed to every command."""

    config: Config
    _store: EntryStore | None = None
    _preferences: PreferenceStore | None = None

    @property
    def store(self) -> EntryStore:
        if self._store is None:
            self._store = open_store(self.config)
        return self._store

    @property
    def preferences(self) -> PreferenceStore:
        if self._preferences is None:
            self._preferences = open_preferences(self.config)
        return self._preferences


def load_config(config_file: str | None = None, data_dir: str | None = None) -> Config:
    """Load config from *config_file*, falling back to ~/.journali/config.yaml."""
    return Config.load(config_file or str(CONFIG_PATH), data_dir=data_dir)


def open_store(config: Config) -> EntryStore:
    """Build the entry store described by *config* and load it."""
    from journali.core.storage import LocalBlobStorage

    storage = LocalBlobStorage(
        base_path=config.data_dir,
        blob_name=config.blob_name,
        compress=config.compress,
    )
    store = EntryStore(storage)
    store.load()
    return store


def open_preferences(config: Config) -> PreferenceStore:
    return PreferenceStore(config.preferences_path)


def resolve_entry(store: EntryStore, id_prefix: str) -> Entry:
    """Look up an entry by id prefix, turning misses into a CLI error."""
    try:
        return store.resolve(id_prefix)
    except EntryNotFoundError as e:
        raise click.ClickException(e.args[0]) from e


def format_entry_line(entry: Entry) -> str:
    """One-line summary used by ``journali list``."""
    mark = "*" if entry.is_bookmarked else " "
    audio = "  [audio]" if entry.has_audio else ""
    return f"{entry.id[:8]}  {entry.created_at:%Y-%m-%d %H:%M}  {mark} {entry.title}{audio}"


def ensure_saved(store: EntryStore) -> None:
    """Warn when the last write did not reach disk."""
    if not store.last_write_ok:
        click.echo("Warning: changes could not be saved to disk (see log).", err=True)
