"""
Journali settings.

Settings come from three places, highest precedence first:
    1. Environment variables, ``JOURNALI_<SECTION>__<KEY>``
       (e.g. ``JOURNALI_STORAGE__COMPRESS=1``)
    2. A YAML or JSON config file, laid out as::

           paths:
             data_dir: ~/.journali-data
           storage:
             blob_name: entries.json
             compress: false
           preferences:
             file_name: preferences.yaml
           editor:
             always_confirm_discard: false
           logging:
             level: WARNING
             file: ""          # relative paths live under data_dir

    3. The defaults on ``Config``

The ``--data-dir`` command-line flag beats all three.
"""

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from .exceptions import ConfigurationError

ENV_PREFIX = "JOURNALI_"
DEFAULT_DATA_DIR = "~/.journali-data"
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")

# "<section>.<key>" as written in files and env vars -> Config field
_KEYS: dict[str, str] = {
    "paths.data_dir": "data_dir",
    "storage.blob_name": "blob_name",
    "storage.compress": "compress",
    "preferences.file_name": "preferences_file",
    "editor.always_confirm_discard": "always_confirm_discard",
    "logging.level": "log_level",
    "logging.file": "log_file",
}

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off", ""}


def _to_bool(name: str, value: Any) -> bool:
    """Accept real booleans and the string forms env vars produce."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ConfigurationError(f"Expected a boolean for '{name}', got {value!r}")


@dataclass
class Config:
    """Resolved journali settings. Build one with ``Config.load()``."""

    data_dir: str = DEFAULT_DATA_DIR
    blob_name: str = "entries.json"
    compress: bool = False
    preferences_file: str = "preferences.yaml"
    always_confirm_discard: bool = False
    log_level: str = "WARNING"
    log_file: str = ""

    def __post_init__(self):
        self.data_dir = os.path.expanduser(str(self.data_dir))
        self.compress = _to_bool("storage.compress", self.compress)
        self.always_confirm_discard = _to_bool("editor.always_confirm_discard", self.always_confirm_discard)
        self.log_level = str(self.log_level).strip().upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown logging.level {self.log_level!r}; use one of {', '.join(LOG_LEVELS)}")
        for name in ("blob_name", "preferences_file"):
            if not str(getattr(self, name)).strip():
                raise ConfigurationError(f"'{name}' cannot be empty")

    @classmethod
    def load(
        cls,
        config_file: str | None = None,
        data_dir: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "Config":
        """
        Merge defaults, *config_file* and the environment into a Config.

        Args:
            config_file: YAML or JSON file. A missing file is not an error.
            data_dir: Overrides every other source (the ``--data-dir`` flag).
            environ: Environment to read overrides from, ``os.environ`` by default.

        Raises:
            ConfigurationError: unreadable file, unknown log level, bad boolean.
        """
        values: dict[str, Any] = {}
        if config_file:
            path = os.path.expanduser(config_file)
            if os.path.exists(path):
                values.update(_from_file(path))
        values.update(_from_env(os.environ if environ is None else environ))
        if data_dir:
            values["data_dir"] = data_dir
        return cls(**values)

    @property
    def preferences_path(self) -> Path:
        return Path(self.data_dir) / self.preferences_file

    @property
    def log_path(self) -> Path | None:
        """Where the log file goes, or None to log to stderr only."""
        if not self.log_file:
            return None
        path = Path(self.log_file).expanduser()
        return path if path.is_absolute() else Path(self.data_dir) / path


def _read_file(path: str) -> dict[str, Any]:
    """Load a YAML or JSON config file."""
    ext = os.path.splitext(path)[1].lower()
    try:
        with open(path) as f:
            if ext in (".yaml", ".yml"):
                data = yaml.safe_load(f) or {}
            elif ext == ".json":
                data = json.load(f)
            else:
                raise ConfigurationError(f"Config file {path} must end in .yaml, .yml or .json")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping at the top level")
    return data


def _from_file(path: str) -> dict[str, Any]:
    """Flatten the file's sections into Config field values."""
    values: dict[str, Any] = {}
    for section, entries in _read_file(path).items():
        if not isinstance(entries, dict):
            raise ConfigurationError(f"Section '{section}' in {path} must be a mapping")
        for key, value in entries.items():
            name = _KEYS.get(f"{section}.{key}")
            if name is None:
                logger.warning(f"Ignoring unknown setting '{section}.{key}' in {path}")
            elif value is not None:
                values[name] = value
    return values


def _from_env(environ: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for env_key, env_value in environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        dotted = env_key[len(ENV_PREFIX) :].lower().replace("__", ".")
        name = _KEYS.get(dotted)
        if name is None:
            logger.debug(f"Ignoring {env_key}: not a journali setting")
            continue
        values[name] = env_value
    return values
