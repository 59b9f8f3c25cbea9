"""Shared test fixtures for journali."""

import os
import tempfile
from datetime import datetime

import pytest

from journali.core.storage import InMemoryBlobStorage
from journali.journal.models import Entry
from journali.journal.store import EntryStore


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "paths": {"data_dir": os.path.join(tmp_dir, "data")},
        "storage": {"compress": True},
        "editor": {"always_confirm_discard": True},
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def sample_entries():
    """A (bookmarked, day 1), B (plain, day 2), C (bookmarked, day 3)."""
    a = Entry(id="a", title="Morning Walk", content="Sunrise by the river", created_at=datetime(2026, 1, 1, 8, 0), is_bookmarked=True)
    b = Entry(id="b", title="Evening Thoughts", content="", created_at=datetime(2026, 1, 2, 21, 30))
    c = Entry(id="c", title="Trip", content="Packed the car", created_at=datetime(2026, 1, 3, 12, 0), is_bookmarked=True)
    return [a, b, c]


@pytest.fixture
def memory_storage():
    return InMemoryBlobStorage()


@pytest.fixture
def store(memory_storage):
    s = EntryStore(memory_storage)
    s.load()
    return s
