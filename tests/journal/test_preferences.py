"""Tests for journali.journal.preferences."""

import yaml

from journali.journal.models import SortMode
from journali.journal.preferences import PreferenceStore


class TestPreferenceStore:
    def test_default_sort_mode(self, tmp_path):
        prefs = PreferenceStore(tmp_path / "prefs.yaml")
        assert prefs.sort_mode is SortMode.BY_DATE

    def test_set_and_reload(self, tmp_path):
        path = tmp_path / "sub" / "prefs.yaml"
        PreferenceStore(path).sort_mode = SortMode.BY_BOOKMARK
        assert PreferenceStore(path).sort_mode is SortMode.BY_BOOKMARK
        assert yaml.safe_load(path.read_text()) == {"sort_mode": "bookmark"}

    def test_accepts_string(self, tmp_path):
        prefs = PreferenceStore(tmp_path / "prefs.yaml")
        prefs.sort_mode = "bookmark"
        assert prefs.sort_mode is SortMode.BY_BOOKMARK

    def test_keeps_other_keys(self, tmp_path):
        path = tmp_path / "prefs.yaml"
        path.write_text("theme: dark\n")
        PreferenceStore(path).sort_mode = SortMode.BY_DATE
        assert yaml.safe_load(path.read_text()) == {"theme": "dark", "sort_mode": "date"}

    def test_unknown_value_falls_back(self, tmp_path):
        path = tmp_path / "prefs.yaml"
        path.write_text("sort_mode: alphabetical\n")
        assert PreferenceStore(path).sort_mode is SortMode.BY_DATE

    def test_garbage_file_falls_back(self, tmp_path):
        path = tmp_path / "prefs.yaml"
        path.write_text("{{{ not yaml")
        assert PreferenceStore(path).sort_mode is SortMode.BY_DATE

    def test_non_mapping_falls_back(self, tmp_path):
        path = tmp_path / "prefs.yaml"
        path.write_text("- just\n- a list\n")
        assert PreferenceStore(path).sort_mode is SortMode.BY_DATE
