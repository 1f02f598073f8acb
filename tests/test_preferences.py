"""
Unit tests for the local preference store.
"""

import json

from core.preferences import FILTERS_COLLAPSED_KEY, PreferenceStore


class TestPreferenceStore:
    """Test JSON persistence and tolerant reads."""

    def test_missing_file_is_empty(self, tmp_path):
        store = PreferenceStore(tmp_path / "prefs.json")
        assert store.get(FILTERS_COLLAPSED_KEY) is None
        assert store.get_bool(FILTERS_COLLAPSED_KEY, default=True) is True

    def test_set_persists_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "prefs.json"
        PreferenceStore(path).set(FILTERS_COLLAPSED_KEY, False)

        assert json.loads(path.read_text()) == {FILTERS_COLLAPSED_KEY: False}
        assert PreferenceStore(path).get_bool(FILTERS_COLLAPSED_KEY, default=True) is False

    def test_string_booleans(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text(json.dumps({FILTERS_COLLAPSED_KEY: "true"}))

        assert PreferenceStore(path).get_bool(FILTERS_COLLAPSED_KEY) is True

    def test_corrupt_file_treated_as_empty(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("{not json")

        store = PreferenceStore(path)

        assert store.get(FILTERS_COLLAPSED_KEY) is None

    def test_non_object_file_treated_as_empty(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("[1, 2]")
        assert PreferenceStore(path).get("anything", "fallback") == "fallback"

    def test_in_memory_store(self):
        store = PreferenceStore()
        store.set("key", 1)
        assert store.get("key") == 1
        assert store.path is None
