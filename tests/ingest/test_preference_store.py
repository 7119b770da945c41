import json
from pathlib import Path

from draftswipe.ingest.preference_store import PREFERENCES_STORAGE_KEY, load_preferences, parse_preferences


class TestParsePreferences:
    def test_map_under_storage_key(self) -> None:
        document = {PREFERENCES_STORAGE_KEY: {"a": 2, "b": -1, "c": 0, "d": 1}}
        assert parse_preferences(document) == {"a": 2, "b": -1, "c": 0, "d": 1}

    def test_json_encoded_value(self) -> None:
        document = {PREFERENCES_STORAGE_KEY: json.dumps({"a": 1})}
        assert parse_preferences(document) == {"a": 1}

    def test_other_storage_key_is_empty(self) -> None:
        assert parse_preferences({"draftswipe_prefs_v2": {"a": 1}}) == {}

    def test_custom_storage_key(self) -> None:
        assert parse_preferences({"mine": {"a": 1}}, storage_key="mine") == {"a": 1}

    def test_incompatible_shapes_are_empty(self) -> None:
        assert parse_preferences([1, 2]) == {}
        assert parse_preferences({PREFERENCES_STORAGE_KEY: [["a", 1]]}) == {}
        assert parse_preferences({PREFERENCES_STORAGE_KEY: "{not json"}) == {}

    def test_drops_unknown_ratings(self) -> None:
        document = {PREFERENCES_STORAGE_KEY: {"a": 3, "b": "2", "c": True, "d": 1.0, "e": "x", "f": None}}
        assert parse_preferences(document) == {"b": 2, "d": 1}


class TestLoadPreferences:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "storage.json"
        path.write_text(json.dumps({PREFERENCES_STORAGE_KEY: {"a": 2}}))
        assert load_preferences(path) == {"a": 2}

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert load_preferences(tmp_path / "missing.json") == {}

    def test_invalid_json_is_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "storage.json"
        path.write_text("not json")
        assert load_preferences(path) == {}
