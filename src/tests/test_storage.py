from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from newsfeed_tui.errors import StorageError
from newsfeed_tui.storage import JsonFileStore, MemoryStore, load_json, save_json


@pytest.fixture
def file_store(tmp_path):
    return JsonFileStore(str(tmp_path / "newsfeed" / "storage.json"))


def test_missing_file_reads_as_absent(file_store):
    assert file_store.get("newsfeed_theme") is None


def test_set_then_get_survives_a_new_instance(file_store):
    assert file_store.set("newsfeed_theme", "dark") is None
    assert JsonFileStore(file_store.path).get("newsfeed_theme") == "dark"


def test_set_keeps_other_keys(file_store):
    file_store.set("a", "1")
    file_store.set("b", "2")
    assert file_store.get("a") == "1"
    assert file_store.get("b") == "2"


def test_corrupt_file_reads_as_absent(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{not json")
    assert JsonFileStore(str(path)).get("newsfeed_theme") is None


def test_non_object_file_reads_as_absent(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text(json.dumps(["dark"]))
    assert JsonFileStore(str(path)).get("0") is None


def test_non_string_value_reads_as_absent(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text(json.dumps({"newsfeed_theme": 1}))
    assert JsonFileStore(str(path)).get("newsfeed_theme") is None


def test_corrupt_file_is_replaced_on_write(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("garbage")
    store = JsonFileStore(str(path))
    assert store.set("newsfeed_theme", "light") is None
    assert store.get("newsfeed_theme") == "light"


def test_write_failure_is_returned_not_raised(file_store):
    with patch("newsfeed_tui.storage.open", side_effect=OSError("disk full"), create=True):
        error = file_store.set("newsfeed_theme", "dark")
    assert isinstance(error, StorageError)
    assert "disk full" in str(error)


def test_unwritable_location_is_returned_not_raised(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    store = JsonFileStore(str(blocker / "storage.json"))
    assert isinstance(store.set("k", "v"), StorageError)
    assert store.get("k") is None


def test_load_json_falls_back_on_invalid_json():
    store = MemoryStore({"newsfeed_favs": "[oops"})
    assert load_json(store, "newsfeed_favs", []) == []


def test_load_json_falls_back_when_absent():
    assert load_json(MemoryStore(), "newsfeed_favs", ["x"]) == ["x"]


def test_save_json_encodes_value():
    store = MemoryStore()
    assert save_json(store, "newsfeed_favs", ["http://x/1"]) is None
    assert store.get("newsfeed_favs") == '["http://x/1"]'


def test_save_json_reports_unencodable_value():
    store = MemoryStore()
    assert isinstance(save_json(store, "k", {object()}), StorageError)
    assert store.get("k") is None
