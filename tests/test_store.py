from __future__ import annotations

import json
import os
import stat

import pytest

from cagle.errors import SettingsError
from cagle.settings import (
    extract_list,
    load_global_document,
    load_local_list,
    merge_list,
    persist,
)
from conftest import read_json, write_json


def test_load_local_list_reads_allow_entries_in_order(tmp_path) -> None:
    path = write_json(
        tmp_path / "settings.local.json",
        {"permissions": {"allow": ["Bash(ls:*)", "Read", "WebFetch"]}},
    )
    assert load_local_list(path) == ["Bash(ls:*)", "Read", "WebFetch"]


@pytest.mark.parametrize(
    "document",
    [
        {},
        {"permissions": {}},
        {"permissions": {"deny": ["Bash"]}},
        {"permissions": []},
        {"permissions": {"allow": "Bash"}},
        [],
        "text",
    ],
)
def test_extract_list_is_empty_for_missing_or_misshaped_path(document) -> None:
    assert extract_list(document) == []


def test_extract_list_skips_non_string_entries() -> None:
    assert extract_list({"permissions": {"allow": ["A", 1, None, {"x": 1}, "B"]}}) == ["A", "B"]


def test_extract_list_keeps_duplicates() -> None:
    assert extract_list({"permissions": {"allow": ["A", "A"]}}) == ["A", "A"]


def test_load_local_list_missing_file_is_fatal(tmp_path) -> None:
    with pytest.raises(SettingsError, match="Failed to read"):
        load_local_list(tmp_path / "nope.json")


def test_load_local_list_bad_json_is_fatal(tmp_path) -> None:
    path = tmp_path / "settings.local.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SettingsError, match="Failed to parse") as exc:
        load_local_list(path)
    assert exc.value.path == path


def test_load_global_document_missing_file_is_empty_object(tmp_path) -> None:
    assert load_global_document(tmp_path / ".claude" / "settings.json") == {}


def test_load_global_document_returns_whole_document(tmp_path) -> None:
    data = {"permissions": {"allow": ["A"]}, "model": "opus", "env": {"X": "1"}}
    path = write_json(tmp_path / "settings.json", data)
    assert load_global_document(path) == data


def test_load_global_document_bad_json_is_fatal(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text('{"permissions": ', encoding="utf-8")
    with pytest.raises(SettingsError):
        load_global_document(path)


def test_load_global_document_rejects_non_object(tmp_path) -> None:
    path = write_json(tmp_path / "settings.json", ["A"])
    with pytest.raises(SettingsError, match="JSON object"):
        load_global_document(path)


def test_merge_list_creates_missing_path_without_touching_input() -> None:
    document = {"other": 1}
    merged = merge_list(document, ["A"])
    assert merged == {"other": 1, "permissions": {"allow": ["A"]}}
    assert document == {"other": 1}


def test_merge_list_preserves_siblings_and_key_order() -> None:
    document = {
        "model": "opus",
        "permissions": {"deny": ["Bash(rm:*)"], "allow": ["A"], "ask": []},
        "hooks": {"PreToolUse": []},
    }
    merged = merge_list(document, ["A", "B"])
    assert list(merged) == ["model", "permissions", "hooks"]
    assert list(merged["permissions"]) == ["deny", "allow", "ask"]
    assert merged["permissions"]["allow"] == ["A", "B"]
    assert merged["permissions"]["deny"] == ["Bash(rm:*)"]
    assert merged["hooks"] == {"PreToolUse": []}


def test_merge_list_rejects_non_object_permissions() -> None:
    with pytest.raises(SettingsError):
        merge_list({"permissions": ["A"]}, ["B"])


def test_persist_creates_parents_and_pretty_prints(tmp_path) -> None:
    path = tmp_path / "home" / ".claude" / "settings.json"
    persist(path, {"permissions": {"allow": ["Bash(ls:*)"]}})

    text = path.read_text(encoding="utf-8")
    assert text.endswith("}\n")
    assert text == json.dumps({"permissions": {"allow": ["Bash(ls:*)"]}}, indent=2) + "\n"


def test_persist_keeps_non_ascii_text(tmp_path) -> None:
    path = tmp_path / "settings.json"
    persist(path, {"permissions": {"allow": ["Read(./données/**)"]}})
    assert "données" in path.read_text(encoding="utf-8")


def test_persist_round_trip_keeps_list_and_siblings(tmp_path) -> None:
    path = write_json(
        tmp_path / "settings.json",
        {"permissions": {"allow": ["A"], "deny": ["X"]}, "other": 1, "nested": {"k": [1, 2]}},
    )
    document = load_global_document(path)
    persist(path, merge_list(document, ["A", "B"]))

    reloaded = load_global_document(path)
    assert extract_list(reloaded) == ["A", "B"]
    assert reloaded["other"] == 1
    assert reloaded["nested"] == {"k": [1, 2]}
    assert reloaded["permissions"]["deny"] == ["X"]


def test_persist_overwrites_existing_file(tmp_path) -> None:
    path = write_json(tmp_path / "settings.json", {"permissions": {"allow": ["A"]}, "junk": "x" * 500})
    persist(path, {"permissions": {"allow": ["B"]}})
    assert read_json(path) == {"permissions": {"allow": ["B"]}}


def test_persist_unwritable_directory_is_fatal(tmp_path) -> None:
    blocker = tmp_path / ".claude"
    blocker.write_text("a file where the directory should be", encoding="utf-8")
    with pytest.raises(SettingsError, match="Failed to create directory"):
        persist(blocker / "settings.json", {})


def test_load_local_list_invalid_utf8_is_fatal(tmp_path) -> None:
    path = tmp_path / "settings.local.json"
    path.write_bytes(b'{"permissions":{"allow":["\xff"]}}')
    with pytest.raises(SettingsError, match="Failed to read settings file") as exc:
        load_local_list(path)
    assert exc.value.path == path


def test_persist_unencodable_document_keeps_existing_file(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text('{"permissions": {"allow": ["A"]}, "note": "\\ud800"}', encoding="utf-8")
    before = path.read_bytes()
    document = load_global_document(path)

    with pytest.raises(SettingsError, match="Failed to encode"):
        persist(path, merge_list(document, ["A", "B"]))

    assert path.read_bytes() == before
    assert [p.name for p in tmp_path.iterdir()] == ["settings.json"]


def test_persist_failed_replace_keeps_existing_file(tmp_path, monkeypatch) -> None:
    path = write_json(tmp_path / "settings.json", {"permissions": {"allow": ["A"]}})
    before = path.read_bytes()

    def refuse(src, dst):
        raise OSError("read-only file system")

    monkeypatch.setattr(os, "replace", refuse)
    with pytest.raises(SettingsError, match="Failed to write global settings"):
        persist(path, {"permissions": {"allow": ["A", "B"]}})

    assert path.read_bytes() == before
    assert [p.name for p in tmp_path.iterdir()] == ["settings.json"]


def test_persist_keeps_file_mode_and_leaves_no_temp_files(tmp_path) -> None:
    path = write_json(tmp_path / "settings.json", {})
    path.chmod(0o640)

    persist(path, {"permissions": {"allow": ["A"]}})

    assert stat.S_IMODE(path.stat().st_mode) == 0o640
    assert [p.name for p in tmp_path.iterdir()] == ["settings.json"]
