import json

import pytest

from lyricsync.exceptions import CaptionParseError, ProjectImportError
from lyricsync.models import Cue, ProjectSnapshot
from lyricsync.project import (
    dump_project,
    load_project,
    read_project_file,
    resolve_cues,
    snapshot_from_dict,
    write_project_file,
)

CAPTIONS = (
    "WEBVTT\n\n"
    "00:00:00.000 --> 00:00:02.000\nhello\n\n"
    "00:00:02.000 --> 00:00:04.000\nworld\n"
)


def test_dump_project_uses_interchange_keys():
    snapshot = ProjectSnapshot(
        video_id="abc",
        caption_text=CAPTIONS,
        lyrics_text="a\nb",
        global_offset_ms=-250,
        cues=[Cue(start_ms=0, end_ms=2000, source_text="hello", display_text="a")],
    )
    data = json.loads(dump_project(snapshot))
    assert data["version"] == 1
    assert data["videoId"] == "abc"
    assert data["vttInput"] == CAPTIONS
    assert data["lyricsInput"] == "a\nb"
    assert data["globalOffsetMs"] == -250
    assert data["cues"] == [{"startMs": 0, "endMs": 2000, "text": "hello", "twText": "a"}]


def test_load_project_with_cues_trusts_stored_cues():
    payload = {
        "version": 1,
        "vttInput": CAPTIONS,
        "lyricsInput": "a\nb",
        "globalOffsetMs": 100,
        "cues": [{"startMs": 500, "endMs": 900, "text": "edited"}],
    }
    snapshot = load_project(json.dumps(payload))
    cues = resolve_cues(snapshot)
    assert cues == [Cue(start_ms=500, end_ms=900, source_text="edited")]
    assert snapshot.global_offset_ms == 100


def test_load_project_without_cues_rederives():
    snapshot = load_project(json.dumps({"vttInput": CAPTIONS, "lyricsInput": "a\nb"}))
    assert snapshot.cues is None
    assert resolve_cues(snapshot) == [
        Cue(start_ms=0, end_ms=2000, source_text="hello", display_text="a"),
        Cue(start_ms=2000, end_ms=4000, source_text="world", display_text="b"),
    ]


def test_load_project_empty_cue_list_rederives():
    snapshot = load_project(json.dumps({"vttInput": CAPTIONS, "cues": []}))
    assert [c.source_text for c in resolve_cues(snapshot)] == ["hello", "world"]


def test_resolve_cues_rederive_failure():
    snapshot = load_project(json.dumps({"vttInput": "not captions"}))
    with pytest.raises(CaptionParseError):
        resolve_cues(snapshot)


def test_load_project_malformed_json():
    with pytest.raises(ProjectImportError):
        load_project("{not json")
    with pytest.raises(ProjectImportError):
        load_project("[" * 100000)


@pytest.mark.parametrize("payload", [
    [],
    {"lyricsInput": "only lyrics"},
    {"vttInput": "   "},
    {"vttInput": 12},
    {"vttInput": CAPTIONS, "globalOffsetMs": "100"},
    {"vttInput": CAPTIONS, "globalOffsetMs": True},
    {"vttInput": CAPTIONS, "version": 99},
    {"cues": "nope"},
    {"cues": [{"startMs": "0", "endMs": 10, "text": "x"}]},
    {"cues": [{"startMs": 0, "endMs": 10.5, "text": "x"}]},
    {"cues": [{"startMs": 0, "endMs": 10}]},
    {"cues": [{"startMs": 0, "endMs": 10, "text": "x", "twText": 3}]},
    {"cues": [None]},
])
def test_snapshot_from_dict_rejects_wrong_shapes(payload):
    with pytest.raises(ProjectImportError):
        snapshot_from_dict(payload)


def test_null_fields_are_treated_as_absent():
    snapshot = snapshot_from_dict({
        "videoId": None,
        "vttInput": CAPTIONS,
        "lyricsInput": None,
        "globalOffsetMs": None,
        "cues": [{"startMs": 0, "endMs": 10, "text": "x", "twText": None}],
    })
    assert snapshot.video_id is None
    assert snapshot.cues[0].display_text is None


def test_project_file_round_trip(tmp_path):
    path = tmp_path / "project.json"
    snapshot = ProjectSnapshot(
        video_id="abc",
        caption_text=CAPTIONS,
        lyrics_text="가사\nb",
        global_offset_ms=0,
        cues=[Cue(start_ms=0, end_ms=2000, source_text="hello", display_text="가사")],
    )
    write_project_file(snapshot, str(path))
    assert "가사" in path.read_text(encoding="utf-8")
    loaded = read_project_file(str(path))
    assert loaded == snapshot


def test_read_project_file_rejects_non_utf8(tmp_path):
    path = tmp_path / "project.json"
    path.write_bytes('{"version": 1, "lyricsInput": "caf\xe9"}'.encode("latin-1"))
    with pytest.raises(ProjectImportError):
        read_project_file(str(path))
