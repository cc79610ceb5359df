"""
Project snapshot import/export for LyricSync.

A project file is a JSON object holding the raw inputs, the global offset
and the current cues:

    {
      "version": 1,
      "videoId": "0dRo5Kbgx6c",
      "youtubeUrl": "https://youtu.be/0dRo5Kbgx6c",
      "vttInput": "WEBVTT ...",
      "lyricsInput": "...",
      "globalOffsetMs": -250,
      "cues": [{"startMs": 0, "endMs": 2000, "text": "hello", "twText": "a"}]
    }

Every field is optional on import, but at least one of "cues" or
"vttInput" must be present. Imports are validated field by field; a single
bad field rejects the whole file.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from .aligner import parse_and_align
from .exceptions import ProjectImportError
from .models import PROJECT_FORMAT_VERSION, Cue, ProjectSnapshot

logger = logging.getLogger(__name__)


def cue_to_dict(cue: Cue) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "startMs": cue.start_ms,
        "endMs": cue.end_ms,
        "text": cue.source_text,
    }
    if cue.display_text is not None:
        data["twText"] = cue.display_text
    return data


def snapshot_to_dict(snapshot: ProjectSnapshot) -> Dict[str, Any]:
    return {
        "version": snapshot.version,
        "videoId": snapshot.video_id,
        "youtubeUrl": snapshot.youtube_url,
        "vttInput": snapshot.caption_text,
        "lyricsInput": snapshot.lyrics_text,
        "globalOffsetMs": snapshot.global_offset_ms,
        "cues": [cue_to_dict(cue) for cue in (snapshot.cues or [])],
    }


def dump_project(snapshot: ProjectSnapshot) -> str:
    """Serialize a snapshot to pretty-printed JSON."""
    return json.dumps(snapshot_to_dict(snapshot), indent=2, ensure_ascii=False)


def _is_int(value: Any) -> bool:
    # bool is a subclass of int but never a valid time value
    return isinstance(value, int) and not isinstance(value, bool)


def _optional(data: Dict[str, Any], key: str, kind: str) -> Any:
    value = data.get(key)
    if value is None:
        return None
    if kind == "str" and not isinstance(value, str):
        raise ProjectImportError(f"Field '{key}' must be a string")
    if kind == "int" and not _is_int(value):
        raise ProjectImportError(f"Field '{key}' must be an integer")
    return value


def cue_from_dict(data: Any, position: int) -> Cue:
    """Validate one cue record and convert it to a Cue."""
    if not isinstance(data, dict):
        raise ProjectImportError(f"Cue {position} must be an object")
    for key in ("startMs", "endMs"):
        if not _is_int(data.get(key)):
            raise ProjectImportError(f"Cue {position}: '{key}' must be an integer")
    text = data.get("text")
    if not isinstance(text, str):
        raise ProjectImportError(f"Cue {position}: 'text' must be a string")
    display_text = data.get("twText")
    if display_text is not None and not isinstance(display_text, str):
        raise ProjectImportError(f"Cue {position}: 'twText' must be a string")
    return Cue(
        start_ms=data["startMs"],
        end_ms=data["endMs"],
        source_text=text,
        display_text=display_text,
    )


def snapshot_from_dict(data: Any) -> ProjectSnapshot:
    """
    Convert decoded JSON into a ProjectSnapshot.

    Raises:
        ProjectImportError: If any field has the wrong type, the version is
            newer than this library understands, or neither cues nor
            caption text is present
    """
    if not isinstance(data, dict):
        raise ProjectImportError("Project file must contain a JSON object")

    version = _optional(data, "version", "int")
    if version is None:
        version = PROJECT_FORMAT_VERSION
    if version > PROJECT_FORMAT_VERSION:
        raise ProjectImportError(f"Unsupported project version: {version}")

    raw_cues = data.get("cues")
    cues: Optional[List[Cue]] = None
    if raw_cues is not None:
        if not isinstance(raw_cues, list):
            raise ProjectImportError("Field 'cues' must be a list")
        cues = [cue_from_dict(item, position) for position, item in enumerate(raw_cues)]

    snapshot = ProjectSnapshot(
        version=version,
        video_id=_optional(data, "videoId", "str"),
        youtube_url=_optional(data, "youtubeUrl", "str"),
        caption_text=_optional(data, "vttInput", "str"),
        lyrics_text=_optional(data, "lyricsInput", "str"),
        global_offset_ms=_optional(data, "globalOffsetMs", "int"),
        cues=cues,
    )

    if not snapshot.cues and not (snapshot.caption_text or '').strip():
        raise ProjectImportError("Project has neither cues nor caption text")
    return snapshot


def load_project(text: str) -> ProjectSnapshot:
    """
    Parse project JSON text into a validated snapshot.

    Raises:
        ProjectImportError: On malformed JSON or a wrong shape
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ProjectImportError(f"Project file is not valid JSON: {e}") from e
    except RecursionError as e:
        raise ProjectImportError("Project file is nested too deeply") from e
    return snapshot_from_dict(data)


def resolve_cues(snapshot: ProjectSnapshot) -> List[Cue]:
    """
    Return the cues a snapshot describes.

    Stored cues are trusted as they are, even if they no longer match the
    raw inputs. Only when no cues are stored are they re-derived from the
    caption and lyric text.

    Raises:
        CaptionParseError: If re-deriving and the captions do not parse
    """
    if snapshot.cues:
        return [cue.copy() for cue in snapshot.cues]
    logger.info("Project has no stored cues; re-deriving from caption text")
    return parse_and_align(snapshot.caption_text or '', snapshot.lyrics_text)


def read_project_file(path: str) -> ProjectSnapshot:
    logger.info(f"Loading project: {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise ProjectImportError(f"Project file is not UTF-8 text: {e}") from e
    return load_project(text)


def write_project_file(snapshot: ProjectSnapshot, path: str) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        f.write(dump_project(snapshot))
    logger.info(f"Saved project with {len(snapshot.cues or [])} cues to {path}")
