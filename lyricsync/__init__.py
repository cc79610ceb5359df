"""
LyricSync - caption/lyric alignment and live cue following

Parses WebVTT or SRT captions, attaches free-form lyric lines to the cues,
follows a playback clock to find the current line, and exports the result
as VTT, LRC or SRT.

Features:
- Forgiving VTT and SRT scanners with automatic format fallback
- Positional lyric-to-cue alignment for any line/cue ratio
- Live cue selection with a global offset and per-cue nudges
- Manual tap-timing when no usable captions exist
- JSON project snapshots for saving and restoring work

Example usage:
    >>> from lyricsync import LyricSession
    >>>
    >>> session = LyricSession()
    >>> session.load_captions(vtt_text, lyrics_text)
    >>> session.active_index(current_ms=1500)
    0
    >>> print(session.export("lrc"))
"""

import logging

__version__ = "0.1.0"
__author__ = "LyricSync Contributors"
__license__ = "MIT"

# Add NullHandler to prevent "No handler found" warnings
# Users should configure logging in their application if they want to see logs
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Timecode helpers
from .utils import parse_timecode, format_timecode, format_lrc_timestamp

# Caption parsing
from .captions import (
    parse_captions,
    parse_vtt_cues,
    parse_srt_cues,
    CaptionParser,
    CaptionParseResult,
)

# Lyrics and alignment
from .lyrics import split_lyric_lines
from .aligner import align_lyrics, parse_and_align

# Live selection and manual timing
from .selector import find_active_index, adjacent_index
from .tap_timer import TapTimer, TapResult, TimerState

# Export and projects
from .exporter import cues_to_vtt, cues_to_lrc, cues_to_srt, export_cues
from .project import (
    dump_project,
    load_project,
    resolve_cues,
    snapshot_from_dict,
    snapshot_to_dict,
    read_project_file,
    write_project_file,
)

# Session and playback
from .session import LyricSession, PlaybackClock, CallableClock
from .poller import PlaybackPoller

# YouTube helpers
from .youtube import extract_youtube_id, is_youtube_url, build_share_link

# Data models
from .models import Cue, ManualCue, ProjectSnapshot, SyncConfig, UNSET_MS

# Errors
from .exceptions import (
    LyricSyncError,
    CaptionParseError,
    EmptyCaptionError,
    ManualTimingError,
    NoLyricsError,
    PlayerUnavailableError,
    IncompleteTimingError,
    ProjectImportError,
    ConfigurationError,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",

    # Timecodes
    "parse_timecode",
    "format_timecode",
    "format_lrc_timestamp",

    # Parsing and alignment
    "parse_captions",
    "parse_vtt_cues",
    "parse_srt_cues",
    "CaptionParser",
    "CaptionParseResult",
    "split_lyric_lines",
    "align_lyrics",
    "parse_and_align",

    # Selection and timing
    "find_active_index",
    "adjacent_index",
    "TapTimer",
    "TapResult",
    "TimerState",

    # Export and projects
    "cues_to_vtt",
    "cues_to_lrc",
    "cues_to_srt",
    "export_cues",
    "dump_project",
    "load_project",
    "resolve_cues",
    "snapshot_from_dict",
    "snapshot_to_dict",
    "read_project_file",
    "write_project_file",

    # Session
    "LyricSession",
    "PlaybackClock",
    "CallableClock",
    "PlaybackPoller",

    # YouTube
    "extract_youtube_id",
    "is_youtube_url",
    "build_share_link",

    # Models
    "Cue",
    "ManualCue",
    "ProjectSnapshot",
    "SyncConfig",
    "UNSET_MS",

    # Errors
    "LyricSyncError",
    "CaptionParseError",
    "EmptyCaptionError",
    "ManualTimingError",
    "NoLyricsError",
    "PlayerUnavailableError",
    "IncompleteTimingError",
    "ProjectImportError",
    "ConfigurationError",
]
