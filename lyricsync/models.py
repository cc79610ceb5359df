"""
Data models for LyricSync.

Defines the core data structures used throughout the package.
"""

import logging
from dataclasses import dataclass, fields, replace
from typing import List, Dict, Any, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Sentinel for a manual-timing boundary that has not been tapped yet
UNSET_MS = -1

PROJECT_FORMAT_VERSION = 1


@dataclass
class Cue:
    """A time window (inclusive on both ends, milliseconds) with its text."""
    start_ms: int
    end_ms: int
    source_text: str
    display_text: Optional[str] = None  # lyric text attached by alignment

    @property
    def text(self) -> str:
        """Text to show or export: display text when set, source text otherwise."""
        return self.display_text if self.display_text is not None else self.source_text

    def contains(self, ms: int) -> bool:
        # A cue with end_ms < start_ms never matches
        return self.start_ms <= ms <= self.end_ms

    def shifted(self, delta_ms: int) -> "Cue":
        return replace(self, start_ms=self.start_ms + delta_ms, end_ms=self.end_ms + delta_ms)

    def copy(self) -> "Cue":
        return replace(self)


@dataclass
class ManualCue:
    """A lyric line whose boundaries are captured by taps during playback."""
    source_text: str
    display_text: Optional[str] = None
    start_ms: int = UNSET_MS
    end_ms: int = UNSET_MS

    @property
    def is_complete(self) -> bool:
        return self.start_ms >= 0 and self.end_ms >= 0 and self.end_ms > self.start_ms

    def to_cue(self) -> Cue:
        return Cue(
            start_ms=self.start_ms,
            end_ms=self.end_ms,
            source_text=self.source_text,
            display_text=self.display_text,
        )


@dataclass
class ProjectSnapshot:
    """Export/import unit exchanged with persistence collaborators."""
    version: int = PROJECT_FORMAT_VERSION
    video_id: Optional[str] = None
    youtube_url: Optional[str] = None
    caption_text: Optional[str] = None
    lyrics_text: Optional[str] = None
    global_offset_ms: Optional[int] = None
    cues: Optional[List[Cue]] = None


@dataclass
class SyncConfig:
    """Runtime configuration for sessions, the poller and the CLI."""
    poll_interval_ms: int = 150
    global_offset_ms: int = 0
    nudge_step_ms: int = 100
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_file: str = "lyricsync.log"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SyncConfig":
        """
        Build a config from a mapping (typically loaded from YAML).

        Unknown keys are ignored with a warning. Values of the wrong type
        raise ConfigurationError.
        """
        known = {f.name: f for f in fields(cls)}
        defaults = cls()
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown configuration key: {key}")
                continue
            expected = type(getattr(defaults, key))
            if expected is int and (isinstance(value, bool) or not isinstance(value, int)):
                raise ConfigurationError(f"Configuration key '{key}' must be an integer, got {value!r}")
            if expected is str and not isinstance(value, str):
                raise ConfigurationError(f"Configuration key '{key}' must be a string, got {value!r}")
            kwargs[key] = value

        config = cls(**kwargs)
        if config.poll_interval_ms <= 0:
            raise ConfigurationError("poll_interval_ms must be positive")
        return config
