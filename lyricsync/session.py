"""
Lyric sync session.

LyricSession owns the working state of one song: raw inputs, the cue list,
the global offset, the last known playback position and the manual tap
timer. Every mutation goes through it, under one lock, so the poller's
ticks and user actions never interleave mid-update.
"""

import logging
import math
import threading
from typing import Callable, List, Optional

from .aligner import parse_and_align
from .exporter import export_cues
from .lyrics import split_lyric_lines
from .models import Cue, ProjectSnapshot, SyncConfig
from .project import resolve_cues
from .selector import adjacent_index, find_active_index
from .tap_timer import TapResult, TapTimer

logger = logging.getLogger(__name__)


class PlaybackClock:
    """Source of the current playback position. Subclasses override current_ms()."""

    def current_ms(self) -> Optional[int]:
        raise NotImplementedError


class CallableClock(PlaybackClock):
    """
    Adapts a player's "current time in seconds" accessor.

    Non-numeric results (player not ready) read as None.
    """

    def __init__(self, get_seconds: Callable[[], object]):
        self._get_seconds = get_seconds

    def current_ms(self) -> Optional[int]:
        seconds = self._get_seconds()
        if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
            return None
        if math.isnan(seconds) or math.isinf(seconds):
            return None
        return math.floor(seconds * 1000)


class LyricSession:
    """Working state for synchronising one set of captions and lyrics."""

    def __init__(self, clock: Optional[PlaybackClock] = None, config: Optional[SyncConfig] = None):
        self.config = config or SyncConfig()
        self.clock = clock
        self.video_id: Optional[str] = None
        self.youtube_url: Optional[str] = None
        self.caption_text = ""
        self.lyrics_text = ""
        self.cues: List[Cue] = []
        self.offset_ms = self.config.global_offset_ms
        self.current_ms = 0
        self.timer = TapTimer()
        self._lock = threading.RLock()

    # Playback clock

    def attach_clock(self, clock: PlaybackClock) -> None:
        self.clock = clock

    def detach_clock(self) -> None:
        self.clock = None

    def current_time_ms(self) -> Optional[int]:
        """Read the clock directly; None when no player is attached or ready."""
        if self.clock is None:
            return None
        value = self.clock.current_ms()
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    def tick(self) -> Optional[int]:
        """Poll the clock once and return the active cue index."""
        with self._lock:
            now = self.current_time_ms()
            if now is not None:
                self.current_ms = now
            return self.active_index()

    # Cue lookup and navigation

    def active_index(self, current_ms: Optional[int] = None) -> Optional[int]:
        with self._lock:
            position = self.current_ms if current_ms is None else current_ms
            return find_active_index(self.cues, position, self.offset_ms)

    def active_cue(self) -> Optional[Cue]:
        with self._lock:
            index = self.active_index()
            return self.cues[index] if index is not None else None

    def previous_index(self, index: Optional[int] = None) -> Optional[int]:
        current = self.active_index() if index is None else index
        return adjacent_index(current, len(self.cues), -1)

    def next_index(self, index: Optional[int] = None) -> Optional[int]:
        current = self.active_index() if index is None else index
        return adjacent_index(current, len(self.cues), 1)

    def seek_target_ms(self, index: int) -> Optional[int]:
        """Playback position (ms) to seek to for the cue at index."""
        if 0 <= index < len(self.cues):
            return self.cues[index].start_ms
        return None

    # Editing

    def load_captions(self, caption_text: str, lyrics_text: Optional[str] = None) -> List[Cue]:
        """
        Parse captions, align lyrics and replace the cue list.

        On failure the previous cues and inputs are kept.

        Raises:
            CaptionParseError: If the captions yield no cues
        """
        lyrics_text = lyrics_text if lyrics_text is not None else self.lyrics_text
        cues = parse_and_align(caption_text, lyrics_text)
        with self._lock:
            self.caption_text = caption_text
            self.lyrics_text = lyrics_text
            self.cues = cues
        logger.info(f"Session loaded {len(cues)} cues")
        return cues

    def set_offset(self, offset_ms: int) -> None:
        with self._lock:
            self.offset_ms = int(offset_ms)

    def adjust_offset(self, delta_ms: int) -> int:
        with self._lock:
            self.offset_ms += int(delta_ms)
            return self.offset_ms

    def nudge_active(self, delta_ms: Optional[int] = None) -> bool:
        """
        Shift the active cue's start and end by delta_ms.

        Defaults to the configured nudge step. Returns False when no cue is
        active.
        """
        delta = self.config.nudge_step_ms if delta_ms is None else int(delta_ms)
        with self._lock:
            index = self.active_index()
            if index is None:
                return False
            self.cues[index] = self.cues[index].shifted(delta)
            logger.debug(f"Nudged cue {index} by {delta}ms")
            return True

    def edit_text(self, index: int, text: str) -> None:
        """Overwrite the display text of the cue at index."""
        with self._lock:
            if not 0 <= index < len(self.cues):
                raise IndexError(f"No cue at index {index}")
            self.cues[index].display_text = text

    # Manual tap-timing

    def start_manual_timing(self, lyrics_text: Optional[str] = None) -> int:
        """
        Start a tap-timing pass over the session lyrics.

        Returns:
            Number of lines to time

        Raises:
            NoLyricsError: If there are no lyric lines
        """
        text = self.lyrics_text if lyrics_text is None else lyrics_text
        lines = split_lyric_lines(text)
        with self._lock:
            self.timer.start(lines)
            self.lyrics_text = text
        return len(lines)

    def tap(self) -> Optional[TapResult]:
        """
        Tap at the player's current time, read fresh from the clock.

        Raises:
            PlayerUnavailableError: If no playback time is available
        """
        with self._lock:
            return self.timer.tap(self.current_time_ms())

    def apply_manual_timing(self) -> List[Cue]:
        """
        Replace the cue list with the tapped cues.

        Raises:
            IncompleteTimingError: If some lines are not fully timed
        """
        with self._lock:
            cues = self.timer.apply()
            self.cues = cues
        logger.info(f"Applied {len(cues)} manually timed cues")
        return cues

    # Export / import

    def export(self, fmt: str) -> str:
        with self._lock:
            return export_cues(self.cues, fmt)

    def to_snapshot(self) -> ProjectSnapshot:
        with self._lock:
            return ProjectSnapshot(
                video_id=self.video_id,
                youtube_url=self.youtube_url,
                caption_text=self.caption_text,
                lyrics_text=self.lyrics_text,
                global_offset_ms=self.offset_ms,
                cues=[cue.copy() for cue in self.cues],
            )

    def import_snapshot(self, snapshot: ProjectSnapshot) -> List[Cue]:
        """
        Replace session state with a snapshot's contents.

        Cues are resolved before anything is assigned, so a snapshot whose
        captions fail to parse leaves the session unchanged.

        Raises:
            CaptionParseError: If cues must be re-derived and parsing fails
        """
        cues = resolve_cues(snapshot)
        with self._lock:
            if snapshot.video_id is not None:
                self.video_id = snapshot.video_id
                self.youtube_url = snapshot.youtube_url or f"https://youtu.be/{snapshot.video_id}"
            if snapshot.caption_text is not None:
                self.caption_text = snapshot.caption_text
            if snapshot.lyrics_text is not None:
                self.lyrics_text = snapshot.lyrics_text
            if snapshot.global_offset_ms is not None:
                self.offset_ms = snapshot.global_offset_ms
            self.cues = cues
        logger.info(f"Imported project with {len(cues)} cues")
        return cues

    def reset(self) -> None:
        with self._lock:
            self.video_id = None
            self.youtube_url = None
            self.caption_text = ""
            self.lyrics_text = ""
            self.cues = []
            self.offset_ms = self.config.global_offset_ms
            self.current_ms = 0
            self.timer.reset()
