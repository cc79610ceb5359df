"""
Manual tap-timing for LyricSync.

When captions are missing or do not line up with the lyrics, the user can
time each line by tapping along with playback. One tap opens the first
line; after that each tap closes the current line and opens the next one at
the same instant.

State machine:

    IDLE --start()--> ARMED(0) --tap()...--> ARMED(n-1) --tap()--> DONE

start() from any state throws away earlier progress. apply() may be called
in any state but only succeeds once every line has both boundaries.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .exceptions import (
    IncompleteTimingError,
    ManualTimingError,
    NoLyricsError,
    PlayerUnavailableError,
)
from .models import Cue, ManualCue

logger = logging.getLogger(__name__)


class TimerState(Enum):
    IDLE = "idle"
    ARMED = "armed"
    DONE = "done"


@dataclass
class TapResult:
    """What a single tap changed."""
    index: int        # line the tap was applied to
    now_ms: int
    advanced: bool    # whether the timer moved on to the next line
    done: bool


class TapTimer:
    """Captures start/end boundaries for lyric lines from discrete taps."""

    def __init__(self):
        self.state = TimerState.IDLE
        self.cues: List[ManualCue] = []
        self._index = 0

    @property
    def index(self) -> int:
        """Line currently awaiting a boundary tap."""
        return self._index

    @property
    def is_active(self) -> bool:
        return self.state is TimerState.ARMED

    def start(self, lines: List[str]) -> None:
        """
        Begin a new timing pass over lines, discarding any previous pass.

        Raises:
            NoLyricsError: If lines is empty
        """
        if not lines:
            raise NoLyricsError("Enter lyric lines before starting manual timing.")
        if self.state is TimerState.ARMED:
            logger.info("Restarting manual timing; previous taps discarded")

        self.cues = [ManualCue(source_text=line, display_text=line) for line in lines]
        self._index = 0
        self.state = TimerState.ARMED
        logger.info(f"Manual timing started for {len(lines)} lines")

    def tap(self, now_ms: Optional[int]) -> Optional[TapResult]:
        """
        Record a tap at now_ms.

        Returns None if the timer is not armed.

        Raises:
            PlayerUnavailableError: If now_ms is None (no playback time)
        """
        if self.state is not TimerState.ARMED or not self.cues:
            return None
        if now_ms is None:
            raise PlayerUnavailableError("Start playback before tapping.")

        index = self._index
        current = self.cues[index]
        last_index = len(self.cues) - 1
        advanced = False

        if current.start_ms < 0:
            # Opens the line; the very first tap of a pass always lands here
            current.start_ms = now_ms
        else:
            if current.end_ms < 0:
                current.end_ms = now_ms
            if index < last_index:
                following = self.cues[index + 1]
                if following.start_ms < 0:
                    following.start_ms = now_ms
            self._index = min(last_index, index + 1)
            advanced = self._index != index

        done = index >= last_index
        if done:
            self.state = TimerState.DONE
            logger.info("Manual timing complete; apply to use the new cues")

        return TapResult(index=index, now_ms=now_ms, advanced=advanced, done=done)

    def incomplete_indices(self) -> List[int]:
        return [i for i, cue in enumerate(self.cues) if not cue.is_complete]

    def apply(self) -> List[Cue]:
        """
        Promote the manual cues to regular cues.

        State is left untouched whether or not this succeeds.

        Raises:
            ManualTimingError: If no timing pass exists
            IncompleteTimingError: If any line lacks a valid start/end pair
        """
        if not self.cues:
            raise ManualTimingError("No manual timing results yet.")
        missing = self.incomplete_indices()
        if missing:
            raise IncompleteTimingError(
                "Some lines still have no end time. Keep tapping during playback.",
                incomplete_indices=missing,
            )
        return [cue.to_cue() for cue in self.cues]

    def reset(self) -> None:
        self.state = TimerState.IDLE
        self.cues = []
        self._index = 0
