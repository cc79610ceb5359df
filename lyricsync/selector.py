"""
Live cue selection for LyricSync.

Looks up which cue is showing at a playback position. The global offset is
applied to the position, never written into the cues.
"""

import logging
from typing import List, Optional

from .models import Cue

logger = logging.getLogger(__name__)


def find_active_index(cues: List[Cue], current_ms: int, offset_ms: int = 0) -> Optional[int]:
    """
    Return the index of the first cue whose window contains current + offset.

    Bounds are inclusive, so where two cues touch (one ends at 1000, the
    next starts at 1000) the earlier cue wins. Cues with end < start never
    match.

    Example:
        >>> cues = [Cue(0, 1000, "a"), Cue(1000, 2000, "b")]
        >>> find_active_index(cues, 1000)
        0
        >>> find_active_index(cues, 2500) is None
        True
    """
    effective_ms = current_ms + offset_ms
    for index, cue in enumerate(cues):
        if cue.contains(effective_ms):
            return index
    return None


def adjacent_index(index: Optional[int], length: int, step: int) -> Optional[int]:
    """
    Move step positions from index, clamped to [0, length - 1].

    With no current index, stepping forward starts at the first cue and
    stepping back at the last.
    """
    if length <= 0:
        return None
    if index is None:
        return 0 if step >= 0 else length - 1
    return max(0, min(length - 1, index + step))
