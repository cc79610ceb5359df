"""
Lyric-to-cue alignment for LyricSync.

Attaches free-form lyric lines to parsed caption cues by position only.
This is a heuristic, not a content match: nothing looks at what the
captions say.

When the counts differ the shorter sequence is spread over the longer one
with integer division, clamped to the last index:

- more cues than lines: cue i shows line min(L-1, i*L // C), so runs of
  consecutive cues repeat the same line;
- more lines than cues: line j goes to cue min(C-1, j*C // L), and every
  line landing on the same cue is joined with newlines.

Skewed ratios (say 40 cues and 3 lines) give groupings that look odd on
screen. That is inherent to positional mapping; use manual tap-timing when
the captions and the lyrics do not correspond line for line.
"""

import logging
from typing import List, Optional

from .captions import parse_captions
from .lyrics import split_lyric_lines
from .models import Cue

logger = logging.getLogger(__name__)


def align_lyrics(cues: List[Cue], lines: List[str]) -> List[Cue]:
    """
    Map lyric lines onto cues, returning new Cue objects.

    The input cues are not modified.

    Args:
        cues: Cues in caption order
        lines: Lyric lines in order

    Returns:
        Copies of the cues with display_text set (unchanged if lines is empty)

    Example:
        >>> cues = [Cue(0, 1000, "x"), Cue(1000, 2000, "y")]
        >>> [c.display_text for c in align_lyrics(cues, ["a", "b", "c"])]
        ['a\\nb', 'c']
    """
    cue_count = len(cues)
    line_count = len(lines)

    if cue_count == 0:
        return []
    if line_count == 0:
        return [cue.copy() for cue in cues]

    aligned = [cue.copy() for cue in cues]

    if cue_count == line_count:
        for cue, line in zip(aligned, lines):
            cue.display_text = line
    elif cue_count > line_count:
        for i, cue in enumerate(aligned):
            line_index = min(line_count - 1, (i * line_count) // cue_count)
            cue.display_text = lines[line_index]
    else:
        groups: List[List[str]] = [[] for _ in range(cue_count)]
        for j, line in enumerate(lines):
            cue_index = min(cue_count - 1, (j * cue_count) // line_count)
            groups[cue_index].append(line)
        for cue, group in zip(aligned, groups):
            cue.display_text = '\n'.join(group)

    logger.debug(f"Aligned {line_count} lyric lines onto {cue_count} cues")
    return aligned


def parse_and_align(caption_text: str, lyrics_text: Optional[str] = None) -> List[Cue]:
    """
    Parse caption text and attach lyric lines to the resulting cues.

    Raises:
        CaptionParseError: If the captions yield no cues
    """
    cues = parse_captions(caption_text).cues
    return align_lyrics(cues, split_lyric_lines(lyrics_text))
