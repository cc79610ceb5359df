"""
SubRip (SRT) cue scanning for LyricSync.

Sequence numbers are optional: a digits-only line is consumed as one, and
any line that is not a timing line is skipped until one is found.
"""

import logging
from typing import List

from ..models import Cue
from ..utils import split_lines
from .vtt import ARROW, collect_text_lines, parse_timing_line

logger = logging.getLogger(__name__)


def parse_srt_cues(srt_content: str) -> List[Cue]:
    """
    Parse SRT content and extract timed cues.

    Args:
        srt_content: SRT file content as string

    Returns:
        List of Cue objects in file order

    Example:
        >>> cues = parse_srt_cues("1\\n00:00:01,000 --> 00:00:02,000\\nhi\\n")
        >>> cues[0].start_ms, cues[0].end_ms, cues[0].source_text
        (1000, 2000, 'hi')
    """
    cues = []
    lines = split_lines(srt_content)
    i = 0

    dropped = 0
    while i < len(lines):
        line = lines[i].strip()

        if not line:
            i += 1
            continue

        if line.isascii() and line.isdigit():
            i += 1

        timing_line = lines[i].strip() if i < len(lines) else ''
        if ARROW not in timing_line:
            i += 1
            continue

        start_ms, end_ms = parse_timing_line(timing_line, decimal_comma=True)
        text_lines, i = collect_text_lines(lines, i + 1)

        if start_ms is not None and end_ms is not None:
            cues.append(Cue(start_ms=start_ms, end_ms=end_ms, source_text='\n'.join(text_lines)))
        else:
            dropped += 1

    if dropped:
        logger.debug(f"Dropped {dropped} SRT blocks with unparseable timing")
    return cues
