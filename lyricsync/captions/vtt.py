"""
WebVTT cue scanning for LyricSync.

A forgiving line scanner: it only understands timing lines and the text
lines that follow them. Cue identifiers, NOTE blocks and STYLE blocks are
skipped as ordinary non-timing lines.
"""

import logging
from typing import List, Optional, Tuple

from ..models import Cue
from ..utils import parse_timecode, split_lines

logger = logging.getLogger(__name__)

WEBVTT_HEADER = 'WEBVTT'
ARROW = '-->'


def parse_timing_line(line: str, decimal_comma: bool = False) -> Tuple[Optional[int], Optional[int]]:
    """
    Parse a "start --> end [settings]" line into millisecond bounds.

    Anything after the first space on the right-hand side (cue settings such
    as "align:start position:10%") is discarded.

    Args:
        line: Timing line containing the arrow separator
        decimal_comma: Convert a comma decimal separator to a period first

    Returns:
        Tuple of (start_ms, end_ms); either may be None if unparseable
    """
    start_raw, end_raw = [part.strip() for part in line.split(ARROW, 1)]
    if decimal_comma:
        start_raw = start_raw.replace(',', '.', 1)
        end_raw = end_raw.replace(',', '.', 1)
    end_raw = end_raw.split(' ')[0]
    return parse_timecode(start_raw), parse_timecode(end_raw)


def collect_text_lines(lines: List[str], i: int) -> Tuple[List[str], int]:
    """Collect lines from index i up to the next blank line; return them and the new index."""
    text_lines = []
    while i < len(lines) and lines[i].strip():
        text_lines.append(lines[i])
        i += 1
    return text_lines, i


def parse_vtt_cues(vtt_content: str) -> List[Cue]:
    """
    Parse WebVTT content and extract timed cues.

    Blocks whose timing line cannot be parsed are dropped silently and
    scanning continues with the next block.

    Args:
        vtt_content: VTT file content as string

    Returns:
        List of Cue objects in file order

    Example:
        >>> content = "WEBVTT\\n\\n00:00:01.000 --> 00:00:03.000\\nHello world"
        >>> cues = parse_vtt_cues(content)
        >>> cues[0].start_ms, cues[0].end_ms, cues[0].source_text
        (1000, 3000, 'Hello world')
    """
    cues = []
    lines = split_lines(vtt_content)
    i = 0

    if lines and lines[0].startswith(WEBVTT_HEADER):
        i += 1

    dropped = 0
    while i < len(lines):
        line = lines[i].strip()

        if not line:
            i += 1
            continue

        if ARROW in line:
            start_ms, end_ms = parse_timing_line(line)
            text_lines, i = collect_text_lines(lines, i + 1)

            if start_ms is not None and end_ms is not None:
                cues.append(Cue(start_ms=start_ms, end_ms=end_ms, source_text='\n'.join(text_lines)))
            else:
                dropped += 1
            continue

        # Cue identifiers and other metadata
        i += 1

    if dropped:
        logger.debug(f"Dropped {dropped} VTT blocks with unparseable timing")
    return cues
