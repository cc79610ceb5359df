"""
Subtitle export for LyricSync.

Renders cue lists back to text. Every format uses a cue's display text when
alignment or editing has set one, and its source text otherwise.
"""

import logging
import re
from typing import List

from .models import Cue
from .utils import format_lrc_timestamp, format_timecode

logger = logging.getLogger(__name__)

_NEWLINE_RUN_RE = re.compile(r'\n+')

EXPORT_FORMATS = ('vtt', 'lrc', 'srt')


def cues_to_vtt(cues: List[Cue]) -> str:
    """
    Format cues as WebVTT.

    Example:
        >>> cues_to_vtt([Cue(1000, 2000, "Hello")])
        'WEBVTT\\n\\n00:00:01.000 --> 00:00:02.000\\nHello\\n'
    """
    blocks = [
        f"{format_timecode(cue.start_ms)} --> {format_timecode(cue.end_ms)}\n{cue.text}"
        for cue in cues
    ]
    return "WEBVTT\n\n" + "\n\n".join(blocks) + "\n"


def cues_to_lrc(cues: List[Cue]) -> str:
    """
    Format cues as LRC, one [mm:ss.cc] tagged line per cue.

    Multi-line text is collapsed onto one line. End times are not
    representable in plain LRC and are dropped.

    Example:
        >>> cues_to_lrc([Cue(0, 2000, "a"), Cue(2000, 4000, "b\\nc")])
        '[00:00.00]a\\n[00:02.00]b c\\n'
    """
    lines = [
        f"[{format_lrc_timestamp(cue.start_ms)}]{_NEWLINE_RUN_RE.sub(' ', cue.text)}"
        for cue in cues
    ]
    return "\n".join(lines) + "\n"


def cues_to_srt(cues: List[Cue]) -> str:
    """Format cues as numbered SubRip blocks (comma decimal separator)."""
    blocks = []
    for idx, cue in enumerate(cues, start=1):
        start = format_timecode(cue.start_ms).replace('.', ',')
        end = format_timecode(cue.end_ms).replace('.', ',')
        blocks.append(f"{idx}\n{start} --> {end}\n{cue.text}\n")
    return "\n".join(blocks)


def export_cues(cues: List[Cue], fmt: str) -> str:
    """
    Export cues in the named format ("vtt", "lrc" or "srt").

    Raises:
        ValueError: For an unsupported format
    """
    fmt = fmt.lower()
    if fmt == 'vtt':
        content = cues_to_vtt(cues)
    elif fmt == 'lrc':
        content = cues_to_lrc(cues)
    elif fmt == 'srt':
        content = cues_to_srt(cues)
    else:
        raise ValueError(f"Unsupported export format: {fmt}")
    logger.info(f"Exported {len(cues)} cues as {fmt.upper()}")
    return content
