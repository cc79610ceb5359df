"""
Shared utility functions for LyricSync.

Provides timecode conversion between caption text and integer milliseconds,
plus the line splitting used by every text parser in the package.
"""

import re
from typing import List, Optional

_TIMECODE_RE = re.compile(r'^(\d{1,2}):(\d{2}):(\d{2})[.,](\d{1,3})$', re.ASCII)
_LINE_BREAK_RE = re.compile(r'\r?\n')

BYTE_ORDER_MARK = '\ufeff'


def parse_timecode(text: str) -> Optional[int]:
    """
    Convert H(H):MM:SS.mmm (or with a comma separator) to milliseconds.

    Fractional digits shorter than three are right-padded with zeros, so
    "1.5" means 1500 ms and "1.12" means 1120 ms.

    Args:
        text: Timecode string, surrounding whitespace allowed

    Returns:
        Offset in milliseconds, or None if the text is not a timecode

    Example:
        >>> parse_timecode("01:02:03.456")
        3723456
        >>> parse_timecode("00:00:01,5")
        1500
    """
    match = _TIMECODE_RE.match(text.strip())
    if not match:
        return None
    hours, minutes, seconds, fraction = match.groups()
    milliseconds = int(fraction.ljust(3, '0'))
    return int(hours) * 3600000 + int(minutes) * 60000 + int(seconds) * 1000 + milliseconds


def format_timecode(ms: int) -> str:
    """
    Convert milliseconds to HH:MM:SS.mmm format.

    Negative input is clamped to zero. Hours are zero-padded to two digits
    but never truncated.

    Args:
        ms: Time in milliseconds

    Returns:
        Timestamp string in HH:MM:SS.mmm format

    Example:
        >>> format_timecode(90500)
        '00:01:30.500'
    """
    clamped = max(0, int(ms))
    total_seconds, milliseconds = divmod(clamped, 1000)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{milliseconds:03d}"


def format_lrc_timestamp(ms: int) -> str:
    """
    Convert milliseconds to the mm:ss.cc form used in LRC tags.

    Hundredths are truncated, not rounded. Minutes keep counting past 59.

    Example:
        >>> format_lrc_timestamp(62345)
        '01:02.34'
    """
    clamped = max(0, int(ms))
    total_seconds, milliseconds = divmod(clamped, 1000)
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}.{milliseconds // 10:02d}"


def parse_time_argument(value: str) -> Optional[int]:
    """Accept either a timecode or a plain (possibly signed) millisecond count."""
    value = value.strip()
    if re.fullmatch(r'[+-]?\d+', value, re.ASCII):
        return int(value)
    return parse_timecode(value)


def split_lines(text: str) -> List[str]:
    """Split on LF or CRLF line breaks after removing byte-order marks."""
    return _LINE_BREAK_RE.split(text.replace(BYTE_ORDER_MARK, ''))
