"""Lyric text handling."""

from typing import List, Optional

from .utils import split_lines


def split_lyric_lines(lyrics_text: Optional[str]) -> List[str]:
    """
    Split free-form lyrics into trimmed, non-empty lines in original order.

    Repeated lines are kept; choruses are expected to repeat.

    Example:
        >>> split_lyric_lines("  first\\n\\nsecond  \\r\\n")
        ['first', 'second']
    """
    if not lyrics_text:
        return []
    lines = (line.strip() for line in split_lines(lyrics_text))
    return [line for line in lines if line]
