"""
Caption parsing package.

Line scanners for WebVTT and SRT text and the format detection that picks
between them.
"""

from .parser import CaptionParser, CaptionParseResult, parse_captions
from .srt import parse_srt_cues
from .vtt import parse_vtt_cues

__all__ = [
    "parse_captions",
    "parse_vtt_cues",
    "parse_srt_cues",
    "CaptionParser",
    "CaptionParseResult",
]
