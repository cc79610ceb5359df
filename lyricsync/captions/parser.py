"""
Caption parser with format detection.

Chooses between the VTT and SRT scanners for raw caption text, and wraps
file loading and logging around them.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from ..exceptions import CaptionParseError, EmptyCaptionError
from ..models import Cue
from ..utils import BYTE_ORDER_MARK
from .srt import parse_srt_cues
from .vtt import ARROW, WEBVTT_HEADER, parse_vtt_cues

logger = logging.getLogger(__name__)


@dataclass
class CaptionParseResult:
    """Cues parsed from caption text plus the format that produced them."""
    format: str
    cues: List[Cue] = field(default_factory=list)


def parse_captions(caption_text: str) -> CaptionParseResult:
    """
    Parse raw caption text as WebVTT or SRT.

    Text starting with the WEBVTT header goes to the VTT scanner. Otherwise,
    if it has any timing arrow, the VTT scanner runs first and the SRT
    scanner is the fallback when that yields nothing.

    Args:
        caption_text: Raw caption text

    Returns:
        CaptionParseResult with format "vtt" or "srt"

    Raises:
        EmptyCaptionError: If the input is blank
        CaptionParseError: If no cues could be parsed
    """
    trimmed = (caption_text or '').replace(BYTE_ORDER_MARK, '').strip()
    if not trimmed:
        raise EmptyCaptionError("Enter VTT or SRT captions first.")

    result = CaptionParseResult(format='vtt')
    if trimmed.startswith(WEBVTT_HEADER):
        result.cues = parse_vtt_cues(trimmed)
    elif ARROW in trimmed:
        result.cues = parse_vtt_cues(trimmed)
        if not result.cues:
            logger.debug("No cues found as VTT, retrying as SRT")
            result = CaptionParseResult(format='srt', cues=parse_srt_cues(trimmed))

    if not result.cues:
        raise CaptionParseError("Failed to parse captions. Check the VTT or SRT format.")

    logger.info(f"Parsed {len(result.cues)} cues as {result.format.upper()}")
    return result


class CaptionParser:
    """
    Parser for caption files and strings.

    Thin convenience layer over parse_captions that also reads files.
    """

    def parse_content(self, caption_text: str) -> List[Cue]:
        """Parse caption text and return its cues."""
        return parse_captions(caption_text).cues

    def parse_file(self, caption_file: str) -> List[Cue]:
        """
        Parse a caption file (UTF-8, BOM tolerated).

        Args:
            caption_file: Path to a .vtt or .srt file

        Returns:
            List of cues

        Raises:
            CaptionParseError: If the file is not UTF-8 or yields no cues
        """
        logger.info(f"Parsing caption file: {caption_file}")
        try:
            with open(caption_file, 'r', encoding='utf-8') as f:
                caption_text = f.read()
        except UnicodeDecodeError as e:
            raise CaptionParseError(f"Caption file is not UTF-8 text: {e}") from e
        return self.parse_content(caption_text)
