"""
YouTube URL helpers for LyricSync.

Pure string handling: nothing here talks to the network.
"""

import logging
from typing import Optional
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

logger = logging.getLogger(__name__)


def extract_youtube_id(url: str) -> Optional[str]:
    """
    Extract a YouTube video ID from a URL.

    Understands youtu.be short links and youtube.com watch, embed and
    shorts URLs.

    Args:
        url: YouTube URL

    Returns:
        YouTube video ID or None if not found

    Example:
        >>> extract_youtube_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
        >>> extract_youtube_id("https://youtu.be/dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
    """
    trimmed = (url or '').strip()
    if not trimmed:
        return None
    try:
        parsed = urlparse(trimmed)
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None

    host = parsed.hostname or ''
    path = parsed.path
    if 'youtu.be' in host:
        return path.lstrip('/').split('/')[0] or None
    if 'youtube.com' in host:
        video_ids = parse_qs(parsed.query).get('v')
        if video_ids and video_ids[0]:
            return video_ids[0]
        for prefix in ('/embed/', '/shorts/'):
            if path.startswith(prefix):
                return path[len(prefix):].split('/')[0] or None
    return None


def is_youtube_url(url: str) -> bool:
    """
    Check if the provided URL points at a YouTube video.

    Example:
        >>> is_youtube_url("https://example.com/video")
        False
    """
    return extract_youtube_id(url) is not None


def build_share_link(base_url: str, video_id: Optional[str], caption_url: Optional[str],
                     lyrics_url: Optional[str] = None) -> str:
    """
    Build a link that reopens a video with its captions (and lyrics).

    Sets the "v", "vtt" and optional "lyrics" query parameters on base_url,
    keeping any other parameters already there.

    Returns:
        The link, or "" when the video ID or caption URL is missing
    """
    if not video_id or not caption_url:
        return ""
    parsed = urlparse(base_url)
    query = parse_qs(parsed.query, keep_blank_values=True)
    query['v'] = [video_id]
    query['vtt'] = [caption_url]
    if lyrics_url:
        query['lyrics'] = [lyrics_url]
    else:
        query.pop('lyrics', None)
    return urlunparse(parsed._replace(query=urlencode(query, doseq=True)))
