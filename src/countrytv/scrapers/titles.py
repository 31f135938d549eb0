"""
Parsing of raw video titles and URLs.

YouTube video titles usually look like "Artist - Title" or "Artist: Title".
Anything else is kept whole as the title with an unknown artist.
"""

import re
from typing import Optional

UNKNOWN_ARTIST = 'Unknown Artist'

VIDEO_ID_RE = re.compile(r'[?&]v=([^&#]+)')


def parse_video_title(raw: str) -> tuple[str, str]:
    """Split a video title into (artist, title)."""
    raw = (raw or '').strip()

    for separator in (' - ', ': '):
        if separator in raw:
            artist, _, title = raw.partition(separator)
            return artist.strip(), title.strip()

    return UNKNOWN_ARTIST, raw


def extract_video_id(url: str) -> Optional[str]:
    """Pull the v= parameter out of a watch URL."""
    if not url:
        return None
    match = VIDEO_ID_RE.search(url)
    return match.group(1) if match else None


def clean_artist(text: str) -> str:
    """Strip footnote markers like [12] and parenthetical notes from an artist cell."""
    text = re.sub(r'\[\d+\]', '', text or '')
    text = re.sub(r'\(.*?\)', '', text)
    return ' '.join(text.split())
