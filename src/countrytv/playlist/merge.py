"""
Reconcile a freshly scraped batch of songs with the persisted playlist.

The merge is additive: every song already in the playlist (one per video
id) is kept in its existing order, and only candidates with an unseen YouTube id are appended.
Positions are renumbered afterwards and the "new" flag is aged out after
the freshness window.
"""

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Iterable, Optional

from .models import Playlist, Song, as_utc, format_timestamp, parse_timestamp, utc_now

FRESHNESS_WINDOW_DAYS = 7


def renumber(songs: list[Song]) -> list[Song]:
    """Return copies of songs with position set to their 1-based index."""
    return [replace(song, position=i + 1) for i, song in enumerate(songs)]


def sweep_freshness(songs: list[Song], now: Optional[datetime] = None,
                    window_days: int = FRESHNESS_WINDOW_DAYS) -> list[Song]:
    """Drop the isNew flag from songs added window_days or more ago.

    Songs without a readable addedDate are left as they are.
    """
    now = as_utc(now or utc_now())
    window = timedelta(days=window_days)

    swept = []
    for song in songs:
        if song.is_new:
            added = parse_timestamp(song.added_date)
            if added is not None and now - added >= window:
                song = replace(song, is_new=None)
        swept.append(song)
    return swept


def merge(existing: Optional[Playlist], candidates: Iterable[Song], source: str,
          now: Optional[datetime] = None) -> Playlist:
    """Merge scraped candidates into an existing playlist (which may be None).

    - existing songs keep their relative order, ahead of new ones
    - existing songs without an id or with a repeated id are dropped
    - a candidate without a youtube id is skipped
    - the first candidate with a given id wins, later ones are dropped
    - new songs get isNew and addedDate = now
    """
    now = as_utc(now or utc_now())
    stamp = format_timestamp(now)

    # Stored songs are deduped by id as well
    result = []
    known = set()
    for song in (existing.songs if existing else []):
        if not song.youtube_id or song.youtube_id in known:
            continue
        known.add(song.youtube_id)
        result.append(song)

    for candidate in candidates:
        video_id = candidate.youtube_id
        if not video_id or video_id in known:
            continue
        known.add(video_id)
        result.append(replace(candidate, is_new=True, added_date=stamp))

    songs = sweep_freshness(renumber(result), now)

    return Playlist(last_updated=stamp, source=source, songs=songs)


def new_song_ids(before: Optional[Playlist], after: Playlist) -> list[str]:
    """Ids present in after but not in before, in playlist order."""
    seen = {s.youtube_id for s in before.songs} if before else set()
    return [s.youtube_id for s in after.songs if s.youtube_id not in seen]
