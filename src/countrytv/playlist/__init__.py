"""
Playlist model, merge logic and persistence.
"""

from .models import (
    Song,
    Playlist,
    MalformedPlaylistError,
    as_utc,
    format_timestamp,
    parse_timestamp,
)
from .merge import (
    FRESHNESS_WINDOW_DAYS,
    merge,
    new_song_ids,
    renumber,
    sweep_freshness,
)
from .shuffle import playable_songs, shuffle_songs
from .store import PlaylistStore
from .update import update_playlist

__all__ = [
    'Song',
    'Playlist',
    'MalformedPlaylistError',
    'as_utc',
    'format_timestamp',
    'parse_timestamp',
    'FRESHNESS_WINDOW_DAYS',
    'merge',
    'new_song_ids',
    'renumber',
    'sweep_freshness',
    'playable_songs',
    'shuffle_songs',
    'PlaylistStore',
    'update_playlist',
]
