"""
Country TV - a 24/7 country-music video channel

Modules:
- playlist: song model, merge/dedup logic, playlist.json storage
- scrapers: YouTube, Spotify, Wikipedia and Billboard song sources
- service: daily auto-update and live viewer counter
- server: static player + JSON API
"""

from .playlist import (
    Song,
    Playlist,
    PlaylistStore,
    merge,
    sweep_freshness,
    update_playlist,
)

__version__ = "0.1.0"

__all__ = [
    'Song',
    'Playlist',
    'PlaylistStore',
    'merge',
    'sweep_freshness',
    'update_playlist',
]
