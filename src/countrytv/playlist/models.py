"""
Song and playlist definitions for playlist.json.

The JSON file is read by the browser player, so field names stay camelCase
on disk:

    {
      "lastUpdated": "2025-10-19T03:00:00.000Z",
      "source": "YouTube Playlist - Country Music 24/7",
      "songs": [
        {"position": 1, "title": "...", "artist": "...", "youtubeId": "...",
         "isNew": true, "addedDate": "2025-10-19T03:00:00.000Z"}
      ]
    }
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


class MalformedPlaylistError(ValueError):
    """Persisted playlist data is not a playlist object."""


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(moment: datetime) -> datetime:
    """Convert to UTC, reading naive datetimes as UTC already."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Render a timestamp the way the player expects (UTC, millis, Z suffix)."""
    moment = as_utc(moment)
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def parse_timestamp(value) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp. Returns None if it can't be read.

    Naive timestamps are treated as UTC.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith('Z') or text.endswith('z'):
        text = text[:-1] + '+00:00'
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


@dataclass
class Song:
    """A single song in the playlist, identified by its YouTube video id."""
    title: str
    artist: str
    youtube_id: str
    position: int = 0  # 1-based, reassigned on every merge
    is_new: Optional[bool] = None  # only ever True or absent
    added_date: Optional[str] = None  # ISO-8601, set on first merge

    def to_dict(self) -> dict:
        data = {
            'position': self.position,
            'title': self.title,
            'artist': self.artist,
            'youtubeId': self.youtube_id,
        }
        if self.is_new:
            data['isNew'] = True
        if self.added_date:
            data['addedDate'] = self.added_date
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'Song':
        position = data.get('position')
        return cls(
            title=str(data.get('title') or ''),
            artist=str(data.get('artist') or ''),
            youtube_id=str(data.get('youtubeId') or ''),
            position=position if isinstance(position, int) else 0,
            is_new=True if data.get('isNew') is True else None,
            added_date=data.get('addedDate') or None,
        )


@dataclass
class Playlist:
    """The persisted playlist aggregate."""
    last_updated: str
    source: str
    songs: list[Song] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'lastUpdated': self.last_updated,
            'source': self.source,
            'songs': [song.to_dict() for song in self.songs],
        }

    @classmethod
    def from_dict(cls, data) -> 'Playlist':
        if not isinstance(data, dict):
            raise MalformedPlaylistError(f"expected an object, got {type(data).__name__}")

        songs = data.get('songs', [])
        if not isinstance(songs, list):
            raise MalformedPlaylistError("'songs' is not a list")

        return cls(
            last_updated=str(data.get('lastUpdated') or ''),
            source=str(data.get('source') or ''),
            songs=[Song.from_dict(s) for s in songs if isinstance(s, dict)],
        )

    @property
    def new_count(self) -> int:
        return sum(1 for s in self.songs if s.is_new)
