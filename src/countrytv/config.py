"""
Project paths and configuration loading.

Scraper sources (playlist ids, chart limits, schedule) are read from
config/sources.yaml; anything missing falls back to the defaults below.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

PROJECT_ROOT = Path(os.environ.get('COUNTRYTV_ROOT') or Path(__file__).resolve().parents[2])
PUBLIC_DIR = PROJECT_ROOT / 'public'
CONFIG_FILE = PROJECT_ROOT / 'config' / 'sources.yaml'


def playlist_file() -> Path:
    """Location of the persisted playlist (overridable for deployments)."""
    override = os.environ.get('COUNTRYTV_PLAYLIST_FILE')
    if override:
        return Path(override)
    return PUBLIC_DIR / 'playlist.json'


def load_env_file(paths: Optional[list[Path]] = None):
    """Load KEY=VALUE lines from .env files without overriding the environment."""
    if paths is None:
        paths = [PROJECT_ROOT / '.env', Path.home() / '.env']
    for env_file in paths:
        if not env_file.exists():
            continue
        with open(env_file) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith('#') and '=' in line:
                    key, _, value = line.partition('=')
                    key = key.strip()
                    value = value.strip().strip('"').strip("'")
                    if key and key not in os.environ:  # Don't override existing
                        os.environ[key] = value


@dataclass
class SourcesConfig:
    """Where each scraper pulls its songs from."""
    youtube_playlist: str = 'PLeDakahyfrO-XXf8riL8LLpO838tur7CQ'
    spotify_playlist_url: str = 'https://open.spotify.com/playlist/2Hi4RV1DJHHiSDcwYFFKeR'
    manual_video_ids: list[str] = field(default_factory=lambda: [
        'JfXo8VYTfT4',
        'xnLwAiY7_PE',
        'fRw0n87shW4',
        'FjBp30kjzTc',
        '77qc4ZtufzM',
        'mKnQXaIlrMo',
    ])
    manual_playlist: Optional[str] = 'PLF-qYr2hPBv1_WLmZkV5EWtalulirESrz'
    wikipedia_year: int = 2025
    wikipedia_limit: int = 10
    billboard_limit: int = 5
    schedule_hour: int = 3  # local time, daily

    @classmethod
    def from_dict(cls, data: dict) -> 'SourcesConfig':
        defaults = cls()
        youtube = data.get('youtube') or {}
        spotify = data.get('spotify') or {}
        manual = data.get('manual') or {}
        wikipedia = data.get('wikipedia') or {}
        billboard = data.get('billboard') or {}
        schedule = data.get('schedule') or {}

        return cls(
            youtube_playlist=youtube.get('playlist', defaults.youtube_playlist),
            spotify_playlist_url=spotify.get('playlist_url', defaults.spotify_playlist_url),
            manual_video_ids=[str(v) for v in manual.get('video_ids', defaults.manual_video_ids)],
            manual_playlist=manual.get('playlist', defaults.manual_playlist),
            wikipedia_year=int(wikipedia.get('year', defaults.wikipedia_year)),
            wikipedia_limit=int(wikipedia.get('limit', defaults.wikipedia_limit)),
            billboard_limit=int(billboard.get('limit', defaults.billboard_limit)),
            schedule_hour=int(schedule.get('hour', defaults.schedule_hour)),
        )


def load_sources_config(path: Optional[Path] = None) -> SourcesConfig:
    """Read config/sources.yaml, falling back to built-in defaults."""
    path = path or CONFIG_FILE
    if not path.exists():
        return SourcesConfig()

    with open(path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        return SourcesConfig()
    return SourcesConfig.from_dict(data)
