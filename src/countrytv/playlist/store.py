"""Read and write playlist.json."""

import json
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from .models import Playlist, as_utc, parse_timestamp, utc_now


class PlaylistStore:
    """JSON file holding the current playlist."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Optional[Playlist]:
        """Load the playlist. A missing or unreadable file gives None."""
        if not self.path.exists():
            return None

        try:
            with open(self.path, encoding='utf-8') as f:
                data = json.load(f)
            return Playlist.from_dict(data)
        except (OSError, ValueError) as e:
            # ValueError covers bad JSON, bad UTF-8 and MalformedPlaylistError
            print(f"  [WARN] Ignoring unreadable playlist {self.path}: {e}", file=sys.stderr)
            return None

    def save(self, playlist: Playlist) -> bool:
        """Write the playlist, replacing the file in one step."""
        tmp_path = self.path.with_name(self.path.name + '.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(playlist.to_dict(), f, indent=2, ensure_ascii=False)
                f.write('\n')
            os.replace(tmp_path, self.path)
            return True
        except OSError as e:
            if tmp_path.exists():
                tmp_path.unlink()
            print(f"  [ERROR] Could not save playlist to {self.path}: {e}", file=sys.stderr)
            return False

    def age_hours(self, now: Optional[datetime] = None) -> Optional[float]:
        """Hours since the playlist was last updated, or None if unknown."""
        playlist = self.load()
        if playlist is None:
            return None
        updated = parse_timestamp(playlist.last_updated)
        if updated is None:
            return None
        now = as_utc(now or utc_now())
        return (now - updated).total_seconds() / 3600
