"""Load, merge and save: the last step of every scraper run."""

from datetime import datetime
from typing import Optional

from .merge import merge, new_song_ids
from .models import Playlist, Song
from .store import PlaylistStore


def update_playlist(store: PlaylistStore, candidates: list[Song], source: str,
                    now: Optional[datetime] = None) -> Optional[Playlist]:
    """Merge candidates into the stored playlist and save it.

    Returns the saved playlist, or None if there was nothing to merge or
    the save failed.
    """
    if not candidates:
        print("[WARN] No songs found, playlist left unchanged")
        return None

    existing = store.load()
    if existing is not None:
        print(f"\nChecking {len(candidates)} songs against {len(existing.songs)} existing...\n")
    else:
        print("\nCreating new playlist (no existing data found)\n")

    playlist = merge(existing, candidates, source, now=now)

    added = set(new_song_ids(existing, playlist))
    for song in playlist.songs:
        if song.youtube_id in added:
            print(f"  NEW: \"{song.title}\" - {song.artist}")
    skipped = len(candidates) - len(added)
    if skipped:
        print(f"  SKIP: {skipped} already in playlist or missing a video id")

    if not store.save(playlist):
        return None

    print("\n" + "=" * 60)
    print(f"Playlist saved to {store.path}")
    print(f"  Total songs: {len(playlist.songs)}")
    print(f"  Added this run: {len(added)}")
    print(f"  Flagged new: {playlist.new_count}")
    print("=" * 60)

    return playlist
