#!/usr/bin/env python3
"""
Add hand-picked videos (and an extra playlist) to the site playlist.

Video ids and the extra playlist come from the `manual` section of
config/sources.yaml; ids given on the command line are used instead.

Usage:
    uv run python -m countrytv.scrapers.manual
    uv run python -m countrytv.scrapers.manual JfXo8VYTfT4 xnLwAiY7_PE --no-playlist
"""

import argparse
import sys
from typing import Optional

from countrytv.config import load_sources_config, playlist_file
from countrytv.playlist import PlaylistStore, Song, update_playlist

from . import browser
from .youtube import fetch_video_song, scrape_playlist

SOURCE_SUFFIX = 'Manual additions'


def source_label(existing_source: Optional[str]) -> str:
    if existing_source:
        return f"{existing_source} + {SOURCE_SUFFIX}"
    return SOURCE_SUFFIX


def collect_songs(page, video_ids: list[str], playlist_id: Optional[str],
                  delay_ms: int = 1500) -> list[Song]:
    songs = []

    print("Fetching manual videos...\n")
    for video_id in video_ids:
        song = fetch_video_song(page, video_id)
        if song:
            songs.append(song)
        if delay_ms:
            page.wait_for_timeout(delay_ms)

    if playlist_id:
        print()
        songs.extend(scrape_playlist(page, playlist_id, scroll_all=False))

    return songs


def run(video_ids: Optional[list[str]] = None, playlist_id: Optional[str] = None,
        include_playlist: bool = True, store: Optional[PlaylistStore] = None):
    config = load_sources_config()
    video_ids = video_ids or config.manual_video_ids
    if include_playlist:
        playlist_id = playlist_id or config.manual_playlist
    else:
        playlist_id = None
    store = store or PlaylistStore(playlist_file())

    print("=" * 60)
    print("Manual Song Additions")
    print("=" * 60)

    existing = store.load()
    if existing is not None:
        print(f"Current playlist has {len(existing.songs)} songs\n")

    try:
        page = browser.new_page()
        songs = collect_songs(page, video_ids, playlist_id)
    finally:
        browser.close_browser()

    print(f"\nTotal songs fetched: {len(songs)}")
    return update_playlist(store, songs, source_label(existing.source if existing else None))


def main():
    parser = argparse.ArgumentParser(description='Add hand-picked YouTube videos to playlist.json')
    parser.add_argument('video_ids', nargs='*', help='Video ids (default: from config/sources.yaml)')
    parser.add_argument('--playlist', help='Extra playlist id to scrape')
    parser.add_argument('--no-playlist', action='store_true', help='Skip the extra playlist')
    args = parser.parse_args()

    try:
        run(video_ids=args.video_ids or None, playlist_id=args.playlist,
            include_playlist=not args.no_playlist)
    except Exception as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
