#!/usr/bin/env python3
"""
Spotify playlist scraper.

Reads track titles/artists from a public Spotify playlist page, then finds a
YouTube video for each track so the player can show it.

Usage:
    uv run python -m countrytv.scrapers.spotify
    uv run python -m countrytv.scrapers.spotify --show-browser
"""

import argparse
import sys
from typing import Optional

from bs4 import BeautifulSoup

from countrytv.config import PROJECT_ROOT, load_sources_config, playlist_file
from countrytv.playlist import PlaylistStore, update_playlist

from . import browser
from .youtube import find_videos

SOURCE_LABEL = 'Spotify Playlist + YouTube - Country Music Collection'
SEARCH_QUERY = '{artist} {title} official'

DEBUG_SCREENSHOT = PROJECT_ROOT / 'spotify-debug.png'


def parse_tracks(html: str) -> list[dict]:
    """Extract [{title, artist}] rows from a rendered playlist page."""
    soup = BeautifulSoup(html, 'html.parser')
    tracks = []

    for row in soup.select('[data-testid="tracklist-row"]'):
        title_el = (row.select_one('[data-testid="internal-track-link"]')
                    or row.select_one('a[href*="/track/"]'))
        artist_el = row.select_one('a[href*="/artist/"]')

        title = title_el.get_text(strip=True) if title_el else ''
        artist = artist_el.get_text(strip=True) if artist_el else ''

        if title and artist:
            tracks.append({'title': title, 'artist': artist})

    return tracks


def scrape_tracks(page, url: str) -> list[dict]:
    """Load the playlist page and read its visible tracks."""
    print(f"Playlist: {url}")
    if not browser.open_url(page, url, settle_ms=5000):
        return []

    print("Scrolling to load tracks...")
    browser.scroll_rounds(page, 5, pause_ms=1000, by_viewport=True)

    tracks = parse_tracks(page.content())
    print(f"Found {len(tracks)} tracks in Spotify playlist")

    if not tracks:
        print("[WARN] No tracks found. Spotify may have changed its layout.")
        page.screenshot(path=str(DEBUG_SCREENSHOT), full_page=True)
        print(f"  Screenshot saved to {DEBUG_SCREENSHOT}")

    return tracks


def run(url: Optional[str] = None, store: Optional[PlaylistStore] = None,
        headless: bool = True):
    """Scrape the Spotify playlist, match on YouTube, merge into playlist.json."""
    config = load_sources_config()
    url = url or config.spotify_playlist_url
    store = store or PlaylistStore(playlist_file())

    print("=" * 60)
    print("Spotify Playlist Scraper")
    print("=" * 60)

    try:
        page = browser.new_page(user_agent=browser.DESKTOP_USER_AGENT, headless=headless)
        tracks = scrape_tracks(page, url)
        if not tracks:
            return None

        print("\nSearching for songs on YouTube...\n")
        songs = find_videos(page, tracks, SEARCH_QUERY)
    finally:
        browser.close_browser()

    return update_playlist(store, songs, SOURCE_LABEL)


def main():
    parser = argparse.ArgumentParser(description='Scrape a Spotify playlist into playlist.json')
    parser.add_argument('--url', help='Spotify playlist URL (default: from config/sources.yaml)')
    parser.add_argument('--show-browser', action='store_true',
                        help='Run Chromium with a visible window')
    args = parser.parse_args()

    try:
        run(url=args.url, headless=not args.show_browser)
    except Exception as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
