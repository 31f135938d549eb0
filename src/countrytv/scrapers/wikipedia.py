#!/usr/bin/env python3
"""
Wikipedia scraper for Billboard number-one country songs.

Reads the yearly "List of Billboard number-one country songs" table, keeps
the first unique songs, and finds a YouTube video for each.

Usage:
    uv run python -m countrytv.scrapers.wikipedia
    uv run python -m countrytv.scrapers.wikipedia --year 2024 --limit 20
"""

import argparse
import re
import sys
from typing import Optional

import requests
from bs4 import BeautifulSoup

from countrytv.config import load_sources_config, playlist_file
from countrytv.playlist import PlaylistStore, update_playlist

from . import browser
from .titles import clean_artist
from .youtube import find_videos

WIKI_BASE = 'https://en.wikipedia.org/wiki/'
SEARCH_QUERY = '{title} {artist} official video'
USER_AGENT = 'CountryTV/1.0 (hobby playlist builder)'


def page_url(year: int) -> str:
    return f"{WIKI_BASE}List_of_Billboard_number-one_country_songs_of_{year}"


def source_label(year: int) -> str:
    return f"Wikipedia - List of Billboard number-one country songs of {year}"


def parse_number_ones(html: str, limit: Optional[int] = None) -> list[dict]:
    """Extract unique [{title, artist}] from the wikitable rows."""
    soup = BeautifulSoup(html, 'html.parser')
    songs = []
    seen = set()

    for row in soup.select('table.wikitable tr'):
        cells = row.find_all('td')
        if len(cells) < 2:
            continue

        # Song titles are quoted in the first data cell
        match = re.search(r'"([^"]+)"', cells[0].get_text())
        title = match.group(1).strip() if match else ''
        artist = clean_artist(cells[1].get_text())

        if not title or not artist or title == 'Song' or artist == 'Artist':
            continue

        key = f"{title}-{artist}"
        if key in seen:
            continue
        seen.add(key)
        songs.append({'title': title, 'artist': artist})

        if limit and len(songs) >= limit:
            break

    return songs


def fetch_number_ones(year: int, limit: int) -> list[dict]:
    url = page_url(year)
    print(f"Fetching {url}")
    try:
        resp = requests.get(url, headers={'User-Agent': USER_AGENT}, timeout=30)
        resp.raise_for_status()
    except requests.RequestException as e:
        print(f"  [ERROR] {e}", file=sys.stderr)
        return []

    return parse_number_ones(resp.text, limit=limit)


def run(year: Optional[int] = None, limit: Optional[int] = None,
        store: Optional[PlaylistStore] = None):
    config = load_sources_config()
    year = year or config.wikipedia_year
    limit = limit or config.wikipedia_limit
    store = store or PlaylistStore(playlist_file())

    print("=" * 60)
    print(f"Billboard #1 Country Songs of {year} (Wikipedia)")
    print("=" * 60)

    tracks = fetch_number_ones(year, limit)
    if not tracks:
        print("[WARN] No songs found")
        return None

    for i, track in enumerate(tracks, 1):
        print(f"{i}. \"{track['title']}\" - {track['artist']}")

    print("\nSearching for YouTube videos...\n")
    try:
        page = browser.new_page()
        songs = find_videos(page, tracks, SEARCH_QUERY, delay_ms=0)
    finally:
        browser.close_browser()

    return update_playlist(store, songs, source_label(year))


def main():
    parser = argparse.ArgumentParser(description='Scrape Billboard #1 country songs from Wikipedia')
    parser.add_argument('--year', type=int, help='Chart year (default: from config/sources.yaml)')
    parser.add_argument('--limit', type=int, help='Number of songs to keep')
    args = parser.parse_args()

    try:
        run(year=args.year, limit=args.limit)
    except Exception as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
