#!/usr/bin/env python3
"""
Billboard Hot Country Songs scraper.

Reads the top of the country chart and finds a YouTube video for each song.
The chart markup changes often; --ai hands the page HTML to Claude and asks
for the songs with a forced tool call instead of parsing it ourselves.

Usage:
    uv run python -m countrytv.scrapers.billboard
    uv run python -m countrytv.scrapers.billboard --limit 10
    export ANTHROPIC_API_KEY=your_key_here
    uv run python -m countrytv.scrapers.billboard --ai
"""

import argparse
import os
import sys
from typing import Optional

import requests
from bs4 import BeautifulSoup
from pydantic import BaseModel, ValidationError

from countrytv.config import load_env_file, load_sources_config, playlist_file
from countrytv.playlist import PlaylistStore, update_playlist

from . import browser
from .youtube import find_videos

CHART_URL = 'https://www.billboard.com/charts/country-songs/'
SOURCE_LABEL = 'Billboard Hot Country Songs'
SEARCH_QUERY = '{title} {artist} official video'

BROWSER_USER_AGENT = browser.DESKTOP_USER_AGENT

AI_MODEL = 'claude-sonnet-4-20250514'
AI_HTML_LIMIT = 8000  # characters of page HTML sent to the model


class ChartSong(BaseModel):
    """One chart entry as returned by the model."""
    position: int
    title: str
    artist: str


class ChartExtraction(BaseModel):
    songs: list[ChartSong]


CHART_TOOL = {
    "name": "submit_chart_songs",
    "description": "Submit the top songs of the Hot Country Songs chart",
    "input_schema": {
        "type": "object",
        "properties": {
            "songs": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "position": {"type": "integer", "description": "Chart position"},
                        "title": {"type": "string", "description": "Song title"},
                        "artist": {"type": "string", "description": "Artist name"},
                    },
                    "required": ["position", "title", "artist"],
                },
            }
        },
        "required": ["songs"],
    },
}

SYSTEM_PROMPT = (
    "You extract music chart data from web pages. "
    "Read the Billboard Hot Country Songs chart and report the top songs "
    "with their chart position, title and artist. "
    "Use the submit_chart_songs tool to return them."
)


def parse_chart(html: str, limit: int) -> list[dict]:
    """Extract [{position, title, artist}] from the chart page markup."""
    soup = BeautifulSoup(html, 'html.parser')
    songs = []

    for heading in soup.select('h3#title-of-a-story'):
        # Only chart rows carry the artist label right after the title
        artist_el = heading.find_next_sibling('span')
        if not artist_el:
            continue

        title = heading.get_text(strip=True)
        artist = ' '.join(artist_el.get_text().split())
        if not title or not artist:
            continue

        songs.append({'position': len(songs) + 1, 'title': title, 'artist': artist})
        if len(songs) >= limit:
            break

    return songs


def extract_with_ai(client, html: str, limit: int, model: str = AI_MODEL) -> list[dict]:
    """Ask the model for the top songs in the page HTML."""
    response = client.messages.create(
        model=model,
        max_tokens=1024,
        system=SYSTEM_PROMPT,
        tools=[CHART_TOOL],
        tool_choice={"type": "tool", "name": CHART_TOOL["name"]},
        messages=[{
            "role": "user",
            "content": (f"Extract the top {limit} songs from this HTML. "
                        f"Return only position, title and artist:\n\n{html[:AI_HTML_LIMIT]}"),
        }],
    )

    for block in response.content:
        if getattr(block, 'type', None) == 'tool_use' and block.name == CHART_TOOL["name"]:
            try:
                extraction = ChartExtraction.model_validate(block.input)
            except ValidationError as e:
                print(f"  [WARN] Model returned an invalid song list: {e}", file=sys.stderr)
                return []
            ordered = sorted(extraction.songs, key=lambda s: s.position)
            return [s.model_dump() for s in ordered[:limit]]

    print("  [WARN] Model did not return a song list", file=sys.stderr)
    return []


def fetch_chart_html() -> Optional[str]:
    print(f"Fetching {CHART_URL}")
    try:
        resp = requests.get(CHART_URL, headers={'User-Agent': BROWSER_USER_AGENT}, timeout=30)
        resp.raise_for_status()
        return resp.text
    except requests.RequestException as e:
        print(f"  [ERROR] {e}", file=sys.stderr)
        return None


def run(limit: Optional[int] = None, use_ai: bool = False,
        store: Optional[PlaylistStore] = None):
    config = load_sources_config()
    limit = limit or config.billboard_limit
    store = store or PlaylistStore(playlist_file())

    print("=" * 60)
    print(f"Billboard Hot Country Songs (top {limit})")
    print("=" * 60)

    html = fetch_chart_html()
    if not html:
        return None

    if use_ai:
        import anthropic
        print("Using AI to extract songs...")
        tracks = extract_with_ai(anthropic.Anthropic(), html, limit)
    else:
        tracks = parse_chart(html, limit)

    if not tracks:
        print("[WARN] No chart entries found")
        return None

    for track in tracks:
        print(f"{track['position']}. \"{track['title']}\" - {track['artist']}")

    print("\nSearching for YouTube videos...\n")
    try:
        page = browser.new_page()
        songs = find_videos(page, tracks, SEARCH_QUERY, delay_ms=0)
    finally:
        browser.close_browser()

    return update_playlist(store, songs, SOURCE_LABEL)


def main():
    parser = argparse.ArgumentParser(description='Scrape the Billboard country chart into playlist.json')
    parser.add_argument('--limit', type=int, help='Number of chart positions to keep')
    parser.add_argument('--ai', action='store_true',
                        help='Extract chart entries with Claude instead of the HTML parser')
    args = parser.parse_args()

    if args.ai:
        load_env_file()
        if not os.environ.get('ANTHROPIC_API_KEY'):
            print("Error: ANTHROPIC_API_KEY environment variable not set")
            sys.exit(1)

    try:
        run(limit=args.limit, use_ai=args.ai)
    except Exception as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
