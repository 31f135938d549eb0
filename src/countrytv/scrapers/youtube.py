#!/usr/bin/env python3
"""
YouTube scraper.

Scrapes a public YouTube playlist into the site playlist, and provides the
video search / watch-page lookups the other scrapers use to turn a
"title + artist" into a playable video id.

Usage:
    uv run python -m countrytv.scrapers.youtube
    uv run python -m countrytv.scrapers.youtube --playlist PLxxxx
"""

import argparse
import sys
from typing import Optional
from urllib.parse import quote_plus

from bs4 import BeautifulSoup

from countrytv.config import load_sources_config, playlist_file
from countrytv.playlist import PlaylistStore, Song, update_playlist

from . import browser
from .titles import extract_video_id, parse_video_title

SOURCE_LABEL = 'YouTube Playlist - Country Music 24/7'

SEARCH_TIMEOUT_MS = 30000

# YouTube has used all of these layouts for playlist pages
VIDEO_RENDERER_SELECTORS = [
    'ytd-playlist-video-renderer',
    'ytd-playlist-panel-video-renderer',
    'ytd-playlist-video-list-renderer ytd-playlist-video-renderer',
]
TITLE_LINK_SELECTORS = ['#video-title', 'a#wc-endpoint', 'a.yt-simple-endpoint']


def playlist_url(playlist_id: str) -> str:
    return f"https://www.youtube.com/playlist?list={playlist_id}"


def parse_playlist_videos(html: str) -> list[dict]:
    """Extract [{title, url}] from a rendered playlist page."""
    soup = BeautifulSoup(html, 'html.parser')

    renderers = []
    for selector in VIDEO_RENDERER_SELECTORS:
        renderers = soup.select(selector)
        if renderers:
            break

    videos = []
    for renderer in renderers:
        link = None
        for selector in TITLE_LINK_SELECTORS:
            link = renderer.select_one(selector)
            if link:
                break
        if not link:
            continue

        title = link.get_text(strip=True)
        url = link.get('href', '')
        if title and url:
            videos.append({'title': title, 'url': url})

    return videos


def videos_to_songs(videos: list[dict]) -> list[Song]:
    """Turn scraped videos into candidate songs, dropping ones without an id."""
    songs = []
    for video in videos:
        video_id = extract_video_id(video['url'])
        if not video_id:
            continue
        artist, title = parse_video_title(video['title'])
        songs.append(Song(
            title=title,
            artist=artist,
            youtube_id=video_id,
            position=len(songs) + 1,
        ))
    return songs


def parse_first_search_result(html: str) -> Optional[str]:
    """Video id of the first regular result on a search results page."""
    soup = BeautifulSoup(html, 'html.parser')
    renderer = soup.select_one('ytd-video-renderer')
    if renderer:
        link = renderer.select_one('a#video-title')
        if link:
            return extract_video_id(link.get('href', ''))

    # Fallback: any watch link in the results
    link = soup.select_one('a#video-title[href^="/watch?v="]')
    if link:
        return extract_video_id(link.get('href', ''))
    return None


def parse_watch_page_title(html: str) -> Optional[str]:
    """Title of a video from its watch page."""
    soup = BeautifulSoup(html, 'html.parser')
    el = (soup.select_one('h1.ytd-watch-metadata yt-formatted-string')
          or soup.select_one('h1.title'))
    if el:
        title = el.get_text(strip=True)
        if title:
            return title

    meta = soup.select_one('meta[property="og:title"]')
    if meta and meta.get('content'):
        return meta['content'].strip()
    return None


def search_video_id(page, query: str) -> Optional[str]:
    """Search YouTube and return the first video id (or None)."""
    url = f"https://www.youtube.com/results?search_query={quote_plus(query)}"
    if not browser.open_url(page, url, timeout=SEARCH_TIMEOUT_MS, settle_ms=2000):
        return None
    return parse_first_search_result(page.content())


def find_videos(page, tracks: list[dict], query_format: str, delay_ms: int = 1500) -> list[Song]:
    """Look up a video for each {title, artist} track.

    query_format is filled with title and artist, e.g. "{artist} {title} official".
    Tracks without a match are dropped.
    """
    songs = []
    for track in tracks:
        query = query_format.format(title=track['title'], artist=track['artist'])
        video_id = search_video_id(page, query)
        if video_id:
            print(f"  Found: {track['artist']} - {track['title']} ({video_id})")
            songs.append(Song(
                title=track['title'],
                artist=track['artist'],
                youtube_id=video_id,
                position=len(songs) + 1,
            ))
        else:
            print(f"  Not found: {track['artist']} - {track['title']}")
        if delay_ms:
            page.wait_for_timeout(delay_ms)

    print(f"\nMatched {len(songs)}/{len(tracks)} songs on YouTube")
    return songs


def fetch_video_song(page, video_id: str) -> Optional[Song]:
    """Build a song from a single video's watch page."""
    url = f"https://www.youtube.com/watch?v={video_id}"
    print(f"  Fetching: {url}")
    if not browser.open_url(page, url, timeout=SEARCH_TIMEOUT_MS, settle_ms=2000):
        return None

    raw_title = parse_watch_page_title(page.content())
    if not raw_title:
        print(f"  [WARN] Could not get title for {video_id}")
        return None

    artist, title = parse_video_title(raw_title)
    print(f"    {artist} - {title}")
    return Song(title=title, artist=artist, youtube_id=video_id)


def scrape_playlist(page, playlist_id: str, scroll_all: bool = True) -> list[Song]:
    """Scrape every video in a playlist."""
    url = playlist_url(playlist_id)
    print(f"Playlist: {url}")
    if not browser.open_url(page, url, settle_ms=5000 if scroll_all else 3000):
        return []

    print("Scrolling to load all videos...")
    if scroll_all:
        browser.scroll_to_end(page)
    else:
        browser.scroll_rounds(page, 3, pause_ms=2000)

    videos = parse_playlist_videos(page.content())
    print(f"Found {len(videos)} videos in playlist")
    return videos_to_songs(videos)


def run(playlist_id: Optional[str] = None, store: Optional[PlaylistStore] = None):
    """Scrape the configured playlist and merge it into playlist.json."""
    config = load_sources_config()
    playlist_id = playlist_id or config.youtube_playlist
    store = store or PlaylistStore(playlist_file())

    print("=" * 60)
    print("YouTube Playlist Scraper")
    print("=" * 60)

    try:
        page = browser.new_page()
        songs = scrape_playlist(page, playlist_id)
    finally:
        browser.close_browser()

    return update_playlist(store, songs, SOURCE_LABEL)


def main():
    parser = argparse.ArgumentParser(description='Scrape a YouTube playlist into playlist.json')
    parser.add_argument('--playlist', help='YouTube playlist id (default: from config/sources.yaml)')
    args = parser.parse_args()

    try:
        run(playlist_id=args.playlist)
    except Exception as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
