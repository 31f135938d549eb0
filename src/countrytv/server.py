#!/usr/bin/env python3
"""
Web server for Country TV.

Serves the player from public/ (index.html, playlist.json, assets) and a
small JSON API:

    GET  /api/viewer-count   count this viewer and return the live count
    POST /api/viewer-count   heartbeat
    GET  /api/playlist       playable songs, ?shuffle=1 for a shuffled order
    GET  /api/status         auto-update status

Usage:
    uv run python -m countrytv.server
    uv run python -m countrytv.server --port 8080 --auto-update both
"""

import argparse
import json
from functools import partial
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Optional
from urllib.parse import parse_qs, urlparse

from countrytv.config import PUBLIC_DIR, load_sources_config, playlist_file
from countrytv.playlist import PlaylistStore, format_timestamp, playable_songs, shuffle_songs
from countrytv.playlist.models import utc_now
from countrytv.service import AutoUpdateService, ViewerCounter, viewer_id_for

DEFAULT_PORT = 3000


class CountryTVHandler(SimpleHTTPRequestHandler):
    """Static files from public/ plus the /api routes."""

    # Set by make_server()
    viewers: ViewerCounter = None
    store: PlaylistStore = None
    auto_update: Optional[AutoUpdateService] = None

    def do_GET(self):
        path = urlparse(self.path).path

        if path == '/api/viewer-count':
            self.serve_viewer_count()
        elif path == '/api/playlist':
            self.serve_playlist()
        elif path == '/api/status':
            self.serve_status()
        elif path.startswith('/api/'):
            self.send_json({'error': 'Not found'}, status=404)
        else:
            super().do_GET()

    def do_POST(self):
        path = urlparse(self.path).path

        if path == '/api/viewer-count':
            self.viewers.touch(self.viewer_id())
            self.send_json({'status': 'heartbeat received'})
        else:
            self.send_json({'error': 'Not found'}, status=404)

    def do_PUT(self):
        self.reject_method()

    def do_DELETE(self):
        self.reject_method()

    def reject_method(self):
        if urlparse(self.path).path == '/api/viewer-count':
            self.send_json({'error': 'Method not allowed'}, status=405)
        else:
            self.send_error(405)

    def viewer_id(self) -> str:
        return viewer_id_for(self.headers, self.client_address[0] if self.client_address else None)

    def serve_viewer_count(self):
        viewer_id = self.viewer_id()
        self.viewers.touch(viewer_id)
        active = self.viewers.active_count()
        self.send_json({
            'count': active,
            'timestamp': format_timestamp(utc_now()),
            'source': 'real-count',
            'viewers': self.viewers.total(),
            'active': active,
            'viewerId': viewer_id,
        })

    def serve_playlist(self):
        playlist = self.store.load()
        if playlist is None:
            self.send_json({'error': 'No playlist yet. Run a scraper first.'}, status=404)
            return

        songs = playable_songs(playlist.songs)
        query = parse_qs(urlparse(self.path).query)
        if query.get('shuffle', ['0'])[0] in ('1', 'true', 'yes'):
            songs = shuffle_songs(songs)

        self.send_json({
            'lastUpdated': playlist.last_updated,
            'source': playlist.source,
            'songs': [s.to_dict() for s in songs],
        })

    def serve_status(self):
        if self.auto_update is None:
            self.send_json({'enabled': False})
        else:
            self.send_json({'enabled': True, **self.auto_update.get_status()})

    def send_json(self, data, status: int = 200):
        """Send JSON response"""
        body = json.dumps(data).encode()
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(body)))
        self.send_header('Access-Control-Allow-Origin', '*')
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        # Viewer polling every few seconds would flood the console
        if '/api/viewer-count' in (self.path or ''):
            return
        super().log_message(format, *args)


def make_server(port: int = DEFAULT_PORT, public_dir: Path = PUBLIC_DIR,
                store: Optional[PlaylistStore] = None,
                viewers: Optional[ViewerCounter] = None,
                auto_update: Optional[AutoUpdateService] = None,
                host: str = '') -> ThreadingHTTPServer:
    """Build (but don't start) the HTTP server."""
    handler = type('BoundCountryTVHandler', (CountryTVHandler,), {
        'viewers': viewers or ViewerCounter(),
        'store': store or PlaylistStore(playlist_file()),
        'auto_update': auto_update,
    })
    return ThreadingHTTPServer((host, port), partial(handler, directory=str(public_dir)))


def run_server(port: int = DEFAULT_PORT, public_dir: Path = PUBLIC_DIR,
               auto_update_source: Optional[str] = None):
    """Run the Country TV server until interrupted."""
    viewers = ViewerCounter()
    viewers.start_sweeper()

    auto_update = None
    if auto_update_source:
        config = load_sources_config()
        auto_update = AutoUpdateService(schedule_hour=config.schedule_hour)
        auto_update.start(auto_update_source)

    httpd = make_server(port, public_dir, viewers=viewers, auto_update=auto_update)

    print(f"""
Country TV server is running!

   Open in browser: http://localhost:{port}

   Controls:
   - Click on playlist items to change songs
   - Arrow Right / N: Next song
   - Arrow Left / P: Previous song
   - Space: Play/Pause

   Press Ctrl+C to stop the server
""")

    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        print("\n\nServer stopped.")
    finally:
        httpd.server_close()
        viewers.stop_sweeper()
        if auto_update:
            auto_update.stop()


def main():
    parser = argparse.ArgumentParser(description='Country TV web server')
    parser.add_argument('--port', type=int, default=DEFAULT_PORT,
                        help=f'Port to run server on (default: {DEFAULT_PORT})')
    parser.add_argument('--public-dir', type=Path, default=PUBLIC_DIR,
                        help='Directory with index.html and playlist.json')
    parser.add_argument('--auto-update', choices=['youtube', 'spotify', 'both'],
                        help='Refresh the playlist daily from these sources')
    args = parser.parse_args()
    run_server(args.port, args.public_dir, args.auto_update)


if __name__ == '__main__':
    main()
