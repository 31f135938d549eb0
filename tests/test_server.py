"""Tests for the HTTP server and JSON API."""

import threading
from datetime import datetime, timezone

import pytest
import requests

from countrytv.playlist import Playlist, PlaylistStore, Song, format_timestamp
from countrytv.server import make_server
from countrytv.service import AutoUpdateService, ViewerCounter


class FakeAutoUpdate:

    def get_status(self):
        return {'isRunning': False, 'lastUpdate': None,
                'nextUpdate': '2025-10-20T03:00:00', 'source': 'youtube'}


@pytest.fixture
def public_dir(tmp_path):
    public = tmp_path / 'public'
    public.mkdir()
    (public / 'index.html').write_text('<html><title>Country TV</title></html>')
    return public


@pytest.fixture
def store(public_dir):
    return PlaylistStore(public_dir / 'playlist.json')


@pytest.fixture
def serve(public_dir, store):
    """Start a server on a free port; returns a function building base URLs."""
    servers = []

    def start(**kwargs):
        kwargs.setdefault('store', store)
        httpd = make_server(port=0, public_dir=public_dir, host='127.0.0.1', **kwargs)
        thread = threading.Thread(target=httpd.serve_forever, daemon=True)
        thread.start()
        servers.append(httpd)
        host, port = httpd.server_address[:2]
        return f"http://{host}:{port}"

    yield start

    for httpd in servers:
        httpd.shutdown()
        httpd.server_close()


def save_playlist(store, count=3):
    songs = [Song(title=f'Song {i}', artist='Artist', youtube_id=f'id{i}', position=i)
             for i in range(1, count + 1)]
    songs.append(Song(title='Broken', artist='Artist', youtube_id='', position=count + 1))
    store.save(Playlist(last_updated=format_timestamp(datetime.now(timezone.utc)),
                        source='YouTube', songs=songs))


class TestStatic:

    def test_index(self, serve):
        base = serve()
        resp = requests.get(f"{base}/", timeout=5)
        assert resp.status_code == 200
        assert 'Country TV' in resp.text

    def test_playlist_json_served_as_file(self, serve, store):
        save_playlist(store)
        resp = requests.get(f"{serve()}/playlist.json", timeout=5)
        assert resp.status_code == 200
        assert resp.json()['source'] == 'YouTube'


class TestViewerCount:

    def test_counts_this_viewer(self, serve):
        resp = requests.get(f"{serve()}/api/viewer-count", headers={'User-Agent': 'TestAgent/1'}, timeout=5)

        assert resp.status_code == 200
        data = resp.json()
        assert data['count'] == 1
        assert data['active'] == 1
        assert data['viewers'] == 1
        assert data['source'] == 'real-count'
        assert data['viewerId'] == '127.0.0._TestAgen'
        assert data['timestamp'].endswith('Z')
        assert resp.headers['Access-Control-Allow-Origin'] == '*'

    def test_distinct_viewers(self, serve):
        base = serve(viewers=ViewerCounter())
        requests.get(f"{base}/api/viewer-count", headers={'User-Agent': 'AgentOne/1'}, timeout=5)
        data = requests.get(f"{base}/api/viewer-count", headers={'User-Agent': 'AgentTwo/1'}, timeout=5).json()
        assert data['count'] == 2

    def test_repeat_polls_count_once(self, serve):
        base = serve()
        for _ in range(3):
            data = requests.get(f"{base}/api/viewer-count", timeout=5).json()
        assert data['count'] == 1

    def test_heartbeat(self, serve):
        viewers = ViewerCounter()
        resp = requests.post(f"{serve(viewers=viewers)}/api/viewer-count", timeout=5)
        assert resp.json() == {'status': 'heartbeat received'}
        assert viewers.total() == 1

    def test_other_methods_rejected(self, serve):
        resp = requests.delete(f"{serve()}/api/viewer-count", timeout=5)
        assert resp.status_code == 405
        assert resp.json() == {'error': 'Method not allowed'}


class TestPlaylistApi:

    def test_no_playlist(self, serve):
        resp = requests.get(f"{serve()}/api/playlist", timeout=5)
        assert resp.status_code == 404
        assert 'error' in resp.json()

    def test_playable_songs_in_order(self, serve, store):
        save_playlist(store)
        data = requests.get(f"{serve()}/api/playlist", timeout=5).json()
        assert [s['youtubeId'] for s in data['songs']] == ['id1', 'id2', 'id3']
        assert data['source'] == 'YouTube'

    def test_shuffled(self, serve, store):
        save_playlist(store, count=10)
        data = requests.get(f"{serve()}/api/playlist?shuffle=1", timeout=5).json()
        assert sorted(s['youtubeId'] for s in data['songs']) == sorted(f'id{i}' for i in range(1, 11))

    def test_unknown_api_route(self, serve):
        resp = requests.get(f"{serve()}/api/nope", timeout=5)
        assert resp.status_code == 404
        assert resp.json() == {'error': 'Not found'}


class TestStatusApi:

    def test_disabled(self, serve):
        assert requests.get(f"{serve()}/api/status", timeout=5).json() == {'enabled': False}

    def test_enabled(self, serve):
        data = requests.get(f"{serve(auto_update=FakeAutoUpdate())}/api/status", timeout=5).json()
        assert data['enabled'] is True
        assert data['source'] == 'youtube'

    def test_real_service_status(self, serve, store):
        service = AutoUpdateService(store=store, runner=lambda name: True)
        data = requests.get(f"{serve(auto_update=service)}/api/status", timeout=5).json()
        assert data['isRunning'] is False
        assert data['source'] == 'both'
