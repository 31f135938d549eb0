"""Tests for configuration loading."""

import os
from pathlib import Path

from countrytv import config
from countrytv.config import SourcesConfig, load_env_file, load_sources_config, playlist_file


class TestSourcesConfig:

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_sources_config(tmp_path / 'nope.yaml') == SourcesConfig()

    def test_partial_file(self, tmp_path):
        path = tmp_path / 'sources.yaml'
        path.write_text("wikipedia:\n  year: 2024\n  limit: 3\nschedule:\n  hour: 5\n")

        cfg = load_sources_config(path)

        assert cfg.wikipedia_year == 2024
        assert cfg.wikipedia_limit == 3
        assert cfg.schedule_hour == 5
        assert cfg.youtube_playlist == SourcesConfig().youtube_playlist
        assert cfg.billboard_limit == 5

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'sources.yaml'
        path.write_text("")
        assert load_sources_config(path) == SourcesConfig()

    def test_manual_section(self, tmp_path):
        path = tmp_path / 'sources.yaml'
        path.write_text("manual:\n  video_ids: [aaa, bbb]\n  playlist: null\n")

        cfg = load_sources_config(path)

        assert cfg.manual_video_ids == ['aaa', 'bbb']
        assert cfg.manual_playlist is None

    def test_shipped_config_matches_defaults(self):
        shipped = Path(__file__).parent.parent / 'config' / 'sources.yaml'
        assert load_sources_config(shipped) == SourcesConfig()


class TestEnvFile:

    def test_loads_values(self, tmp_path, monkeypatch):
        monkeypatch.delenv('COUNTRYTV_TEST_KEY', raising=False)
        monkeypatch.delenv('COUNTRYTV_TEST_QUOTED', raising=False)
        env_file = tmp_path / '.env'
        env_file.write_text(
            "# comment\n"
            "COUNTRYTV_TEST_KEY=plain\n"
            "COUNTRYTV_TEST_QUOTED=\"quoted value\"\n"
            "not a pair\n"
        )

        load_env_file([env_file])

        assert os.environ['COUNTRYTV_TEST_KEY'] == 'plain'
        assert os.environ['COUNTRYTV_TEST_QUOTED'] == 'quoted value'
        monkeypatch.delenv('COUNTRYTV_TEST_KEY')
        monkeypatch.delenv('COUNTRYTV_TEST_QUOTED')

    def test_does_not_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv('COUNTRYTV_TEST_KEY', 'from-env')
        env_file = tmp_path / '.env'
        env_file.write_text("COUNTRYTV_TEST_KEY=from-file\n")

        load_env_file([env_file])

        assert os.environ['COUNTRYTV_TEST_KEY'] == 'from-env'

    def test_missing_files_ignored(self, tmp_path):
        load_env_file([tmp_path / 'missing.env'])


class TestPlaylistFile:

    def test_default_location(self, monkeypatch):
        monkeypatch.delenv('COUNTRYTV_PLAYLIST_FILE', raising=False)
        assert playlist_file() == config.PUBLIC_DIR / 'playlist.json'

    def test_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv('COUNTRYTV_PLAYLIST_FILE', str(tmp_path / 'p.json'))
        assert playlist_file() == tmp_path / 'p.json'
