"""Tests for video title and URL parsing."""

import pytest

from countrytv.scrapers.titles import (
    UNKNOWN_ARTIST,
    clean_artist,
    extract_video_id,
    parse_video_title,
)


class TestParseVideoTitle:

    @pytest.mark.parametrize("raw,expected", [
        ("Luke Combs - Fast Car", ("Luke Combs", "Fast Car")),
        ("Morgan Wallen: Last Night", ("Morgan Wallen", "Last Night")),
        ("  Zach Bryan -  Something in the Orange ", ("Zach Bryan", "Something in the Orange")),
        ("Chris Stapleton - Tennessee Whiskey - Live", ("Chris Stapleton", "Tennessee Whiskey - Live")),
    ])
    def test_split(self, raw, expected):
        assert parse_video_title(raw) == expected

    def test_dash_takes_priority_over_colon(self):
        assert parse_video_title("Live: Artist - Song") == ("Live: Artist", "Song")

    def test_no_separator(self):
        assert parse_video_title("Tennessee Whiskey") == (UNKNOWN_ARTIST, "Tennessee Whiskey")

    def test_hyphen_without_spaces_is_not_a_separator(self):
        assert parse_video_title("Half-Time Show") == (UNKNOWN_ARTIST, "Half-Time Show")

    def test_empty(self):
        assert parse_video_title(None) == (UNKNOWN_ARTIST, "")


class TestExtractVideoId:

    @pytest.mark.parametrize("url,expected", [
        ("/watch?v=abc123", "abc123"),
        ("/watch?v=abc123&list=PLx&index=2", "abc123"),
        ("https://www.youtube.com/watch?feature=share&v=xyz_-9", "xyz_-9"),
        ("/watch?v=abc#t=30", "abc"),
    ])
    def test_found(self, url, expected):
        assert extract_video_id(url) == expected

    @pytest.mark.parametrize("url", ["", None, "/shorts/zzz", "/playlist?list=PLx"])
    def test_missing(self, url):
        assert extract_video_id(url) is None


class TestCleanArtist:

    def test_footnotes_and_parentheses(self):
        assert clean_artist("Morgan Wallen (featuring Tate McRae)[12]") == "Morgan Wallen"

    def test_whitespace(self):
        assert clean_artist("  Post   Malone\n") == "Post Malone"

    def test_plain(self):
        assert clean_artist("Shaboozey") == "Shaboozey"
