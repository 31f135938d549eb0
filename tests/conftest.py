"""
Pytest configuration and shared fixtures
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add source directories to Python path for imports
REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))
sys.path.insert(0, str(REPO_ROOT / "scripts" / "lib"))


@pytest.fixture
def now():
    """A fixed point in time for merge/sweep tests"""
    return datetime(2025, 10, 19, 3, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def playlist_path(tmp_path):
    return tmp_path / "public" / "playlist.json"


@pytest.fixture
def sample_youtube_playlist_html():
    """Rendered YouTube playlist page (trimmed)"""
    return """
    <html><body>
    <ytd-playlist-video-list-renderer>
      <ytd-playlist-video-renderer>
        <a id="video-title" href="/watch?v=abc123&amp;list=PLx&amp;index=1">Luke Combs - Fast Car</a>
      </ytd-playlist-video-renderer>
      <ytd-playlist-video-renderer>
        <a id="video-title" href="/watch?v=def456&amp;list=PLx&amp;index=2">Morgan Wallen: Last Night</a>
      </ytd-playlist-video-renderer>
      <ytd-playlist-video-renderer>
        <a id="video-title" href="/watch?v=ghi789&amp;list=PLx&amp;index=3">Tennessee Whiskey</a>
      </ytd-playlist-video-renderer>
      <ytd-playlist-video-renderer>
        <a id="video-title" href="/shorts/zzz">Private video</a>
      </ytd-playlist-video-renderer>
    </ytd-playlist-video-list-renderer>
    </body></html>
    """


@pytest.fixture
def sample_youtube_search_html():
    """Rendered YouTube search results page (trimmed)"""
    return """
    <html><body>
    <ytd-video-renderer>
      <a id="video-title" href="/watch?v=first01&amp;pp=xyz">Zach Bryan - Something in the Orange</a>
    </ytd-video-renderer>
    <ytd-video-renderer>
      <a id="video-title" href="/watch?v=second2">Something in the Orange (Live)</a>
    </ytd-video-renderer>
    </body></html>
    """


@pytest.fixture
def sample_spotify_html():
    """Rendered Spotify playlist page (trimmed)"""
    return """
    <html><body>
    <div data-testid="tracklist-row">
      <a data-testid="internal-track-link" href="/track/1"><div>Dirt Road Anthem</div></a>
      <span><a href="/artist/9">Jason Aldean</a></span>
    </div>
    <div data-testid="tracklist-row">
      <a href="/track/2">Chicken Fried</a>
      <span><a href="/artist/8">Zac Brown Band</a></span>
    </div>
    <div data-testid="tracklist-row">
      <a data-testid="internal-track-link" href="/track/3">No Artist Row</a>
    </div>
    </body></html>
    """


@pytest.fixture
def sample_wikipedia_html():
    """Billboard number-one country songs table (trimmed)"""
    return """
    <html><body>
    <table class="wikitable">
      <tbody>
        <tr><th>Chart date</th><th>Song</th><th>Artist(s)</th></tr>
        <tr>
          <td>"A Bar Song (Tipsy)"</td>
          <td>Shaboozey<sup>[1]</sup></td>
        </tr>
        <tr>
          <td>"A Bar Song (Tipsy)"</td>
          <td>Shaboozey<sup>[4]</sup></td>
        </tr>
        <tr>
          <td>"Lies Lies Lies"</td>
          <td>Morgan Wallen (featuring nobody)[12]</td>
        </tr>
        <tr>
          <td>No quoted title here</td>
          <td>Someone</td>
        </tr>
        <tr>
          <td>"Love Somebody"</td>
          <td>Morgan Wallen</td>
        </tr>
      </tbody>
    </table>
    </body></html>
    """


@pytest.fixture
def sample_billboard_html():
    """Billboard chart page (trimmed)"""
    return """
    <html><body>
    <h3 id="title-of-a-story">Chart Beat</h3>
    <div class="o-chart-results-list-row-container">
      <ul class="o-chart-results-list-row">
        <li class="lrv-u-width-100p">
          <h3 id="title-of-a-story" class="c-title">
            Love Somebody
          </h3>
          <span class="c-label">
            Morgan Wallen
          </span>
        </li>
      </ul>
    </div>
    <div class="o-chart-results-list-row-container">
      <ul class="o-chart-results-list-row">
        <li class="lrv-u-width-100p">
          <h3 id="title-of-a-story" class="c-title">Texas</h3>
          <span class="c-label">Blake   Shelton</span>
        </li>
      </ul>
    </div>
    <div class="o-chart-results-list-row-container">
      <ul class="o-chart-results-list-row">
        <li class="lrv-u-width-100p">
          <h3 id="title-of-a-story" class="c-title">Whiskey Whiskey</h3>
          <span class="c-label">Moneybagg Yo Featuring Morgan Wallen</span>
        </li>
      </ul>
    </div>
    </body></html>
    """
