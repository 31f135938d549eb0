"""
Daily playlist refresh.

Runs the YouTube and/or Spotify scraper every day at the configured hour
(03:00 by default), and once at startup when the playlist is missing or
more than a day old. Only one update runs at a time.

Scrapers run as subprocesses so a browser crash can't take the web server
down with it.
"""

import subprocess
import sys
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional

from countrytv.config import PROJECT_ROOT, playlist_file
from countrytv.playlist import PlaylistStore
from countrytv.scrapers import SCRAPER_MODULES

SOURCES = ('youtube', 'spotify', 'both')
STALE_AFTER_HOURS = 24


def scrapers_for(source: str) -> list[str]:
    """Scraper names to run for a source setting, in run order."""
    if source not in SOURCES:
        raise ValueError(f"Unknown playlist source: {source!r} (expected one of {', '.join(SOURCES)})")
    if source == 'both':
        return ['youtube', 'spotify']
    return [source]


def run_scraper_subprocess(name: str) -> bool:
    """Run `python -m countrytv.scrapers.<name>` and echo its output."""
    result = subprocess.run(
        [sys.executable, '-m', SCRAPER_MODULES[name]],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
    )
    if result.stdout:
        print(result.stdout)
    if result.stderr:
        print(f"{name} scraper stderr:\n{result.stderr}", file=sys.stderr)
    return result.returncode == 0


class AutoUpdateService:
    """Schedules scraper runs and guards against overlapping updates."""

    def __init__(self, store: Optional[PlaylistStore] = None, schedule_hour: int = 3,
                 runner: Callable[[str], bool] = run_scraper_subprocess,
                 clock: Callable[[], datetime] = datetime.now):
        self.store = store or PlaylistStore(playlist_file())
        self.schedule_hour = schedule_hour
        self.source = 'both'
        self.last_update: Optional[datetime] = None
        self._runner = runner
        self._clock = clock
        self._is_running = False
        self._guard = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._is_running

    def start(self, source: str = 'both'):
        """Start the daily schedule in the background.

        The scheduler thread first runs an update if the playlist is stale.
        """
        scrapers_for(source)  # validate
        self.source = source

        print("Starting auto-update service...")
        print(f"  Schedule: every day at {self.schedule_hour:02d}:00")
        print(f"  Sources: {source}")

        self._stop.clear()
        self._thread = threading.Thread(target=self._schedule_loop, name='auto-update', daemon=True)
        self._thread.start()

    def stop(self):
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=1)
            self._thread = None

    def _schedule_loop(self):
        self.check_and_run_initial_update()
        while True:
            wait = (self.next_scheduled_update() - self._clock()).total_seconds()
            if self._stop.wait(max(wait, 0)):
                return
            self.update_playlist()

    def check_and_run_initial_update(self) -> bool:
        """Update now if there is no playlist or it is a day old. Returns True if it ran."""
        if not self.store.exists():
            print("[WARN] No playlist found. Running initial update...")
            return self.update_playlist()

        hours = self.store.age_hours()
        if hours is None:
            print("[WARN] Playlist has no readable lastUpdated. Running update now...")
            return self.update_playlist()
        if hours >= STALE_AFTER_HOURS:
            print(f"[WARN] Playlist is {hours:.1f} hours old. Running update now...")
            return self.update_playlist()

        print(f"Playlist is up to date (last update: {hours:.1f} hours ago)")
        return False

    def update_playlist(self) -> bool:
        """Run the configured scrapers. Returns False if an update was already running."""
        with self._guard:
            if self._is_running:
                print("[WARN] Update already in progress, skipping...")
                return False
            self._is_running = True

        try:
            print("\n" + "=" * 60)
            print("Starting playlist update...")
            print(f"  Time: {self._clock():%Y-%m-%d %H:%M:%S}")
            print(f"  Source(s): {self.source}")
            print("=" * 60 + "\n")

            failed = []
            for name in scrapers_for(self.source):
                print(f"Running {name} scraper...\n")
                try:
                    ok = self._runner(name)
                except Exception as e:
                    print(f"[ERROR] {name} scraper crashed: {e}", file=sys.stderr)
                    ok = False
                if not ok:
                    failed.append(name)

            self.last_update = self._clock()

            print("\n" + "=" * 60)
            if failed:
                print(f"Playlist update finished with errors ({', '.join(failed)})")
            else:
                print("Playlist update completed successfully")
            print(f"  Time: {self.last_update:%Y-%m-%d %H:%M:%S}")
            print("=" * 60 + "\n")
            return True
        finally:
            with self._guard:
                self._is_running = False

    def trigger_update(self) -> bool:
        """Manually run an update."""
        print("Manual update triggered")
        return self.update_playlist()

    def next_scheduled_update(self, now: Optional[datetime] = None) -> datetime:
        """Next run: today at the schedule hour if it hasn't passed yet, else tomorrow."""
        now = now or self._clock()
        next_run = now.replace(hour=self.schedule_hour, minute=0, second=0, microsecond=0)
        if now >= next_run:
            next_run += timedelta(days=1)
        return next_run

    def get_status(self) -> dict:
        return {
            'isRunning': self._is_running,
            'lastUpdate': self.last_update.isoformat() if self.last_update else None,
            'nextUpdate': self.next_scheduled_update().isoformat(),
            'source': self.source,
        }
