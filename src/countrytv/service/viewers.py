"""
Live viewer counter.

Each browser polls /api/viewer-count every few seconds; a viewer is active
while its last poll is within the TTL. Viewers are keyed by a short
IP + user-agent fingerprint so reloading the page doesn't count twice.
"""

import threading
import time
from typing import Optional

VIEWER_TTL_SECONDS = 15
SWEEP_INTERVAL_SECONDS = 15


def viewer_id_for(headers, remote_addr: Optional[str]) -> str:
    """Fingerprint a viewer from request headers and the socket address."""
    ip = (headers.get('X-Forwarded-For')
          or headers.get('X-Real-IP')
          or remote_addr
          or 'unknown')
    user_agent = headers.get('User-Agent') or 'unknown'
    return f"{str(ip)[:8]}_{str(user_agent)[:8]}"


class ViewerCounter:
    """In-memory map of viewer id -> last seen time."""

    def __init__(self, ttl: float = VIEWER_TTL_SECONDS, clock=time.time):
        self.ttl = ttl
        self._clock = clock
        self._last_seen: dict[str, float] = {}
        self._lock = threading.Lock()
        self._sweeper: Optional[threading.Thread] = None
        self._stop = threading.Event()

    def touch(self, viewer_id: str, now: Optional[float] = None) -> bool:
        """Record a poll. Returns True if this viewer was not being tracked."""
        now = self._clock() if now is None else now
        with self._lock:
            is_new = viewer_id not in self._last_seen
            self._last_seen[viewer_id] = now
        if is_new:
            print(f"  Viewer connected: {viewer_id}")
        return is_new

    def _is_active(self, seen: float, now: float) -> bool:
        # A viewer last seen exactly ttl ago is inactive but not yet swept
        return seen > now - self.ttl

    def active_count(self, now: Optional[float] = None) -> int:
        now = self._clock() if now is None else now
        with self._lock:
            return sum(1 for seen in self._last_seen.values() if self._is_active(seen, now))

    def total(self) -> int:
        with self._lock:
            return len(self._last_seen)

    def sweep(self, now: Optional[float] = None) -> list[str]:
        """Forget viewers not seen within the TTL. Returns the removed ids."""
        now = self._clock() if now is None else now
        cutoff = now - self.ttl
        with self._lock:
            expired = [vid for vid, seen in self._last_seen.items() if seen < cutoff]
            for vid in expired:
                del self._last_seen[vid]
        for vid in expired:
            print(f"  Viewer disconnected: {vid}")
        return expired

    def start_sweeper(self, interval: float = SWEEP_INTERVAL_SECONDS):
        """Run sweep() every interval seconds on a daemon thread."""
        if self._sweeper and self._sweeper.is_alive():
            return
        self._stop.clear()

        def loop():
            while not self._stop.wait(interval):
                self.sweep()

        self._sweeper = threading.Thread(target=loop, name='viewer-sweeper', daemon=True)
        self._sweeper.start()

    def stop_sweeper(self):
        self._stop.set()
        if self._sweeper:
            self._sweeper.join(timeout=1)
            self._sweeper = None
