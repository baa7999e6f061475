"""Per-key cooldown used to throttle repeated submissions of the same repository URL."""

from __future__ import annotations

import time
from typing import Callable, Dict


class CooldownTracker:
    """
    Remembers when each key was last accepted.

    Entries older than the window are evicted on every call, so the map only
    ever holds keys seen within the last ``window_seconds``. The check and the
    update are not atomic across concurrent requests: two near-simultaneous
    submissions of the same key can both pass.
    """

    def __init__(self, window_seconds: float = 5.0, clock: Callable[[], float] = time.monotonic):
        self.window_seconds = window_seconds
        self._clock = clock
        self._last_seen: Dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._last_seen)

    def _evict(self, now: float) -> None:
        expired = [key for key, seen in self._last_seen.items() if now - seen >= self.window_seconds]
        for key in expired:
            del self._last_seen[key]

    def try_acquire(self, key: str) -> bool:
        """Accept ``key`` (and restart its window) unless it was accepted within the window."""
        now = self._clock()
        self._evict(now)
        if key in self._last_seen:
            return False
        self._last_seen[key] = now
        return True

    def retry_after(self, key: str) -> float:
        """Seconds until ``key`` may be accepted again (0 when it already may)."""
        seen = self._last_seen.get(key)
        if seen is None:
            return 0.0
        return max(0.0, self.window_seconds - (self._clock() - seen))
