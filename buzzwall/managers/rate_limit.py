from __future__ import annotations
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict

WINDOW_SEC = 60.0


@dataclass
class RateLimitEntry:
    count: int
    window_reset_at: float  # clock seconds


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int


class RateLimiter:
    """Fixed-window request counter per client id (usually the caller's IP)."""

    def __init__(
        self,
        max_requests: int,
        window_sec: float = WINDOW_SEC,
        clock: Callable[[], float] = time.time,
    ):
        self.max_requests = max_requests
        self.window_sec = window_sec
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[str, RateLimitEntry] = {}

    def check(self, client_id: str) -> RateLimitDecision:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(client_id)
            if entry is None or now >= entry.window_reset_at:
                self._entries[client_id] = RateLimitEntry(count=1, window_reset_at=now + self.window_sec)
                return RateLimitDecision(allowed=True, remaining=max(0, self.max_requests - 1))
            if entry.count >= self.max_requests:
                # refused calls do not keep counting
                return RateLimitDecision(allowed=False, remaining=0)
            entry.count += 1
            return RateLimitDecision(allowed=True, remaining=self.max_requests - entry.count)

    def sweep(self) -> int:
        """Drop entries whose window has elapsed. Returns how many were removed."""
        now = self._clock()
        with self._lock:
            stale = [cid for cid, e in self._entries.items() if now >= e.window_reset_at]
            for cid in stale:
                del self._entries[cid]
            return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
