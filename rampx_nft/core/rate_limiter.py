import asyncio
import time
from collections import deque


class RateLimiter:
    """Sliding-window limiter shared by every OpenSea request of a client.

    Concurrent callers are serialised through a lock so a burst of metadata
    requests cannot all slip past the window check at once.
    """

    def __init__(self, max_requests, time_window, clock=time.monotonic):
        self.max_requests = max_requests
        self.time_window = time_window
        self.requests = deque()
        self._clock = clock
        self._lock = asyncio.Lock()

    def _evict(self, now):
        while self.requests and (now - self.requests[0]) >= self.time_window:
            self.requests.popleft()

    async def acquire(self):
        async with self._lock:
            now = self._clock()
            self._evict(now)
            if len(self.requests) >= self.max_requests:
                sleep_time = self.requests[0] + self.time_window - now
                if sleep_time > 0:
                    await asyncio.sleep(sleep_time)
                now = self._clock()
                self._evict(now)
            self.requests.append(now)
