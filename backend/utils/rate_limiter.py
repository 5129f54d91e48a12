import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional
from config import logger


@dataclass
class WindowRecord:
    count: int
    reset_time: float


class InMemoryRateLimitStore:
    """Process-local counter store.

    Only valid while the service runs as a single process. A multi-instance
    deployment needs a shared store with atomic increment and expiry exposing
    the same get/set/delete surface.
    """

    def __init__(self):
        self._records: Dict[str, WindowRecord] = {}

    def get(self, key: str) -> Optional[WindowRecord]:
        return self._records.get(key)

    def set(self, key: str, record: WindowRecord) -> None:
        self._records[key] = record

    def delete(self, key: str) -> None:
        self._records.pop(key, None)

    def items(self):
        return list(self._records.items())

    def __len__(self) -> int:
        return len(self._records)


class ClientRateLimiter:
    """Per-client request admission over a fixed window that starts on the first request.

    Expired windows are swept from the store once it tracks more than
    prune_threshold clients, at most once per window.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        store: Optional[InMemoryRateLimitStore] = None,
        clock: Callable[[], float] = time.monotonic,
        prune_threshold: int = 1024,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.store = store if store is not None else InMemoryRateLimitStore()
        self.prune_threshold = prune_threshold
        self._clock = clock
        self._lock = asyncio.Lock()
        self._last_prune: Optional[float] = None

    async def admit(self, client_key: str) -> bool:
        """Return True when the request may proceed; counts it if so."""
        async with self._lock:
            now = self._clock()
            if self._prune_due(now):
                self._drop_expired(now)

            record = self.store.get(client_key)

            if record is None or now > record.reset_time:
                self.store.set(client_key, WindowRecord(count=1, reset_time=now + self.window_seconds))
                return True

            if record.count >= self.max_requests:
                return False

            record.count += 1
            self.store.set(client_key, record)
            return True

    def retry_after(self, client_key: str) -> float:
        record = self.store.get(client_key)
        if record is None:
            return 0.0
        return max(0.0, record.reset_time - self._clock())

    async def prune(self) -> int:
        """Drop records whose window has elapsed."""
        async with self._lock:
            return self._drop_expired(self._clock())

    def _prune_due(self, now: float) -> bool:
        if len(self.store) <= self.prune_threshold:
            return False
        return self._last_prune is None or now - self._last_prune >= self.window_seconds

    def _drop_expired(self, now: float) -> int:
        expired = [key for key, record in self.store.items() if now > record.reset_time]
        for key in expired:
            self.store.delete(key)
        self._last_prune = now
        if expired:
            logger.debug("Pruned %d expired rate limit windows.", len(expired))
        return len(expired)


_rate_limiters: Dict[str, ClientRateLimiter] = {}

def get_rate_limiter(name: str, max_requests: int, window_seconds: float = 60.0) -> ClientRateLimiter:

    if name not in _rate_limiters:
        _rate_limiters[name] = ClientRateLimiter(max_requests, window_seconds)
    return _rate_limiters[name]
