import asyncio
import pytest
from utils.rate_limiter import ClientRateLimiter, InMemoryRateLimitStore, get_rate_limiter


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.mark.asyncio
class TestClientRateLimiter:
    """Tests for the per-client fixed window limiter."""

    async def test_admits_up_to_limit(self):
        limiter = ClientRateLimiter(max_requests=3, window_seconds=60, clock=FakeClock())
        results = [await limiter.admit("1.2.3.4") for _ in range(3)]
        assert results == [True, True, True]

    async def test_rejects_request_over_limit(self):
        limiter = ClientRateLimiter(max_requests=3, window_seconds=60, clock=FakeClock())
        for _ in range(3):
            await limiter.admit("1.2.3.4")
        assert await limiter.admit("1.2.3.4") is False

    async def test_rejected_requests_are_not_counted(self):
        store = InMemoryRateLimitStore()
        limiter = ClientRateLimiter(max_requests=2, window_seconds=60, store=store, clock=FakeClock())
        for _ in range(5):
            await limiter.admit("client")
        assert store.get("client").count == 2

    async def test_readmits_after_window_expires(self):
        clock = FakeClock()
        limiter = ClientRateLimiter(max_requests=1, window_seconds=60, clock=clock)
        assert await limiter.admit("client") is True
        assert await limiter.admit("client") is False

        clock.advance(60.5)
        assert await limiter.admit("client") is True

    async def test_clients_are_isolated(self):
        limiter = ClientRateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())
        assert await limiter.admit("a") is True
        assert await limiter.admit("a") is False
        assert await limiter.admit("b") is True

    async def test_retry_after_counts_down(self):
        clock = FakeClock()
        limiter = ClientRateLimiter(max_requests=1, window_seconds=60, clock=clock)
        await limiter.admit("client")
        clock.advance(20)
        assert limiter.retry_after("client") == pytest.approx(40)
        assert limiter.retry_after("unknown") == 0.0

    async def test_prune_drops_expired_windows(self):
        clock = FakeClock()
        store = InMemoryRateLimitStore()
        limiter = ClientRateLimiter(max_requests=5, window_seconds=60, store=store, clock=clock)
        await limiter.admit("old")
        clock.advance(61)
        await limiter.admit("fresh")

        removed = await limiter.prune()

        assert removed == 1
        assert store.get("old") is None
        assert store.get("fresh") is not None

    async def test_expired_windows_swept_once_store_grows(self):
        clock = FakeClock()
        store = InMemoryRateLimitStore()
        limiter = ClientRateLimiter(max_requests=5, window_seconds=60, store=store, clock=clock,
                                    prune_threshold=100)
        for i in range(500):
            await limiter.admit(f"10.0.{i // 256}.{i % 256}")
        assert len(store) == 500

        clock.advance(3600)
        await limiter.admit("192.168.1.1")

        assert len(store) == 1
        assert store.get("192.168.1.1") is not None

    async def test_small_store_is_not_swept(self):
        clock = FakeClock()
        store = InMemoryRateLimitStore()
        limiter = ClientRateLimiter(max_requests=5, window_seconds=60, store=store, clock=clock,
                                    prune_threshold=100)
        await limiter.admit("old")
        clock.advance(61)
        await limiter.admit("fresh")
        assert len(store) == 2

    async def test_concurrent_admits_never_exceed_limit(self):
        limiter = ClientRateLimiter(max_requests=10, window_seconds=60, clock=FakeClock())

        results = await asyncio.gather(*(limiter.admit("k") for _ in range(50)))

        assert results.count(True) == 10
        assert limiter.store.get("k").count == 10


class TestGetRateLimiter:
    def test_returns_same_instance_per_name(self):
        first = get_rate_limiter("scope_a", 5)
        assert get_rate_limiter("scope_a", 5) is first
        assert get_rate_limiter("scope_b", 5) is not first
