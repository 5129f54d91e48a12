import asyncio
import time
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Tuple, Type
from config import logger
from exceptions import CircuitBreakerOpenException


class CircuitState(Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreaker:
    """
    Guards calls to a flaky upstream.

    After failure_threshold consecutive tracked failures the circuit opens and
    calls fail immediately with CircuitBreakerOpenException. Once
    recovery_timeout has elapsed the circuit goes half-open and admits one
    trial call at a time; other callers are rejected until its outcome closes
    or re-opens the circuit. Untracked exceptions pass through without
    touching the counters.
    """

    def __init__(
        self,
        failure_threshold: int = 5,
        recovery_timeout: float = 60.0,
        tracked_exceptions: Tuple[Type[BaseException], ...] = (Exception,),
        name: str = "upstream",
        clock: Callable[[], float] = time.monotonic,
    ):
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.tracked_exceptions = tracked_exceptions
        self.name = name
        self._clock = clock

        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._opened_at: Optional[float] = None
        self._trial_in_flight = False
        self._lock = asyncio.Lock()

    @property
    def state(self) -> CircuitState:
        return self._state

    @property
    def failure_count(self) -> int:
        return self._failure_count

    def reset(self) -> None:
        self._failure_count = 0
        self._opened_at = None
        self._trial_in_flight = False
        self._state = CircuitState.CLOSED

    def _transition(self, new_state: CircuitState) -> None:
        if new_state is self._state:
            return
        log = logger.error if new_state is CircuitState.OPEN else logger.info
        log(
            "Circuit %s: %s -> %s (failures=%d)",
            self.name, self._state.value, new_state.value, self._failure_count,
            extra={"circuit_breaker": self.name, "state": new_state.value},
        )
        self._state = new_state
        self._opened_at = self._clock() if new_state is CircuitState.OPEN else None

    async def _admit(self) -> None:
        async with self._lock:
            if self._state is CircuitState.OPEN and self._clock() - self._opened_at >= self.recovery_timeout:
                self._transition(CircuitState.HALF_OPEN)
            if self._state is CircuitState.CLOSED:
                return
            if self._state is CircuitState.HALF_OPEN and not self._trial_in_flight:
                self._trial_in_flight = True
                return
            logger.warning("Circuit %s is %s; rejecting call.", self.name, self._state.value)
            raise CircuitBreakerOpenException(self.name, self._failure_count)

    async def _record(self, failed: bool) -> None:
        async with self._lock:
            self._trial_in_flight = False
            if not failed:
                self._failure_count = 0
                self._transition(CircuitState.CLOSED)
                return
            self._failure_count += 1
            if self._state is CircuitState.HALF_OPEN or self._failure_count >= self.failure_threshold:
                self._transition(CircuitState.OPEN)

    async def call(self, func: Callable[..., Awaitable[Any]], *args, **kwargs) -> Any:
        await self._admit()
        try:
            result = await func(*args, **kwargs)
        except self.tracked_exceptions:
            await self._record(failed=True)
            raise
        except BaseException:
            # Untracked outcomes leave the counters alone but free the trial slot.
            self._trial_in_flight = False
            raise
        await self._record(failed=False)
        return result
