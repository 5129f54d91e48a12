import asyncio
import logging
from typing import Awaitable, Callable, TypeVar, Any
from functools import wraps

logger = logging.getLogger(__name__)

T = TypeVar('T')

class RetryConfig:
    MAX_ATTEMPTS = 2
    BASE_DELAY = 0.5
    MAX_DELAY = 4.0
    EXPONENTIAL_BASE = 2

async def call_with_retry(
    func: Callable[..., Awaitable[T]],
    *args,
    max_attempts: int = RetryConfig.MAX_ATTEMPTS,
    base_delay: float = RetryConfig.BASE_DELAY,
    max_delay: float = RetryConfig.MAX_DELAY,
    exponential_base: float = RetryConfig.EXPONENTIAL_BASE,
    exceptions: tuple = (Exception,),
    **kwargs
) -> T:
    """Await func, retrying with exponential backoff on the given exceptions."""
    max_attempts = max(1, max_attempts)

    for attempt in range(max_attempts):
        try:
            return await func(*args, **kwargs)
        except exceptions as e:
            if attempt == max_attempts - 1:
                if max_attempts > 1:
                    logger.error(
                        f"Function {func.__name__} failed after {max_attempts} attempts: {e}"
                    )
                raise

            delay = min(base_delay * (exponential_base ** attempt), max_delay)
            logger.warning(
                f"Function {func.__name__} failed (attempt {attempt + 1}/{max_attempts}), "
                f"retrying in {delay:.2f}s: {e}"
            )
            await asyncio.sleep(delay)

def async_retry(
    max_attempts: int = RetryConfig.MAX_ATTEMPTS,
    base_delay: float = RetryConfig.BASE_DELAY,
    max_delay: float = RetryConfig.MAX_DELAY,
    exponential_base: float = RetryConfig.EXPONENTIAL_BASE,
    exceptions: tuple = (Exception,)
):

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            return await call_with_retry(
                func,
                *args,
                max_attempts=max_attempts,
                base_delay=base_delay,
                max_delay=max_delay,
                exponential_base=exponential_base,
                exceptions=exceptions,
                **kwargs
            )

        return wrapper
    return decorator
