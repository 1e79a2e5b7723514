"""Performance Logging.

Decorator for timing coroutine calls (REST requests to the signals
backend) and flagging slow ones.
"""

import functools
import logging
import time
from typing import Any, Awaitable, Callable, Optional, TypeVar

from src.logging_config.config import DEFAULT_LOGGING_CONFIG

T = TypeVar("T")


def log_performance(
    threshold_ms: Optional[float] = None,
    logger_name: Optional[str] = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator that logs how long an async call took.

    Completed calls log at DEBUG, calls slower than the threshold at
    WARNING and failures at ERROR; the exception is re-raised unchanged.

    Example:
        @log_performance(threshold_ms=500)
        async def get_status(self):
            ...
    """
    limit_ms = DEFAULT_LOGGING_CONFIG.slow_threshold_ms if threshold_ms is None else threshold_ms

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        _logger = logging.getLogger(logger_name or func.__module__)
        func_name = func.__qualname__

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            start = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as exc:
                elapsed = (time.perf_counter() - start) * 1000
                _logger.error(
                    "%s failed after %.1fms: %s", func_name, elapsed, type(exc).__name__,
                    extra={"duration_ms": round(elapsed, 2)},
                )
                raise

            elapsed = (time.perf_counter() - start) * 1000
            if elapsed >= limit_ms:
                _logger.warning(
                    "Slow call: %s took %.1fms", func_name, elapsed,
                    extra={"duration_ms": round(elapsed, 2)},
                )
            else:
                _logger.debug(
                    "%s completed in %.1fms", func_name, elapsed,
                    extra={"duration_ms": round(elapsed, 2)},
                )
            return result

        return wrapper

    return decorator
