"""Retry helper for transient Notion API failures."""

import logging
import os
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)

# Outside production, waits are shortened so local runs and dev deploys stay snappy
NON_PRODUCTION_MAX_RETRY_AFTER = 1.0
NON_PRODUCTION_MAX_BASE_DELAY = 0.5


def _is_production() -> bool:
    return os.environ.get("APP_ENV", "development") == "production"


def _backoff_delay(error: Exception, attempt: int, base_delay: float) -> float:
    """Work out how long to sleep before the next attempt.

    :param error: The retryable error raised by the last attempt.
    :param attempt: The 1-based number of the attempt that failed.
    :param base_delay: Base delay in seconds for exponential backoff.
    :returns: Delay in seconds.
    """
    production = _is_production()

    retry_after = getattr(error, "retry_after", None)
    if retry_after is not None:
        if production:
            return float(retry_after)
        return min(float(retry_after), NON_PRODUCTION_MAX_RETRY_AFTER)

    if not production:
        base_delay = min(base_delay, NON_PRODUCTION_MAX_BASE_DELAY)
    return base_delay * 2 ** (attempt - 1)


def retry[T](
    operation: Callable[[], T],
    max_attempts: int = 3,
    base_delay: float = 1.0,
    *,
    context: str | None = None,
    sleep: Callable[[float], None] | None = None,
) -> T:
    """Call an operation, retrying it while it fails with a retryable error.

    An exception is only retried when it has a truthy ``retryable`` attribute.
    Anything else propagates on the first occurrence. When attempts run out the
    last error is re-raised as-is.

    :param operation: Zero-argument callable to invoke.
    :param max_attempts: Maximum number of calls, including the first.
    :param base_delay: Base delay in seconds for exponential backoff.
    :param context: Tag naming the operation, used in log messages.
    :param sleep: Sleep function, defaults to time.sleep.
    :returns: The operation's return value.
    :raises ValueError: If max_attempts is less than 1.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    sleep = sleep or time.sleep
    tag = context or getattr(operation, "__name__", "operation")
    attempt = 1

    while True:
        try:
            return operation()
        except Exception as e:
            if not getattr(e, "retryable", False) or attempt >= max_attempts:
                raise

            delay = _backoff_delay(e, attempt, base_delay)
            logger.warning(
                f"[{tag}] attempt {attempt}/{max_attempts} failed: {e}. Retrying in {delay:.2f}s"
            )
            sleep(delay)
            attempt += 1
