"""Retry with exponential backoff around an unreliable zero-argument operation."""

import logging
import time
from typing import Callable, Optional, TypeVar

logger = logging.getLogger("profile_analyzer.retry")

T = TypeVar("T")


def exponential_backoff(base_delay: float) -> Callable[[int], float]:
    """Delay before the retry following attempt ``attempt`` (0-based).

    No jitter and no upper bound: a large attempt count grows the delay without limit.
    """
    return lambda attempt: base_delay * (2 ** attempt)


def retry_with_backoff(
    operation: Callable[[], T],
    max_attempts: int = 3,
    base_delay: float = 1.0,
    *,
    delay_fn: Optional[Callable[[int], float]] = None,
    sleep: Callable[[float], None] = time.sleep,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
) -> T:
    """Call ``operation`` until it succeeds or ``max_attempts`` calls have failed.

    The exception of the final attempt is re-raised unmodified. Exceptions not
    listed in ``retry_on`` propagate immediately.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    delay_for = delay_fn or exponential_backoff(base_delay)

    for attempt in range(max_attempts):
        try:
            return operation()
        except retry_on as e:
            if attempt == max_attempts - 1:
                logger.warning("Giving up after %d attempts: %s", max_attempts, e)
                raise
            delay = delay_for(attempt)
            logger.info("Retry %d/%d in %.2fs after error: %s", attempt + 1, max_attempts, delay, e)
            sleep(delay)

    raise AssertionError("unreachable")
