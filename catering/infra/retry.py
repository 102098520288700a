# catering/infra/retry.py
import random
import time
from typing import Callable, Optional, TypeVar

from catering.core.logging_config import logger

T = TypeVar("T")


def _sleep_with_jitter(base: float, factor: float, attempt: int, cap: float) -> float:
    # exponential backoff with jitter
    delay = min(base * (factor ** attempt), cap)
    jitter = random.uniform(0, delay * 0.25)
    return delay + jitter


def retry_on(
    fn: Callable[[], T],
    *,
    attempts: int = 3,
    base: float = 0.2,
    factor: float = 2.0,
    cap: float = 2.0,
    is_retryable: Optional[Callable[[Exception], bool]] = None,
    on_retry: Optional[Callable[[int, Exception, float], None]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call fn until it succeeds or attempts run out; the last error is re-raised."""
    if attempts < 1:
        raise ValueError("attempts must be >= 1")

    last_exc: Optional[Exception] = None
    for i in range(attempts):
        try:
            return fn()
        except Exception as e:
            if is_retryable and not is_retryable(e):
                raise
            last_exc = e
            if i == attempts - 1:
                break
            sleep_s = _sleep_with_jitter(base, factor, i, cap)
            if on_retry:
                on_retry(i + 1, e, sleep_s)
            else:
                logger.warning("retrying", attempt=i + 1, sleep_s=round(sleep_s, 2), error=repr(e))
            sleep(sleep_s)
    assert last_exc is not None
    raise last_exc
