"""Backoff policies: pure functions from attempt index to sleep milliseconds."""

from typing import Callable

BackoffPolicy = Callable[[int], int]

ASSERTION_BACKOFF_CAP_MS = 1000
BIND_BACKOFF_STEP_MS = 10


def assertion_backoff_ms(attempt: int, cap_ms: int = ASSERTION_BACKOFF_CAP_MS) -> int:
    """Exponential schedule for retried assertions; `attempt` is 0-based."""
    if attempt < 0:
        raise ValueError(f"attempt must be >= 0, got {attempt}")
    # 2**10 already exceeds the default cap; avoid building huge ints
    if attempt >= cap_ms.bit_length():
        return cap_ms
    return min(1 << attempt, cap_ms)


def bind_backoff_ms(attempt: int, step_ms: int = BIND_BACKOFF_STEP_MS) -> int:
    """Linear schedule for bind polling; `attempt` is 1-based."""
    if attempt < 1:
        raise ValueError(f"attempt must be >= 1, got {attempt}")
    return attempt * step_ms
