from __future__ import annotations

from datetime import timedelta

from pydantic import BaseModel

from eventual.core.interfaces.clock import ClockPort


def to_seconds(timeout: float | timedelta) -> float:
    if isinstance(timeout, timedelta):
        return timeout.total_seconds()
    return float(timeout)


class Deadline(BaseModel):
    """Absolute point on the monotonic clock after which polling stops.

    Computed once at entry of a retry loop and never moved.
    """

    at: float
    timeout: float

    model_config = {"frozen": True}

    @classmethod
    def after(cls, clock: ClockPort, timeout: float | timedelta) -> "Deadline":
        seconds = to_seconds(timeout)
        return cls(at=clock.now() + seconds, timeout=seconds)

    def expired(self, clock: ClockPort) -> bool:
        return clock.now() >= self.at

    def remaining(self, clock: ClockPort) -> float:
        return max(0.0, self.at - clock.now())
