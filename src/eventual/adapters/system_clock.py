import time

from eventual.core.interfaces.clock import ClockPort


class SystemClock(ClockPort):
    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)
