from abc import ABC, abstractmethod


class ClockPort(ABC):
    @abstractmethod
    def now(self) -> float:
        """Monotonic time in seconds. Only differences are meaningful."""
        pass

    @abstractmethod
    def sleep(self, seconds: float) -> None:
        """Block the calling thread for `seconds`."""
        pass
