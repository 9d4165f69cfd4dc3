"""Failure sink port.

A sink receives failure signals raised by check code. While a capture
window is open on the current thread, failures are recorded and handed
back by `end_capture`; outside a window they go down the normal reporting
path and surface as an AssertionError.
"""

from abc import ABC, abstractmethod
from typing import Optional

from eventual.core.config import ReportingConfig
from eventual.core.models.failure import CaptureToken, Failure, FailureRecord


class FailureSinkPort(ABC):
    @property
    @abstractmethod
    def config(self) -> ReportingConfig:
        """Reporting configuration (fail-fast mode) this sink honours."""
        pass

    @abstractmethod
    def begin_capture(self) -> CaptureToken:
        pass

    @abstractmethod
    def end_capture(self, token: CaptureToken) -> FailureRecord:
        pass

    @abstractmethod
    def report(self, failure: Failure) -> None:
        pass

    def fail(self, message: str, location: Optional[str] = None) -> None:
        self.report(Failure(message=message, location=location))

    def expect(self, condition: object, message: str) -> bool:
        """Soft assertion: report `message` if `condition` is falsy and keep going."""
        if not condition:
            self.fail(message)
            return False
        return True
