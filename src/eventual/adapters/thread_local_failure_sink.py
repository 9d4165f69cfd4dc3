import threading
from typing import Optional

from eventual.core.config import ReportingConfig
from eventual.core.exceptions import FailFastError, FailureSinkError
from eventual.core.interfaces.failure_sink import FailureSinkPort
from eventual.core.models.failure import CaptureToken, Failure, FailureRecord


class ThreadLocalFailureSink(FailureSinkPort):
    """Failure sink whose capture windows only intercept the current thread.

    Each thread keeps its own stack of open windows, so windows nest and a
    failure reported from another thread is never recorded here; it takes
    the normal path in that thread instead.
    """

    def __init__(self, config: Optional[ReportingConfig] = None):
        self._config = config or ReportingConfig()
        self._local = threading.local()

    @property
    def config(self) -> ReportingConfig:
        return self._config

    def _stack(self) -> list[list[Failure]]:
        stack = getattr(self._local, "stack", None)
        if stack is None:
            stack = self._local.stack = []
        return stack

    def capturing(self) -> bool:
        return bool(self._stack())

    def begin_capture(self) -> CaptureToken:
        stack = self._stack()
        stack.append([])
        return CaptureToken(thread_id=threading.get_ident(), depth=len(stack))

    def end_capture(self, token: CaptureToken) -> FailureRecord:
        if token.thread_id != threading.get_ident():
            raise FailureSinkError(
                "capture window closed from a different thread",
                diagnostic=f"opened on thread {token.thread_id}",
            )
        stack = self._stack()
        if len(stack) != token.depth:
            raise FailureSinkError(
                f"capture windows closed out of order: token depth {token.depth}, open {len(stack)}"
            )
        return FailureRecord(failures=stack.pop())

    def report(self, failure: Failure) -> None:
        if self._config.fail_fast:
            raise FailFastError(str(failure))
        stack = self._stack()
        if stack:
            stack[-1].append(failure)
            return
        raise AssertionError(str(failure))
