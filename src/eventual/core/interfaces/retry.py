from typing import Any, Callable, Optional, Protocol

from eventual.core.models.deadline import Deadline


class RetryPort(Protocol):
    """Abstract polling interface for synchronous operations.

    Implementations call `func` until `should_retry` rejects its result,
    sleeping `backoff(attempt_number)` seconds in between. The contract keeps
    the core decoupled from a specific library (tenacity/backoff).
    """
    def execute(
        self,
        func: Callable[..., Any],
        *args,
        should_retry: Callable[[Any], bool],
        backoff: Callable[[int], float],
        deadline: Optional[Deadline] = None,
        **kwargs,
    ) -> Any:  # pragma: no cover - protocol
        """Execute a callable with polling semantics.

        Args:
            func: Callable returning a result.
            should_retry: Predicate on the result; True asks for another attempt.
            backoff: Maps the 1-based number of the attempt just made to seconds of sleep.
            deadline: When given, a retryable result seen at or after it is returned as-is.
            *args/**kwargs: Passed to the callable.
        Returns:
            The first result not asking for a retry, or the last one once the deadline passed.
        Raises:
            Propagates any exception raised by the callable; exceptions are not retried.
        """
        ...
