from typing import Any, Callable, Optional

from tenacity import RetryCallState, Retrying, retry_if_result, stop_never
from tenacity.stop import stop_base
from tenacity.wait import wait_base

from eventual.core.interfaces.clock import ClockPort
from eventual.core.models.deadline import Deadline
from eventual.core.settings import logger


class stop_at_deadline(stop_base):
    """Stop once the injected clock reaches `deadline`."""

    def __init__(self, deadline: Deadline, clock: ClockPort) -> None:
        self.deadline = deadline
        self.clock = clock

    def __call__(self, retry_state: RetryCallState) -> bool:
        return self.deadline.expired(self.clock)


class wait_policy(wait_base):
    """Wait whatever a backoff policy returns for the attempt just made."""

    def __init__(self, policy: Callable[[int], float]) -> None:
        self.policy = policy

    def __call__(self, retry_state: RetryCallState) -> float:
        return self.policy(retry_state.attempt_number)


def _return_last_result(retry_state: RetryCallState) -> Any:
    return retry_state.outcome.result()


def _log_before_sleep(retry_state: RetryCallState) -> None:
    sleep = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.debug(
        f"[retry] attempt={retry_state.attempt_number} failed; sleeping {sleep:.3f}s"
    )


class TenacityPollingAdapter:
    """Tenacity-based polling adapter implementing RetryPort.

    Sleeps go through the injected clock, so tests can drive time. A fresh
    `Retrying` is built per call; the adapter itself holds no loop state.
    """

    def __init__(self, clock: ClockPort) -> None:
        self.clock = clock

    def execute(
        self,
        func: Callable[..., Any],
        *args,
        should_retry: Callable[[Any], bool],
        backoff: Callable[[int], float],
        deadline: Optional[Deadline] = None,
        **kwargs,
    ) -> Any:
        retrying = Retrying(
            stop=stop_at_deadline(deadline, self.clock) if deadline else stop_never,
            wait=wait_policy(backoff),
            retry=retry_if_result(should_retry),
            sleep=self.clock.sleep,
            before_sleep=_log_before_sleep,
            retry_error_callback=_return_last_result,
        )
        return retrying(func, *args, **kwargs)
