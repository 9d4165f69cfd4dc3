"""RetryingAssertion: poll a check function until it passes or a deadline elapses.

Flow:
1. Compute the deadline once.
2. With fail-fast reporting disabled, run the check inside a capture window
   on the current thread, retrying with exponential backoff while it fails.
3. Once the deadline passes, restore fail-fast and run the check one last
   time without capturing, so its own failure is what the caller sees.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Callable, Optional

from eventual.core.config import RetryingAssertionConfig
from eventual.core.exceptions import AssertionTimeoutError
from eventual.core.interfaces.clock import ClockPort
from eventual.core.interfaces.failure_sink import FailureSinkPort
from eventual.core.interfaces.retry import RetryPort
from eventual.core.logging_config import operation_scope
from eventual.core.managers.fail_fast import FailFastGuard
from eventual.core.models.deadline import Deadline
from eventual.core.models.failure import Failure, FailureRecord
from eventual.core.settings import logger
from eventual.core.utils.backoff import assertion_backoff_ms

Check = Callable[[], Optional[FailureRecord]]


def _as_record(outcome: object) -> Optional[FailureRecord]:
    # Return values other than a FailureRecord carry no verdict
    return outcome if isinstance(outcome, FailureRecord) else None


class RetryingAssertion:
    """Retries an assertion-style check with exponential backoff.

    A check fails by raising AssertionError, by reporting to the failure
    sink (`sink.expect` / `sink.fail`), or by returning a non-empty
    FailureRecord. Any other exception is not a check failure and
    propagates immediately.
    """

    def __init__(
        self,
        sink: FailureSinkPort,
        clock: ClockPort,
        retry_port: RetryPort,
        config: Optional[RetryingAssertionConfig] = None,
    ) -> None:
        self._sink = sink
        self._clock = clock
        self._retry = retry_port
        self.config = config or RetryingAssertionConfig()

    def backoff_seconds(self, attempt_number: int) -> float:
        """Sleep after the `attempt_number`-th (1-based) failed attempt."""
        return assertion_backoff_ms(attempt_number - 1, self.config.backoff_cap_ms) / 1000

    def run(self, check: Check, timeout: float | timedelta) -> None:
        deadline = Deadline.after(self._clock, timeout)
        attempts = 0

        def attempt() -> Optional[FailureRecord]:
            # None signals that the deadline passed before this attempt started
            nonlocal attempts
            if deadline.expired(self._clock):
                return None
            attempts += 1
            return self._run_captured(check)

        with operation_scope("assert_eventually"):
            with FailFastGuard(self._sink.config):
                record = self._retry.execute(
                    attempt,
                    should_retry=lambda r: r is not None and r.failed,
                    backoff=self.backoff_seconds,
                )

            if record is not None:
                logger.debug(f"[assert:eventually] passed attempts={attempts}")
                return

            logger.debug(
                f"[assert:eventually] deadline reached timeout={deadline.timeout}s "
                f"attempts={attempts}; running final attempt"
            )
            self._run_final(check, deadline, attempts)

    def _run_captured(self, check: Check) -> FailureRecord:
        token = self._sink.begin_capture()
        outcome: Optional[FailureRecord] = None
        try:
            outcome = check()
        except AssertionError as exc:
            self._sink.report(Failure.from_exception(exc))
        finally:
            record = self._sink.end_capture(token)
        record = record.merged(_as_record(outcome))
        if record.failed:
            logger.debug(
                f"[assert:eventually] attempt failed failures={len(record)} first={record.failures[0]}"
            )
        return record

    def _run_final(self, check: Check, deadline: Deadline, attempts: int) -> None:
        note = (
            f"Timed out after {deadline.timeout}s waiting for assertion to pass "
            f"({attempts} attempts)"
        )
        try:
            outcome = check()
        except AssertionError as exc:
            exc.add_note(note)
            raise

        outcome = _as_record(outcome)
        if outcome is not None and outcome.failed:
            raise AssertionTimeoutError(
                deadline.timeout,
                attempts,
                message=outcome.summary(),
                diagnostic=note,
            )

        # With no captured attempt there was nothing to race against
        if attempts == 0 or self.config.pass_on_final_attempt:
            logger.debug("[assert:eventually] final attempt passed after deadline")
            return

        raise AssertionTimeoutError(deadline.timeout, attempts, diagnostic=note)
