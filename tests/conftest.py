"""Shared fakes for the polling tests.

FakeClock makes time advance only when something sleeps, so backoff
schedules and deadlines can be asserted exactly.
"""

from typing import Callable, Optional, Sequence

import pytest

from eventual.adapters.retry_tenacity import TenacityPollingAdapter
from eventual.core.interfaces.clock import ClockPort
from eventual.core.interfaces.command_runner import CommandRunnerPort
from eventual.core.models.command import CommandResult


class FakeClock(ClockPort):
    def __init__(self, start: float = 1000.0):
        self.t = start
        self.sleeps: list[float] = []

    def now(self) -> float:
        return self.t

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.t += seconds

    def advance(self, seconds: float) -> None:
        self.t += seconds


class FakeCommandRunner(CommandRunnerPort):
    """Answers commands from per-binary scripts.

    `responders` maps argv[0] to a callable building the CommandResult;
    unknown binaries behave like a missing executable.
    """

    def __init__(self, responders: Optional[dict[str, Callable[[list[str]], CommandResult]]] = None):
        self.responders = responders or {}
        self.calls: list[list[str]] = []

    def run(self, argv: Sequence[str], stdin: str = "") -> CommandResult:
        argv = list(argv)
        self.calls.append(argv)
        responder = self.responders.get(argv[0])
        if responder is None:
            return CommandResult(argv=argv, error=f"failed to start {argv[0]}")
        return responder(argv)

    def calls_to(self, binary: str) -> list[list[str]]:
        return [c for c in self.calls if c[0] == binary]


def ok(argv, stdout: str = "") -> CommandResult:
    return CommandResult(argv=argv, stdout=stdout, returncode=0)


def exited(argv, returncode: int = 1, stderr: str = "") -> CommandResult:
    return CommandResult(
        argv=argv,
        stderr=stderr,
        returncode=returncode,
        error=f"{argv[0]} exited with status {returncode}",
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def retry_port(clock):
    return TenacityPollingAdapter(clock)
