"""BoundPortDiscovery: learn which port a freshly spawned process bound.

Processes generally do not expose the port they bind to, and reading it
out of /proc means re-implementing a good part of lsof. Instead lsof is
run in a loop against the child's pid: it typically takes the child a
while to initialise and bind, so the first runs are expected to fail.
"""

from __future__ import annotations

import os
from datetime import timedelta
from typing import Optional

from eventual.core.config import BindDiscoveryConfig
from eventual.core.exceptions import (
    BindDiscoveryError,
    CommandFailedError,
    InvariantViolationError,
)
from eventual.core.interfaces.clock import ClockPort
from eventual.core.interfaces.command_runner import CommandRunnerPort
from eventual.core.interfaces.executable_locator import ExecutableLocatorPort
from eventual.core.interfaces.retry import RetryPort
from eventual.core.logging_config import operation_scope
from eventual.core.models.bind import BindQueryResult, ProtocolKind
from eventual.core.models.command import CommandResult
from eventual.core.models.deadline import Deadline
from eventual.core.settings import logger
from eventual.core.utils.backoff import bind_backoff_ms
from eventual.core.utils.lsof_output import build_lsof_command, decode_bind_output

MAX_PORT = 65535


class BoundPortDiscovery:
    """Polls lsof until it reports the socket a process bound.

    Attributes:
        config: Immutable configuration (tool lookup, backoff step, invariant handling)
    """

    def __init__(
        self,
        runner: CommandRunnerPort,
        locator: ExecutableLocatorPort,
        clock: ClockPort,
        retry_port: RetryPort,
        config: Optional[BindDiscoveryConfig] = None,
    ) -> None:
        self._runner = runner
        self._locator = locator
        self._clock = clock
        self._retry = retry_port
        self.config = config or BindDiscoveryConfig()

    def wait_for_tcp_bind(self, pid: int, timeout: float | timedelta) -> int:
        return self.wait_for_bind(pid, ProtocolKind.TCP, timeout)

    def wait_for_udp_bind(self, pid: int, timeout: float | timedelta) -> int:
        return self.wait_for_bind(pid, ProtocolKind.UDP, timeout)

    def wait_for_bind(
        self, pid: int, protocol: ProtocolKind, timeout: float | timedelta
    ) -> int:
        """Return the port `pid` bound for `protocol`, raising BindDiscoveryError otherwise."""
        return self.query(pid, protocol, timeout).unwrap()

    def query(
        self, pid: int, protocol: ProtocolKind, timeout: float | timedelta
    ) -> BindQueryResult:
        """Like `wait_for_bind`, but returns discovery errors instead of raising them.

        An out-of-range port is the exception: it aborts the process unless
        `config.abort_on_invalid_port` is off, in which case the
        InvariantViolationError is raised rather than returned.
        """
        with operation_scope(f"wait_for_bind pid={pid}"):
            try:
                port = self._discover(pid, ProtocolKind(protocol), timeout)
            except InvariantViolationError:
                raise
            except BindDiscoveryError as exc:
                logger.debug(f"[bind:wait] failed pid={pid} error={exc.message}")
                return BindQueryResult(error=exc)
            return BindQueryResult(port=port)

    def backoff_seconds(self, attempt_number: int) -> float:
        return bind_backoff_ms(attempt_number, self.config.backoff_step_ms) / 1000

    def _discover(self, pid: int, protocol: ProtocolKind, timeout: float | timedelta) -> int:
        lsof = self._locator.find(self.config.tool_name, self.config.search_paths)
        cmd = build_lsof_command(lsof, pid, protocol)

        deadline = Deadline.after(self._clock, timeout)
        result: CommandResult = self._retry.execute(
            self._runner.run,
            cmd,
            should_retry=lambda r: not r.ok,
            backoff=self.backoff_seconds,
            deadline=deadline,
        )
        if not result.ok:
            logger.debug(
                f"[bind:wait] giving up pid={pid} protocol={protocol.value} error={result.error}"
            )
            raise CommandFailedError(result, pid=pid, protocol=protocol.value)

        record = decode_bind_output(result.stdout.rstrip(), pid=pid, protocol=protocol)
        self._check_port_range(record.port, pid, protocol)
        logger.debug(f"[bind:wait] determined bound port pid={pid} port={record.port}")
        return record.port

    def _check_port_range(self, port: int, pid: int, protocol: ProtocolKind) -> None:
        if 0 < port <= MAX_PORT:
            return
        logger.critical(f"[bind:wait] parsed invalid port: {port} pid={pid}")
        if self.config.abort_on_invalid_port:
            os.abort()
        raise InvariantViolationError(port, pid=pid, protocol=protocol.value)
