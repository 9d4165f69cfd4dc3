"""Composition root for test code.

Builds the default adapters once and exposes the two polling primitives
as plain functions:

    from eventual.toolkit import assert_eventually, expect, wait_for_tcp_bind

    def check():
        expect(server.is_ready(), "server not ready")
        assert server.leader() is not None

    assert_eventually(check, timeout=10)
    port = wait_for_tcp_bind(child.pid, timeout=30)
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache

from eventual.adapters.executable_locator import SearchPathExecutableLocator
from eventual.adapters.retry_tenacity import TenacityPollingAdapter
from eventual.adapters.subprocess_command_runner import SubprocessCommandRunner
from eventual.adapters.system_clock import SystemClock
from eventual.adapters.thread_local_failure_sink import ThreadLocalFailureSink
from eventual.core.config import (
    BindDiscoveryConfig,
    ReportingConfig,
    RetryingAssertionConfig,
)
from eventual.core.managers.bind_discovery import BoundPortDiscovery
from eventual.core.managers.retrying_assertion import Check, RetryingAssertion
from eventual.core.settings import app_settings


@lru_cache(maxsize=None)
def default_failure_sink() -> ThreadLocalFailureSink:
    return ThreadLocalFailureSink(ReportingConfig.from_app_settings(app_settings))


def build_retrying_assertion(sink: ThreadLocalFailureSink | None = None) -> RetryingAssertion:
    clock = SystemClock()
    return RetryingAssertion(
        sink=sink or default_failure_sink(),
        clock=clock,
        retry_port=TenacityPollingAdapter(clock),
        config=RetryingAssertionConfig.from_app_settings(app_settings),
    )


def build_bound_port_discovery() -> BoundPortDiscovery:
    clock = SystemClock()
    runner = SubprocessCommandRunner()
    return BoundPortDiscovery(
        runner=runner,
        locator=SearchPathExecutableLocator(runner),
        clock=clock,
        retry_port=TenacityPollingAdapter(clock),
        config=BindDiscoveryConfig.from_app_settings(app_settings),
    )


def assert_eventually(check: Check, timeout: float | timedelta) -> None:
    build_retrying_assertion().run(check, timeout)


def expect(condition: object, message: str) -> bool:
    return default_failure_sink().expect(condition, message)


def fail(message: str) -> None:
    default_failure_sink().fail(message)


def wait_for_tcp_bind(pid: int, timeout: float | timedelta) -> int:
    return build_bound_port_discovery().wait_for_tcp_bind(pid, timeout)


def wait_for_udp_bind(pid: int, timeout: float | timedelta) -> int:
    return build_bound_port_discovery().wait_for_udp_bind(pid, timeout)
