"""Central logging configuration utilities.

`configure_logging` is meant to be called once by a composition root
(the CLI, or a test suite's conftest) and wires separate stdout/stderr
sinks. Library code never mutates global logging; it only emits via
`LoggingPort` or standard module loggers.

Every record gets an `operation` attribute naming the polling loop that
emitted it, taken from a context variable set by `operation_scope`.
"""

from __future__ import annotations

import contextvars
import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

operation_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "operation", default="-"
)

DEFAULT_FORMAT = (
    "[%(asctime)s] %(levelname)s %(name)s %(operation)s: %(message)s"
)


def coerce_level(level: int | str | None) -> int:
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    key = str(level).upper().strip()
    # Python 3.11 mapping helper
    mapping_getter = getattr(logging, "getLevelNamesMapping", None)
    if callable(mapping_getter):
        mapping = mapping_getter()
        if isinstance(mapping, dict) and key in mapping:
            return mapping[key]
    return logging._nameToLevel.get(key, logging.INFO)


@contextmanager
def operation_scope(name: str) -> Iterator[None]:
    """Tag log records emitted inside the block with `name`."""
    token = operation_var.set(name)
    try:
        yield
    finally:
        operation_var.reset(token)


class _OperationFilter(logging.Filter):
    """Inject the current operation name from the contextvar into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - simple
        try:
            record.operation = operation_var.get()
        except LookupError:
            record.operation = "-"
        return True


class _LevelBandFilter(logging.Filter):
    """Pass records whose level lies in [low, high]."""

    def __init__(self, low: int = logging.NOTSET, high: int = logging.CRITICAL):
        super().__init__()
        self.low = low
        self.high = high

    def filter(self, record: logging.LogRecord) -> bool:
        return self.low <= record.levelno <= self.high


def _handler(stream, band: _LevelBandFilter, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(stream=stream)
    handler.addFilter(band)
    handler.addFilter(_OperationFilter())
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    level: int | str | None = None,
    fmt: Optional[str] = None,
    stdout_for_output: bool = False,
) -> None:
    """Install eventual's handlers on the root logger.

    By default DEBUG/INFO go to stdout and WARNING+ to stderr, which suits
    test runners that capture both. With `stdout_for_output` every record
    goes to stderr, leaving stdout to program output such as the port
    printed by `eventual-wait-for-bind`.
    """
    numeric_level = coerce_level(level)
    formatter = logging.Formatter(fmt or DEFAULT_FORMAT)

    root = logging.getLogger()
    root.setLevel(numeric_level)
    # Calling twice must not double every line
    for h in list(root.handlers):
        root.removeHandler(h)

    if stdout_for_output:
        root.addHandler(_handler(sys.stderr, _LevelBandFilter(), formatter))
    else:
        root.addHandler(_handler(sys.stdout, _LevelBandFilter(high=logging.INFO), formatter))
        root.addHandler(_handler(sys.stderr, _LevelBandFilter(low=logging.WARNING), formatter))

    logging.getLogger("eventual").debug(
        "Logging configured level=%s stdout_for_output=%s", numeric_level, stdout_for_output
    )
