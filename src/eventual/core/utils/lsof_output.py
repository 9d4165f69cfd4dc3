"""Decoder for `lsof -Ffn` reports of a single bound socket.

With `-Ffn` lsof prints one field per line, each prefixed by its field
letter. For a process holding exactly one matching socket that is:

    p19730
    f123
    n*:41254

i.e. the pid, the file descriptor and the bind address. Only the port in
the last line is of interest; the first two are kept as raw strings.
"""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel

from eventual.core.exceptions import MalformedOutputError
from eventual.core.models.bind import ProtocolKind

WILDCARD_PREFIX = "n*:"
EXPECTED_LINES = 3
INT32_MAX = 2**31 - 1
INT32_MIN = -(2**31)

_DECIMAL = re.compile(r"\s*[+-]?\d+\s*")


class LsofBindRecord(BaseModel):
    pid_field: str
    fd_field: str
    port: int

    model_config = {"frozen": True}


def build_lsof_command(lsof: str, pid: int, protocol: ProtocolKind) -> list[str]:
    """Command line listing the `protocol` sockets of `pid` in field output mode."""
    return [
        lsof, "-wbnP", "-Ffn",
        "-p", str(pid),
        "-a", "-i", protocol.lsof_filter,
    ]


def _parse_int32(text: str) -> Optional[int]:
    if not _DECIMAL.fullmatch(text):
        return None
    value = int(text)
    if not INT32_MIN <= value <= INT32_MAX:
        return None
    return value


def decode_bind_output(
    output: str,
    pid: Optional[int] = None,
    protocol: Optional[ProtocolKind] = None,
) -> LsofBindRecord:
    """Decode trimmed lsof output into a record carrying a positive port.

    Raises MalformedOutputError with the raw output on any deviation. The
    upper bound of the port is not checked here.
    """
    proto = protocol.value if protocol else None

    def malformed(reason: str) -> MalformedOutputError:
        return MalformedOutputError(output, reason, pid=pid, protocol=proto)

    lines = output.split("\n")
    if len(lines) != EXPECTED_LINES:
        raise malformed(f"expected {EXPECTED_LINES} lines, got {len(lines)}")

    pid_field, fd_field, address = lines
    if not address.startswith(WILDCARD_PREFIX):
        raise malformed(f"bind address does not start with '{WILDCARD_PREFIX}'")

    port = _parse_int32(address[len(WILDCARD_PREFIX):])
    if port is None:
        raise malformed("bind port is not a 32-bit decimal integer")
    if port <= 0:
        raise malformed(f"bind port must be positive, got {port}")

    return LsofBindRecord(pid_field=pid_field, fd_field=fd_field, port=port)
