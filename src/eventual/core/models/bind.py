from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, model_validator

from eventual.core.exceptions import BindDiscoveryError


class ProtocolKind(str, Enum):
    TCP = "tcp"
    UDP = "udp"

    @property
    def lsof_filter(self) -> str:
        """Argument for `lsof -i`, restricted to IPv4 sockets."""
        return f"4{self.name}"


class BindQueryResult(BaseModel):
    """Either a validated port in [1, 65535] or the error that prevented finding one."""

    port: Optional[int] = None
    error: Optional[BindDiscoveryError] = None

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @model_validator(mode="after")
    def _exactly_one(self) -> "BindQueryResult":
        if (self.port is None) == (self.error is None):
            raise ValueError("BindQueryResult needs exactly one of port or error")
        if self.port is not None and not 0 < self.port < 65536:
            raise ValueError(f"port out of range: {self.port}")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> int:
        if self.error is not None:
            raise self.error
        return self.port
