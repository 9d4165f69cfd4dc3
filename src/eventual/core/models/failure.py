"""Failure records produced by one invocation of a check function."""

from __future__ import annotations

import traceback
from typing import Optional

from pydantic import BaseModel, Field


class Failure(BaseModel):
    message: str
    location: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def from_exception(cls, exc: BaseException) -> "Failure":
        """Build a failure from a raised assertion, pointing at the raising frame."""
        message = str(exc) or type(exc).__name__
        location = None
        frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
        if frames:
            frame = frames[-1]
            location = f"{frame.filename}:{frame.lineno}"
        return cls(message=message, location=location)

    def __str__(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message


class FailureRecord(BaseModel):
    """Ordered failures of one check invocation. Empty means the check passed."""

    failures: list[Failure] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failures

    @property
    def failed(self) -> bool:
        return bool(self.failures)

    def __len__(self) -> int:
        return len(self.failures)

    def merged(self, other: Optional["FailureRecord"]) -> "FailureRecord":
        if other is None or other.passed:
            return self
        return FailureRecord(failures=[*self.failures, *other.failures])

    def summary(self) -> str:
        return "\n".join(str(f) for f in self.failures)


class CaptureToken(BaseModel):
    """Handle for an open capture window; only valid on the thread that opened it."""

    thread_id: int
    depth: int

    model_config = {"frozen": True}
