from typing import Optional

from pydantic import BaseModel


class CommandResult(BaseModel):
    """Captured outcome of one synchronous external command.

    `error` is None exactly when the command ran and exited with status 0.
    `returncode` is None when the process could not be started at all.
    """

    argv: list[str]
    stdout: str = ""
    stderr: str = ""
    returncode: Optional[int] = None
    error: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        return self.error is None
