from abc import ABC, abstractmethod
from typing import Sequence

from eventual.core.models.command import CommandResult


class CommandRunnerPort(ABC):
    @abstractmethod
    def run(self, argv: Sequence[str], stdin: str = "") -> CommandResult:
        """Run `argv` to completion on the calling thread.

        Never raises for a failing or missing command; the failure is
        reported through `CommandResult.error`.
        """
        pass
