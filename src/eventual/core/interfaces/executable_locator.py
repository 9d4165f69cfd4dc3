from abc import ABC, abstractmethod
from typing import Sequence


class ExecutableLocatorPort(ABC):
    @abstractmethod
    def find(self, binary: str, search_paths: Sequence[str] = ()) -> str:
        """
        Returns the path to `binary`, preferring `search_paths` over PATH.
        Raises ToolNotFoundError if it cannot be located.
        """
        pass
