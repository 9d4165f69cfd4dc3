import os
from typing import Sequence

from eventual.core.exceptions import ToolNotFoundError
from eventual.core.interfaces.command_runner import CommandRunnerPort
from eventual.core.interfaces.executable_locator import ExecutableLocatorPort
from eventual.core.settings import logger


class SearchPathExecutableLocator(ExecutableLocatorPort):
    """Finds binaries in explicit directories first, then on PATH via `which`.

    The explicit directories win so that e.g. /usr/sbin/lsof is used even
    when PATH carries another lsof.
    """

    def __init__(self, runner: CommandRunnerPort):
        self._runner = runner

    def find(self, binary: str, search_paths: Sequence[str] = ()) -> str:
        for location in search_paths:
            candidate = os.path.join(location, binary)
            if os.path.exists(candidate):
                logger.debug(f"[locator] found binary={binary} path={candidate}")
                return candidate

        result = self._runner.run(["which", binary])
        if result.ok:
            path = result.stdout.rstrip("\n")
            logger.debug(f"[locator] found binary={binary} on PATH path={path}")
            return path

        logger.debug(f"[locator] binary not found binary={binary} searched={list(search_paths)}")
        raise ToolNotFoundError(binary, searched=search_paths, diagnostic=result.error)
