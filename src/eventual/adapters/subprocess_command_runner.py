import subprocess
from typing import Sequence

from eventual.core.interfaces.command_runner import CommandRunnerPort
from eventual.core.models.command import CommandResult
from eventual.core.settings import logger


class SubprocessCommandRunner(CommandRunnerPort):
    """Runs commands with `subprocess.run`, capturing text stdout/stderr.

    Start-up failures (missing binary, permissions) and non-zero exits are
    folded into the returned CommandResult instead of raised.
    """

    def run(self, argv: Sequence[str], stdin: str = "") -> CommandResult:
        argv = [str(a) for a in argv]
        logger.debug(f"[command] run argv={argv}")
        try:
            completed = subprocess.run(
                argv,
                input=stdin,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            logger.debug(f"[command] could not start argv0={argv[0]} error={exc}")
            return CommandResult(argv=argv, error=f"failed to start {argv[0]}: {exc}")

        error = None
        if completed.returncode != 0:
            error = f"{argv[0]} exited with status {completed.returncode}"
        logger.debug(f"[command] finished argv0={argv[0]} returncode={completed.returncode}")
        return CommandResult(
            argv=argv,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            returncode=completed.returncode,
            error=error,
        )
