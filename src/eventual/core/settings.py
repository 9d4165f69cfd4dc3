from pydantic_settings import BaseSettings
from rich import print

from eventual.adapters.logging_adapter import LoggingAdapter
from eventual.core.interfaces.logging import LoggingPort


# using pydantic_settings to manage environment variables
# and do automatic type casting in a central place
class EventualSettings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }
    EVENTUAL_LOG_LEVEL: str = "INFO"
    # Abort a check at its first failure; retried assertions switch this off while polling
    EVENTUAL_FAIL_FAST: bool = False
    EVENTUAL_ASSERT_PASS_ON_FINAL_ATTEMPT: bool = False
    EVENTUAL_LSOF_SEARCH_PATHS: list[str] = ["/sbin", "/usr/sbin"]
    EVENTUAL_ABORT_ON_INVALID_PORT: bool = True
    # Parsed strictly by eventual.core.test_env.allow_slow_tests
    EVENTUAL_ALLOW_SLOW_TESTS: str = ""
    # 0 means seed from the current time
    EVENTUAL_TEST_RANDOM_SEED: int = 0

    def print_settings(self, logger: LoggingPort):
        """Prints the settings for debugging purposes"""
        logger.info("eventual settings:")
        print(self)


class _LoggerProxy(LoggingPort):
    """Stable module-level logger whose target can be swapped by `set_logger`.

    Modules bind `logger` at import time, so replacing the adapter has to
    happen behind this object rather than by rebinding the name.
    """

    def __init__(self, target: LoggingPort):
        self._target = target

    def info(self, msg: str, *args):
        self._target.info(msg, *args)

    def warning(self, msg: str, *args):
        self._target.warning(msg, *args)

    def error(self, msg: str, *args):
        self._target.error(msg, *args)

    def critical(self, msg: str, *args):
        self._target.critical(msg, *args)

    def debug(self, msg: str, *args):
        self._target.debug(msg, *args)


app_settings = EventualSettings()

logger = _LoggerProxy(LoggingAdapter("eventual", app_settings.EVENTUAL_LOG_LEVEL))


def set_logger(new_logger: LoggingPort) -> None:
    logger._target = new_logger
