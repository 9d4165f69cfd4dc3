from eventual.core.config import ReportingConfig


class FailFastGuard:
    """Disable fail-fast reporting for a block and restore it on every exit path.

    Usable as a context manager or through the explicit
    `save_and_disable` / `restore` pair.
    """

    def __init__(self, config: ReportingConfig) -> None:
        self._config = config
        self._previous: bool | None = None

    def save_and_disable(self) -> bool:
        previous = self._config.fail_fast
        self._config.fail_fast = False
        return previous

    def restore(self, previous: bool) -> None:
        self._config.fail_fast = previous

    def __enter__(self) -> "FailFastGuard":
        self._previous = self.save_and_disable()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.restore(bool(self._previous))
        return False
