from typing import Optional, Sequence


class EventualError(Exception):
    """Base exception for eventual.

    Attributes:
        message: Human-readable error description
        diagnostic: Technical diagnostic information for debugging
    """
    def __init__(self, message: str, diagnostic: Optional[str] = None):
        self.message = message
        self.diagnostic = diagnostic
        super().__init__(message)


class ConfigurationError(EventualError):
    """Raised when an environment setting holds a value we do not understand."""
    pass


class FailureSinkError(EventualError):
    """Raised when a capture window is closed out of order or from another thread."""
    pass


class FailFastError(EventualError):
    """Raised at the first reported failure while fail-fast mode is on.

    Deliberately not an AssertionError, so retry loops do not swallow it.
    """
    def __init__(self, failure_message: str):
        self.failure_message = failure_message
        super().__init__(message=f"Fail-fast: {failure_message}")


class AssertionTimeoutError(EventualError, AssertionError):
    """Raised when a retried assertion did not pass before its deadline.

    Attributes:
        timeout_seconds: Configured timeout value
        attempts: Number of captured attempts made before the final one
    """
    def __init__(
        self,
        timeout_seconds: float,
        attempts: int,
        message: Optional[str] = None,
        diagnostic: Optional[str] = None,
    ):
        self.timeout_seconds = timeout_seconds
        self.attempts = attempts
        message = message or "Timed out waiting for assertion to pass."
        super().__init__(message=message, diagnostic=diagnostic)


# Bind discovery failures

class BindDiscoveryError(EventualError):
    """Base exception for bound-port discovery failures.

    Attributes:
        pid: Process whose bound port was looked up (if known)
        protocol: Protocol filter in use (if known)
    """
    def __init__(
        self,
        message: str,
        diagnostic: Optional[str] = None,
        pid: Optional[int] = None,
        protocol: Optional[str] = None,
    ):
        self.pid = pid
        self.protocol = protocol
        super().__init__(message=message, diagnostic=diagnostic)


class ToolNotFoundError(BindDiscoveryError):
    """Raised when an external binary is neither in the search dirs nor on PATH."""
    def __init__(self, tool: str, searched: Sequence[str] = (), diagnostic: Optional[str] = None):
        self.tool = tool
        self.searched = list(searched)
        super().__init__(message=f"Unable to find binary: {tool}", diagnostic=diagnostic)


class CommandFailedError(BindDiscoveryError):
    """Raised when the inspection command was still failing once the deadline passed.

    Attributes:
        argv: Command line that was run
        result: Last CommandResult observed
    """
    def __init__(self, result, pid: Optional[int] = None, protocol: Optional[str] = None):
        self.argv = list(result.argv)
        self.result = result
        message = f"Command failed: {' '.join(self.argv)}: {result.error}"
        super().__init__(
            message=message,
            diagnostic=(result.stderr or "").strip() or None,
            pid=pid,
            protocol=protocol,
        )


class MalformedOutputError(BindDiscoveryError):
    """Raised when lsof output does not match the expected 3-line report."""
    def __init__(
        self,
        raw_output: str,
        reason: str,
        pid: Optional[int] = None,
        protocol: Optional[str] = None,
    ):
        self.raw_output = raw_output
        self.reason = reason
        super().__init__(
            message=f"unexpected lsof output: {reason}",
            diagnostic=raw_output,
            pid=pid,
            protocol=protocol,
        )


class InvariantViolationError(BindDiscoveryError):
    """Raised (or aborted on) when lsof reports a port outside the 16-bit range."""
    def __init__(self, value: int, pid: Optional[int] = None, protocol: Optional[str] = None):
        self.value = value
        super().__init__(message=f"parsed invalid port: {value}", pid=pid, protocol=protocol)
