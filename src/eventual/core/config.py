"""Configuration models for core domain components.

This module provides Pydantic-based configuration classes that consolidate
settings for the polling managers, enabling dependency injection and testability.
"""

from pydantic import BaseModel, Field


class RetryingAssertionConfig(BaseModel):
    """Configuration for RetryingAssertion behavior.

    Attributes:
        backoff_cap_ms: Upper bound for the exponential sleep between attempts
        pass_on_final_attempt: Accept a final uncaptured attempt that passes
            instead of reporting a timeout
    """

    backoff_cap_ms: int = Field(
        default=1000,
        ge=0,
        description="Maximum sleep in milliseconds between two attempts of a retried assertion"
    )

    pass_on_final_attempt: bool = Field(
        default=False,
        description="Return normally when the post-deadline attempt passes instead of raising a timeout"
    )

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }

    @classmethod
    def from_app_settings(cls, settings) -> "RetryingAssertionConfig":
        return cls(
            pass_on_final_attempt=settings.EVENTUAL_ASSERT_PASS_ON_FINAL_ATTEMPT,
        )


class BindDiscoveryConfig(BaseModel):
    """Configuration for BoundPortDiscovery behavior.

    Attributes:
        tool_name: Inspection binary to run
        search_paths: Directories searched for the binary before falling back to PATH
        backoff_step_ms: Linear sleep increment between failed inspection runs
        abort_on_invalid_port: Abort the process when the tool reports a port
            outside the 16-bit range; when False a recoverable error is raised
    """

    tool_name: str = Field(default="lsof", min_length=1)

    search_paths: tuple[str, ...] = Field(
        default=("/sbin", "/usr/sbin"),
        description="Directories checked for the inspection tool before PATH"
    )

    backoff_step_ms: int = Field(
        default=10,
        ge=0,
        description="Sleep after the n-th failed inspection run is n times this many milliseconds"
    )

    abort_on_invalid_port: bool = Field(
        default=True,
        description="Treat an out-of-range port from the inspection tool as fatal"
    )

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }

    @classmethod
    def from_app_settings(cls, settings) -> "BindDiscoveryConfig":
        """Factory method to construct config from EventualSettings instance."""
        return cls(
            search_paths=tuple(settings.EVENTUAL_LSOF_SEARCH_PATHS),
            abort_on_invalid_port=settings.EVENTUAL_ABORT_ON_INVALID_PORT,
        )


class ReportingConfig(BaseModel):
    """Reporting behaviour shared by a failure sink and the code scoping it.

    Unlike the other configs this one is mutable: FailFastGuard flips
    `fail_fast` off around retry loops and restores it afterwards.
    """

    fail_fast: bool = Field(
        default=False,
        description="Raise at the first reported failure instead of recording it"
    )

    model_config = {
        "validate_assignment": True,
        "extra": "forbid",
    }

    @classmethod
    def from_app_settings(cls, settings) -> "ReportingConfig":
        return cls(fail_fast=settings.EVENTUAL_FAIL_FAST)
