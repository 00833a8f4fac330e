"""
Result type for gate and dispatch outcomes.

Every step of the interaction pipeline (authorization, rate limiting, command
lookup) reports through Result instead of raising, so the dispatcher can
short-circuit on the first failure and answer the user in one place.

Usage:
    # Passing a step
    return Result.ok()

    # Rejecting with a stable code and optional structured details
    return Result.fail("This command is currently disabled.", code=COMMAND_DISABLED)
    return Result.fail(msg, code=RATE_LIMITED, details={"scope": "user", "remaining_ms": 3000})

    # Checking results
    if not result:
        await ctx.reply(result.error, ephemeral=True)
"""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    A simple success/failure value.

    Attributes:
        success: Whether the step passed
        value: The return value if successful (None if failed or void)
        error: User-facing message if failed (None if successful)
        error_code: Stable code for programmatic handling (see services.error_codes)
        details: Structured failure data, e.g. the limited scope and wait time
    """

    success: bool
    value: T | None = None
    error: str | None = None
    error_code: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, value: T | None = None) -> "Result[T]":
        """Create a successful result with an optional value."""
        return cls(success=True, value=value)

    @classmethod
    def fail(
        cls, error: str, code: str | None = None, details: dict[str, Any] | None = None
    ) -> "Result[T]":
        """Create a failed result with a message, optional code and details."""
        return cls(success=False, error=error, error_code=code, details=dict(details or {}))

    def __bool__(self) -> bool:
        """Allow using Result in boolean context: if result: ..."""
        return self.success
