"""
Result values returned by the team builder service.

User mistakes (bad ratings, too few players, unknown session) are not
exceptional: the service reports them as a failed Result carrying a
message for the user and a code from services.error_codes.

    result = service.generate_teams(guild_id, user_id)
    if not result:
        await reply(result.error)
    teams = result.value
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Success flag plus either a value or an error message and code."""

    success: bool
    value: T | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> "Result[T]":
        return cls(True, value)

    @classmethod
    def fail(cls, error: str, code: str | None = None) -> "Result[T]":
        return cls(False, error=error, error_code=code)

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> T:
        """Return the value; raise ValueError on a failed result."""
        if self.success:
            return self.value  # type: ignore[return-value]
        raise ValueError(f"Cannot unwrap failed result: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return self.value if self.success else default  # type: ignore[return-value]

    def map(self, fn: Callable[[T], "Result[U]"]) -> "Result[U]":
        """Feed the value to fn when successful; pass failures through unchanged."""
        return fn(self.value) if self.success else self  # type: ignore[return-value, arg-type]
