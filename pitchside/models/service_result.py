"""Success/failure result returned by remote-facing services."""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """
    Outcome of a remote call.

    Remote failures are reported through this value instead of raising.

    Attributes:
        success: Whether the call fully succeeded
        data: Payload on success (may also be set on partial failure)
        error: Human-readable message on failure
    """
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "ServiceResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, data: Optional[T] = None) -> "ServiceResult[T]":
        return cls(success=False, data=data, error=error or "Unknown error occurred")
