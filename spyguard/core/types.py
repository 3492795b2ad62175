"""
Core type definitions for SpyGuard.

ServiceResult is returned by the operations that report failure instead of
raising: a database refresh always leaves a usable database behind, and a scan
still classifies with the offline lists when the refresh fails.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """Outcome of a refresh or scan.

    A failed result may still carry data: a failed refresh returns the
    database status after falling back to the offline lists.
    """

    success: bool
    data: T | None = None
    error: str | None = None
    warnings: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    duration_ms: float = 0.0

    @classmethod
    def ok(cls, data: T, **metadata: Any) -> ServiceResult[T]:
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def fail(cls, error: str, data: T | None = None, **metadata: Any) -> ServiceResult[T]:
        return cls(success=False, data=data, error=error, metadata=metadata)

    @classmethod
    def with_warnings(cls, data: T, warnings: list[str], **metadata: Any) -> ServiceResult[T]:
        """Successful result whose warnings explain a degraded run."""
        return cls(success=True, data=data, warnings=warnings, metadata=metadata)

    def timed(self, started: float) -> ServiceResult[T]:
        """Record the elapsed time since ``started`` (a ``time.perf_counter()`` value).

        Returns:
            ServiceResult[T]: This result, for chaining.
        """
        self.duration_ms = (time.perf_counter() - started) * 1000
        return self
