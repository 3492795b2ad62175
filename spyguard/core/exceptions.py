"""
Custom exception hierarchy for SpyGuard.

All exceptions inherit from SpyGuardError to enable consistent error handling.
Classification itself never raises: these errors belong to the database refresh
path and to the outer surfaces that load descriptors from files.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SpyGuardError(Exception):
    """Base exception for all SpyGuard errors."""

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        ctx = f" | context: {self.context}" if self.context else ""
        cause = f" | caused by: {self.cause}" if self.cause else ""
        return f"{self.message}{ctx}{cause}"


@dataclass
class ValidationError(SpyGuardError):
    """Raised when input validation fails."""

    field_name: str | None = None
    expected_type: str | None = None
    actual_value: Any = None

    def __str__(self) -> str:
        base = super().__str__()
        if self.field_name:
            return f"Validation failed for '{self.field_name}': {base}"
        return f"Validation failed: {base}"


@dataclass
class ServiceError(SpyGuardError):
    """Raised when a service operation fails."""

    service_name: str = ""
    operation: str = ""

    def __str__(self) -> str:
        return f"[{self.service_name}.{self.operation}] {super().__str__()}"


@dataclass
class DatabaseFetchError(ServiceError):
    """Raised when the remote threat database cannot be fetched or parsed.

    Only ever raised inside ThreatDatabase; refresh() converts it into a
    failed ServiceResult and falls back to the current snapshot.
    """

    url: str = ""
    status_code: int | None = None

    def __post_init__(self) -> None:
        self.service_name = "threat_database"
        self.operation = "refresh"


@dataclass
class DescriptorLoadError(ValidationError):
    """Raised when a descriptor or database file cannot be read."""

    source: str = ""

    def __str__(self) -> str:
        return f"Cannot load '{self.source}': {SpyGuardError.__str__(self)}"
