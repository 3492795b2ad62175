"""Core infrastructure components for SpyGuard."""

from .config import Config, DatabaseConfig, HeuristicsConfig, get_config
from .exceptions import (
    DatabaseFetchError,
    DescriptorLoadError,
    ServiceError,
    SpyGuardError,
    ValidationError,
)
from .logging import get_logger, log_context, setup_logging
from .types import ServiceResult

__all__ = [
    "Config",
    "DatabaseConfig",
    "HeuristicsConfig",
    "get_config",
    "DatabaseFetchError",
    "DescriptorLoadError",
    "ServiceError",
    "SpyGuardError",
    "ValidationError",
    "get_logger",
    "log_context",
    "setup_logging",
    "ServiceResult",
]
