"""Detection layers for SpyGuard."""

from .base import HeuristicLayer, LayerVerdict
from .behavioral_watchdog import SIMPLE_TOOL_KEYWORDS, BehavioralWatchdogLayer
from .database_match import DatabaseMatchLayer
from .permission_heuristics import (
    LOAN_FINANCE_INDICATORS,
    SENSITIVE_PERMISSIONS,
    PermissionHeuristicsLayer,
)

__all__ = [
    "HeuristicLayer",
    "LayerVerdict",
    "BehavioralWatchdogLayer",
    "DatabaseMatchLayer",
    "PermissionHeuristicsLayer",
    "LOAN_FINANCE_INDICATORS",
    "SENSITIVE_PERMISSIONS",
    "SIMPLE_TOOL_KEYWORDS",
]
