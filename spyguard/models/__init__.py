"""Data models for SpyGuard."""

from .app import (
    DANGEROUS_PERMISSIONS,
    UNKNOWN_APP_NAME,
    ApplicationDescriptor,
    ClassificationResult,
    DetectionLayer,
    RiskLevel,
    ThreatCategory,
)
from .threat_db import (
    DatabaseStatus,
    Provenance,
    RemoteDatabasePayload,
    ThreatDatabaseSnapshot,
)

__all__ = [
    "DANGEROUS_PERMISSIONS",
    "UNKNOWN_APP_NAME",
    "ApplicationDescriptor",
    "ClassificationResult",
    "DetectionLayer",
    "RiskLevel",
    "ThreatCategory",
    "DatabaseStatus",
    "Provenance",
    "RemoteDatabasePayload",
    "ThreatDatabaseSnapshot",
]
