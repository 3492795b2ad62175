"""
Layer 1: known threats by database match.
"""

from __future__ import annotations

from ..models.app import ApplicationDescriptor, DetectionLayer, RiskLevel, ThreatCategory
from ..models.threat_db import ThreatDatabaseSnapshot
from .base import HeuristicLayer, LayerVerdict

KNOWN_MALICIOUS_DESCRIPTION = "known malicious app detected in threat database"


class DatabaseMatchLayer(HeuristicLayer):
    """Flags packages listed in the blacklist. Has absolute priority."""

    layer = DetectionLayer.DATABASE_MATCH

    @property
    def name(self) -> str:
        return "database_match"

    def evaluate(self, app: ApplicationDescriptor, snapshot: ThreatDatabaseSnapshot) -> LayerVerdict:
        if app.package_name and app.package_name in snapshot.blacklist:
            return LayerVerdict.threat(ThreatCategory.SPYWARE, RiskLevel.HIGH, KNOWN_MALICIOUS_DESCRIPTION)
        return LayerVerdict.clear()
