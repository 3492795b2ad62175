"""
Layer 2: unknown-app trap based on requested permissions and app identity.

Only applies to user apps that are not whitelisted, so that trusted apps which
legitimately request contacts or camera access are not reported.
"""

from __future__ import annotations

from ..models.app import ApplicationDescriptor, DetectionLayer, RiskLevel, ThreatCategory
from ..models.threat_db import ThreatDatabaseSnapshot
from .base import HeuristicLayer, LayerVerdict

CONTACTS_PERMISSION = "READ_CONTACTS"

SENSITIVE_PERMISSIONS: frozenset[str] = frozenset({"READ_CONTACTS", "READ_SMS", "CAMERA"})

# Includes Urdu terms common in Pakistani lending apps
LOAN_FINANCE_INDICATORS: tuple[str, ...] = (
    "loan",
    "cash",
    "money",
    "finance",
    "credit",
    "lending",
    "barwaqt",
    "qarz",
    "paisa",
)

PREDATORY_LOAN_DESCRIPTION = "Predatory loan app detected - requests contact access to harass borrowers"
SENSITIVE_PERMISSION_DESCRIPTION = "Unknown app requesting sensitive permissions - potential security risk"


class PermissionHeuristicsLayer(HeuristicLayer):
    """Flags predatory loan apps and unverified apps asking for sensitive permissions."""

    layer = DetectionLayer.PERMISSION_HEURISTICS

    @property
    def name(self) -> str:
        return "permission_heuristics"

    def is_exempt(self, app: ApplicationDescriptor, snapshot: ThreatDatabaseSnapshot) -> bool:
        """System apps and whitelisted packages are never judged by permissions."""
        if app.is_system_app:
            return True
        return bool(app.package_name) and app.package_name in snapshot.whitelist

    def evaluate(self, app: ApplicationDescriptor, snapshot: ThreatDatabaseSnapshot) -> LayerVerdict:
        if self.is_exempt(app, snapshot):
            return LayerVerdict.clear()

        permissions = set(app.permissions)

        if CONTACTS_PERMISSION in permissions and app.matches_any(LOAN_FINANCE_INDICATORS):
            return LayerVerdict.threat(ThreatCategory.LOAN_APP, RiskLevel.HIGH, PREDATORY_LOAN_DESCRIPTION)

        if permissions & SENSITIVE_PERMISSIONS:
            return LayerVerdict.threat(
                ThreatCategory.UNKNOWN_THREAT, RiskLevel.HIGH, SENSITIVE_PERMISSION_DESCRIPTION
            )

        return LayerVerdict.clear()
