"""
Result Aggregation.

Groups and summarizes classification results for presentation. Groups keep
the relative input order of their members and appear in order of first
occurrence.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from pydantic import BaseModel, Field

from ...models.app import ClassificationResult, RiskLevel, ThreatCategory

LAYER_DESCRIPTIONS: dict[int, str] = {
    1: "Known Threat (Database Match)",
    2: "Unknown Threat (Suspicious Permissions)",
    3: "Behavioral Alert (Suspicious Activity)",
}

CATEGORY_LABELS: dict[ThreatCategory, str] = {
    ThreatCategory.SPYWARE: "Spyware",
    ThreatCategory.LOAN_APP: "Loan Apps",
    ThreatCategory.HIDDEN_TRACKER: "Hidden Trackers",
    ThreatCategory.DATA_LEAK: "Data Leaks",
    ThreatCategory.UNKNOWN_THREAT: "Unknown Threats",
    ThreatCategory.SAFE: "Safe",
}

RISK_LABELS: dict[RiskLevel, str] = {
    RiskLevel.HIGH: "High Risk",
    RiskLevel.MEDIUM: "Medium Risk",
    RiskLevel.LOW: "Low Risk",
    RiskLevel.SAFE: "Safe",
}


class ScanSummary(BaseModel):
    """Counts over a set of classification results."""

    total_apps: int = Field(default=0)
    threat_count: int = Field(default=0, description="Results not classified safe")
    by_category: dict[str, int] = Field(default_factory=dict)
    by_risk_level: dict[str, int] = Field(default_factory=dict)
    threats_by_layer: dict[int, int] = Field(default_factory=dict)

    @property
    def is_clean(self) -> bool:
        return self.threat_count == 0


def group_by_category(results: Iterable[ClassificationResult]) -> dict[str, list[ClassificationResult]]:
    """Partition results by category value (e.g. ``"spyware"``, ``"loanApp"``)."""
    groups: dict[str, list[ClassificationResult]] = {}
    for result in results:
        groups.setdefault(result.category.value, []).append(result)
    return groups


def group_by_layer(results: Iterable[ClassificationResult]) -> dict[int, list[ClassificationResult]]:
    """Partition results by detection layer number."""
    groups: dict[int, list[ClassificationResult]] = {}
    for result in results:
        groups.setdefault(int(result.detection_layer), []).append(result)
    return groups


def layer_description(layer: int) -> str:
    """Fixed label for a detection layer; ``"Unknown"`` for anything else."""
    if isinstance(layer, bool):
        return "Unknown"
    try:
        return LAYER_DESCRIPTIONS.get(layer, "Unknown")
    except TypeError:
        return "Unknown"


def category_label(category: ThreatCategory | str) -> str:
    """Display label for a category; unknown values are returned unchanged."""
    try:
        return CATEGORY_LABELS[ThreatCategory(category)]
    except ValueError:
        return str(category)


def risk_label(risk_level: RiskLevel | str) -> str:
    """Display label for a risk level; anything unrecognized reads as safe."""
    try:
        return RISK_LABELS[RiskLevel(risk_level)]
    except ValueError:
        return RISK_LABELS[RiskLevel.SAFE]


def threats_only(results: Iterable[ClassificationResult]) -> list[ClassificationResult]:
    """Results that are not classified safe, in input order."""
    return [r for r in results if r.is_threat]


def summarize(results: Iterable[ClassificationResult]) -> ScanSummary:
    """Count results per category, per risk level, and threats per layer."""
    results = list(results)
    threats = threats_only(results)
    return ScanSummary(
        total_apps=len(results),
        threat_count=len(threats),
        by_category=dict(Counter(r.category.value for r in results)),
        by_risk_level=dict(Counter(r.risk_level.value for r in results)),
        threats_by_layer=dict(Counter(int(r.detection_layer) for r in threats)),
    )
