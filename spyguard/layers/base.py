"""
Base detection layer abstraction.

A detection layer is a stateless rule set: a pure function of an application
descriptor and the threat database snapshot that returns a LayerVerdict.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..models.app import ApplicationDescriptor, DetectionLayer, RiskLevel, ThreatCategory
from ..models.threat_db import ThreatDatabaseSnapshot


@dataclass(frozen=True)
class LayerVerdict:
    """Outcome of evaluating one layer against one descriptor."""

    flagged: bool
    category: ThreatCategory = ThreatCategory.SAFE
    risk_level: RiskLevel = RiskLevel.SAFE
    description: str = ""

    @classmethod
    def clear(cls) -> LayerVerdict:
        """A verdict that did not fire."""
        return cls(flagged=False)

    @classmethod
    def threat(cls, category: ThreatCategory, risk_level: RiskLevel, description: str) -> LayerVerdict:
        """A verdict that fired."""
        return cls(flagged=True, category=category, risk_level=risk_level, description=description)


class HeuristicLayer(ABC):
    """Base class for the three detection layers."""

    layer: DetectionLayer

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable layer name.

        Returns:
            str: The name used in logs.
        """
        ...

    @abstractmethod
    def evaluate(self, app: ApplicationDescriptor, snapshot: ThreatDatabaseSnapshot) -> LayerVerdict:
        """Evaluate the layer's rules.

        Args:
            app: The normalized descriptor.
            snapshot: The database snapshot read for this classification.

        Returns:
            LayerVerdict: Flagged verdict if a rule fired, a clear verdict otherwise.
        """
        ...


def format_megabytes(value: float) -> str:
    """Render a MB figure without a trailing '.0' for whole numbers."""
    if value.is_integer():
        return str(int(value))
    return str(value)
