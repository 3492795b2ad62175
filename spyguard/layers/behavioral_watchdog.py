"""
Layer 3: hidden data watchdog based on observed behavior.

Runs before Layer 2: observed behavior outranks merely requested permissions.
"""

from __future__ import annotations

from ..core.config import HeuristicsConfig, get_config
from ..models.app import ApplicationDescriptor, DetectionLayer, RiskLevel, ThreatCategory
from ..models.threat_db import ThreatDatabaseSnapshot
from .base import HeuristicLayer, LayerVerdict, format_megabytes

SIMPLE_TOOL_KEYWORDS: tuple[str, ...] = (
    "calculator",
    "flashlight",
    "torch",
    "compass",
    "ruler",
    "level",
    "timer",
    "stopwatch",
    "clock",
    "alarm",
)


class BehavioralWatchdogLayer(HeuristicLayer):
    """Flags background sensor use and anomalous background data usage."""

    layer = DetectionLayer.BEHAVIORAL_WATCHDOG

    def __init__(self, config: HeuristicsConfig | None = None) -> None:
        """Initialize the watchdog.

        Args:
            config: Data usage thresholds. Uses global config if not provided.
        """
        self.config = config or get_config().heuristics

    @property
    def name(self) -> str:
        return "behavioral_watchdog"

    def evaluate(self, app: ApplicationDescriptor, snapshot: ThreatDatabaseSnapshot) -> LayerVerdict:
        background_mb = app.background_data_mb

        if app.uses_sensor_in_background:
            sensor = "camera" if app.is_using_camera_in_background else "microphone"
            return LayerVerdict.threat(
                ThreatCategory.SPYWARE,
                RiskLevel.HIGH,
                f"Spyware Alert: App is using {sensor} while screen is off/locked",
            )

        if app.matches_any(SIMPLE_TOOL_KEYWORDS) and background_mb > self.config.simple_tool_background_mb:
            return LayerVerdict.threat(
                ThreatCategory.DATA_LEAK,
                RiskLevel.HIGH,
                f"Data leak detected: Simple tool app using {format_megabytes(background_mb)}MB "
                "of background data",
            )

        if not app.is_system_app and background_mb > self.config.high_background_mb:
            return LayerVerdict.threat(
                ThreatCategory.DATA_LEAK,
                RiskLevel.MEDIUM,
                f"High background data usage detected: {format_megabytes(background_mb)}MB",
            )

        return LayerVerdict.clear()
