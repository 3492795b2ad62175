"""
Application data models.

ApplicationDescriptor is the input record describing one installed application;
ClassificationResult is the descriptor plus the verdict of the detection layers.
Descriptors are lenient: every field is coerced or defaulted so that no input,
however sparse or malformed, is ever rejected.
"""

from __future__ import annotations

import math
import time
from collections.abc import Mapping
from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

UNKNOWN_APP_NAME = "Unknown App"

# Permissions highlighted as dangerous when showing a result's details
DANGEROUS_PERMISSIONS: tuple[str, ...] = (
    "READ_CONTACTS",
    "READ_SMS",
    "CAMERA",
    "RECORD_AUDIO",
    "ACCESS_FINE_LOCATION",
    "READ_EXTERNAL_STORAGE",
    "READ_CALL_LOG",
)

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off", ""})


class ThreatCategory(str, Enum):
    """Threat categories an application can be classified into."""

    SPYWARE = "spyware"
    LOAN_APP = "loanApp"
    HIDDEN_TRACKER = "hiddenTracker"
    DATA_LEAK = "dataLeak"
    UNKNOWN_THREAT = "unknownThreat"
    SAFE = "safe"


class RiskLevel(str, Enum):
    """Risk level attached to a classification."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    SAFE = "safe"


class DetectionLayer(IntEnum):
    """Detection layer that produced a verdict."""

    DATABASE_MATCH = 1
    PERMISSION_HEURISTICS = 2
    BEHAVIORAL_WATCHDOG = 3


def _timestamp_id() -> str:
    return str(int(time.time() * 1000))


def _coerce_megabytes(value: Any) -> float:
    """Coerce a data usage figure to a non-negative finite float, else 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def _coerce_flag(value: Any, default: bool | None) -> bool | None:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return default


class ApplicationDescriptor(BaseModel):
    """Static and runtime-observable properties of one installed application.

    Field aliases accept the camelCase names used by the mobile client
    (``packageName``, ``backgroundDataMB``, ``isSystemApp``...).
    """

    id: str = Field(default_factory=_timestamp_id, description="Unique per installed app instance")
    name: str = Field(default=UNKNOWN_APP_NAME, description="Display name")
    package_name: str = Field(default="", alias="packageName", description="Lookup key for the threat database")
    category: ThreatCategory | None = Field(default=None, description="Unset on input")
    permissions: list[str] = Field(default_factory=list, description="Requested permission tokens")
    data_usage_mb: float = Field(default=0.0, alias="dataUsageMB", description="Foreground data usage")
    background_data_mb: float = Field(default=0.0, alias="backgroundDataMB", description="Background data usage")
    has_launcher_icon: bool = Field(default=True, alias="hasLauncherIcon")
    is_system_app: bool = Field(default=False, alias="isSystemApp")
    is_using_camera_in_background: bool | None = Field(default=None, alias="isUsingCameraInBackground")
    is_using_mic_in_background: bool | None = Field(default=None, alias="isUsingMicInBackground")

    model_config = {"extra": "ignore", "populate_by_name": True}

    @field_validator("id", mode="before")
    @classmethod
    def _default_id(cls, value: Any) -> str:
        if value is None or value == "":
            return _timestamp_id()
        return str(value)

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, value: Any) -> str:
        if value is None or value == "":
            return UNKNOWN_APP_NAME
        return str(value)

    @field_validator("package_name", mode="before")
    @classmethod
    def _default_package_name(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("category", mode="before")
    @classmethod
    def _lenient_category(cls, value: Any) -> ThreatCategory | None:
        try:
            return ThreatCategory(value)
        except ValueError:
            return None

    @field_validator("permissions", mode="before")
    @classmethod
    def _lenient_permissions(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, Mapping):
            return [str(key) for key in value]
        try:
            return [str(p) for p in value if p is not None]
        except TypeError:
            return []

    @field_validator("data_usage_mb", "background_data_mb", mode="before")
    @classmethod
    def _lenient_megabytes(cls, value: Any) -> float:
        return _coerce_megabytes(value)

    @field_validator("has_launcher_icon", mode="before")
    @classmethod
    def _lenient_launcher_icon(cls, value: Any) -> bool:
        return bool(_coerce_flag(value, True))

    @field_validator("is_system_app", mode="before")
    @classmethod
    def _lenient_system_app(cls, value: Any) -> bool:
        return bool(_coerce_flag(value, False))

    @field_validator("is_using_camera_in_background", "is_using_mic_in_background", mode="before")
    @classmethod
    def _lenient_sensor_flag(cls, value: Any) -> bool | None:
        return _coerce_flag(value, None)

    @classmethod
    def coerce(cls, source: Any) -> ApplicationDescriptor:
        """Normalize any supported input into a descriptor.

        Args:
            source: A descriptor, a mapping of descriptor fields, an object
                exposing descriptor attributes, or None.

        Returns:
            ApplicationDescriptor: The normalized descriptor. Descriptor
                instances are returned as-is so their defaulted id is stable;
                classification results are stripped back to their descriptor
                fields (id kept, category unset).
        """
        if type(source) is cls:
            return source
        if isinstance(source, ApplicationDescriptor):
            fields = set(ApplicationDescriptor.model_fields) - {"category"}
            return cls.model_validate(source.model_dump(include=fields))
        if source is None:
            return cls()
        if isinstance(source, Mapping):
            return cls.model_validate({str(k): v for k, v in source.items()})
        return cls.model_validate(source, from_attributes=True)

    @property
    def uses_sensor_in_background(self) -> bool:
        """Whether the camera or microphone is in use while backgrounded."""
        return bool(self.is_using_camera_in_background or self.is_using_mic_in_background)

    def matches_any(self, keywords: tuple[str, ...] | list[str]) -> bool:
        """Case-insensitive substring match of keywords against name or package.

        Args:
            keywords: Lower-case keywords to look for.

        Returns:
            bool: True if any keyword occurs in the name or the package name.
        """
        name = self.name.lower()
        package = self.package_name.lower()
        return any(k in name or k in package for k in keywords)


class ClassificationResult(ApplicationDescriptor):
    """A descriptor together with its classification verdict."""

    category: ThreatCategory = Field(default=ThreatCategory.SAFE)
    risk_level: RiskLevel = Field(default=RiskLevel.SAFE, alias="riskLevel")
    description: str = Field(default="", description="Human-readable rationale")
    detection_layer: DetectionLayer = Field(
        default=DetectionLayer.DATABASE_MATCH,
        alias="detectionLayer",
        description="Layer that produced a non-safe verdict; 1 when nothing fired",
    )

    @property
    def is_threat(self) -> bool:
        """Whether the application was classified as anything but safe."""
        return self.category != ThreatCategory.SAFE

    @property
    def dangerous_permissions(self) -> list[str]:
        """Requested permissions that belong to the dangerous set, in request order."""
        return [p for p in self.permissions if p in DANGEROUS_PERMISSIONS]
