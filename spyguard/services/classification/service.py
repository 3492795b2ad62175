"""
Classification Service.

Runs the detection layers over application descriptors and assembles one
ClassificationResult per descriptor. Layers are evaluated in precedence order,
not numeric order: a database match wins unconditionally, observed behavior
(Layer 3) outranks requested permissions (Layer 2).
"""

from __future__ import annotations

import time
import uuid
from collections.abc import Iterable
from typing import Any

from ...core.config import Config, get_config
from ...core.logging import get_logger, log_context
from ...core.types import ServiceResult
from ...database import ThreatDatabase
from ...layers import (
    BehavioralWatchdogLayer,
    DatabaseMatchLayer,
    HeuristicLayer,
    PermissionHeuristicsLayer,
)
from ...models.app import (
    ApplicationDescriptor,
    ClassificationResult,
    DetectionLayer,
    RiskLevel,
    ThreatCategory,
)
from ...providers import InstalledAppsProvider

logger = get_logger(__name__)

VERIFIED_SAFE_DESCRIPTION = "verified safe application"
NO_THREATS_DESCRIPTION = "no threats detected"


class ClassificationService:
    """Classifies application descriptors against a threat database.

    Classification is synchronous and side-effect free for a fixed database
    snapshot. The database is injected so callers control refreshes.
    """

    def __init__(self, database: ThreatDatabase | None = None, config: Config | None = None) -> None:
        """Initialize the classification service.

        Args:
            database: Threat database to consult. Defaults to a store holding
                the embedded offline database.
            config: Configuration. Uses global config if not provided.
        """
        self.config = config or get_config()
        self.database = database or ThreatDatabase(self.config.database)
        self.layers: tuple[HeuristicLayer, ...] = (
            DatabaseMatchLayer(),
            BehavioralWatchdogLayer(self.config.heuristics),
            PermissionHeuristicsLayer(),
        )

    def classify(self, descriptor: ApplicationDescriptor | dict[str, Any] | None) -> ClassificationResult:
        """Classify one application.

        Args:
            descriptor: A descriptor or a mapping of descriptor fields. Missing
                or malformed fields are defaulted, never rejected.

        Returns:
            ClassificationResult: The first non-safe layer verdict, or a safe
                result evaluated at layer 1.
        """
        app = ApplicationDescriptor.coerce(descriptor)
        # One read per classification; a concurrent refresh swaps the reference
        snapshot = self.database.snapshot

        for layer in self.layers:
            verdict = layer.evaluate(app, snapshot)
            if verdict.flagged:
                logger.debug(
                    "Application flagged",
                    package=app.package_name,
                    layer=layer.name,
                    category=verdict.category.value,
                )
                return self._build_result(
                    app, verdict.category, verdict.risk_level, verdict.description, layer.layer
                )

        whitelisted = bool(app.package_name) and app.package_name in snapshot.whitelist
        description = VERIFIED_SAFE_DESCRIPTION if whitelisted else NO_THREATS_DESCRIPTION
        logger.debug("Application clear", package=app.package_name, whitelisted=whitelisted)
        return self._build_result(
            app, ThreatCategory.SAFE, RiskLevel.SAFE, description, DetectionLayer.DATABASE_MATCH
        )

    def classify_batch(
        self, descriptors: Iterable[ApplicationDescriptor | dict[str, Any] | None]
    ) -> list[ClassificationResult]:
        """Classify each descriptor independently, preserving input order."""
        return [self.classify(d) for d in descriptors]

    async def scan(
        self,
        provider: InstalledAppsProvider | None = None,
        refresh: bool = True,
    ) -> ServiceResult[list[ClassificationResult]]:
        """Refresh the database, then classify every app the provider lists.

        Args:
            provider: Source of installed applications. Without one there is
                nothing to inspect and the result list is empty.
            refresh: Whether to attempt a database refresh first. A failed
                refresh only adds a warning.

        Returns:
            ServiceResult[list[ClassificationResult]]: The classified apps.
        """
        started = time.perf_counter()
        scan_id = uuid.uuid4().hex[:8]
        warnings: list[str] = []

        with log_context(scan_id=scan_id):
            if refresh:
                refresh_result = await self.database.refresh()
                if not refresh_result.success:
                    warnings.append(f"Using offline threat database: {refresh_result.error}")

            apps = await provider.list_installed_applications() if provider else []
            results = self.classify_batch(apps)
            threats = sum(1 for r in results if r.is_threat)

            status = self.database.status()
            logger.info(
                "Scan completed",
                apps=len(results),
                threats=threats,
                database=status.provenance.value,
            )

        return ServiceResult.with_warnings(
            results,
            warnings,
            scan_id=scan_id,
            threats=threats,
            database_provenance=status.provenance.value,
        ).timed(started)

    @staticmethod
    def _build_result(
        app: ApplicationDescriptor,
        category: ThreatCategory,
        risk_level: RiskLevel,
        description: str,
        layer: DetectionLayer,
    ) -> ClassificationResult:
        return ClassificationResult(
            **app.model_dump(include=set(ApplicationDescriptor.model_fields) - {"category"}),
            category=category,
            risk_level=risk_level,
            description=description,
            detection_layer=layer,
        )
