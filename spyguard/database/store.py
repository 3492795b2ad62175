"""
Threat database store.

Holds the current whitelist/blacklist snapshot and refreshes it from the remote
endpoint. The snapshot is an immutable object and every update is a single
reference assignment, so a classification that reads ``snapshot`` once never
sees a mix of old and new entries.
"""

from __future__ import annotations

import asyncio
import time
from datetime import datetime, timezone

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..core.config import DatabaseConfig, get_config
from ..core.exceptions import DatabaseFetchError
from ..core.logging import get_logger
from ..core.types import ServiceResult
from ..models.threat_db import (
    DatabaseStatus,
    Provenance,
    RemoteDatabasePayload,
    ThreatDatabaseSnapshot,
)
from .offline import offline_snapshot

logger = get_logger(__name__)


class ThreatDatabase:
    """Store of known-bad and known-good package names.

    Starts from the embedded offline snapshot (or the one supplied), and can be
    refreshed from the remote endpoint. Refreshing never raises: on any failure
    the current lists stay authoritative and provenance becomes offline.
    """

    def __init__(
        self,
        config: DatabaseConfig | None = None,
        snapshot: ThreatDatabaseSnapshot | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            config: Database configuration. Uses global config if not provided.
            snapshot: Initial snapshot. Defaults to the embedded offline database.
            transport: Optional httpx transport, mainly for tests.
        """
        self.config = config or get_config().database
        self._snapshot = snapshot if snapshot is not None else offline_snapshot()
        self._transport = transport
        self._inflight: asyncio.Future[ServiceResult[DatabaseStatus]] | None = None

    @property
    def snapshot(self) -> ThreatDatabaseSnapshot:
        """The currently held snapshot."""
        return self._snapshot

    @property
    def whitelist(self) -> list[str]:
        return sorted(self._snapshot.whitelist)

    @property
    def blacklist(self) -> list[str]:
        return sorted(self._snapshot.blacklist)

    def replace(self, snapshot: ThreatDatabaseSnapshot) -> None:
        """Swap in a new snapshot wholesale."""
        self._snapshot = snapshot

    def load_payload(self, payload: RemoteDatabasePayload) -> None:
        """Replace the lists with a locally supplied database (provenance offline)."""
        self.replace(ThreatDatabaseSnapshot.from_payload(payload, provenance=Provenance.OFFLINE))

    def is_whitelisted(self, package_name: str) -> bool:
        return bool(package_name) and package_name in self._snapshot.whitelist

    def is_blacklisted(self, package_name: str) -> bool:
        return bool(package_name) and package_name in self._snapshot.blacklist

    def status(self) -> DatabaseStatus:
        """Current provenance and last successful fetch time."""
        snapshot = self._snapshot
        return DatabaseStatus(
            provenance=snapshot.provenance,
            last_fetch_time=snapshot.last_fetch_time,
            whitelist_size=len(snapshot.whitelist),
            blacklist_size=len(snapshot.blacklist),
        )

    async def refresh(self) -> ServiceResult[DatabaseStatus]:
        """Fetch the remote database and swap it in on success.

        A call made while another refresh is outstanding joins it instead of
        issuing a second request.

        Returns:
            ServiceResult[DatabaseStatus]: Successful when the remote lists were
                installed; failed (with the post-fallback status as data) otherwise.
        """
        inflight = self._inflight
        if inflight is not None and not inflight.done():
            logger.debug("Joining in-flight database refresh", url=self.config.remote_url)
        else:
            inflight = asyncio.ensure_future(self._refresh_once())
            self._inflight = inflight
        # A cancelled caller must not cancel the fetch other callers are awaiting
        return await asyncio.shield(inflight)

    async def _refresh_once(self) -> ServiceResult[DatabaseStatus]:
        url = self.config.remote_url
        timeout = self.config.timeout_seconds
        started = time.perf_counter()
        logger.info("Refreshing threat database", url=url, timeout_seconds=timeout)

        try:
            payload = await asyncio.wait_for(self._fetch(url), timeout=timeout)
        except asyncio.TimeoutError:
            return self._fall_back(f"Fetch timed out after {timeout}s", started)
        except DatabaseFetchError as e:
            return self._fall_back(str(e), started)
        except Exception as e:
            logger.exception("Unexpected error refreshing threat database", url=url)
            return self._fall_back(f"Unexpected error: {e}", started)

        snapshot = ThreatDatabaseSnapshot.from_payload(
            payload,
            provenance=Provenance.ONLINE,
            last_fetch_time=datetime.now(timezone.utc),
        )
        self._snapshot = snapshot

        result = ServiceResult.ok(self.status(), url=url).timed(started)
        logger.info(
            "Threat database refreshed",
            whitelist_size=len(snapshot.whitelist),
            blacklist_size=len(snapshot.blacklist),
            duration_ms=round(result.duration_ms, 1),
        )
        return result

    async def _fetch(self, url: str) -> RemoteDatabasePayload:
        """GET the remote database and validate its shape.

        Raises:
            DatabaseFetchError: On transport errors, non-2xx responses,
                non-JSON bodies or bodies without both lists.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                transport=self._transport,
                headers={"Accept": self.config.accept_header},
            ) as client:
                response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DatabaseFetchError(message="Transport error", url=url, cause=e) from e

        if not response.is_success:
            raise DatabaseFetchError(
                message=f"Unexpected HTTP status {response.status_code}",
                url=url,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise DatabaseFetchError(message="Response body is not JSON", url=url, cause=e) from e

        try:
            return RemoteDatabasePayload.model_validate(data)
        except PydanticValidationError as e:
            raise DatabaseFetchError(
                message="Response lacks whitelist/blacklist string lists",
                url=url,
                context={"errors": e.error_count()},
            ) from e

    def _fall_back(self, error: str, started: float) -> ServiceResult[DatabaseStatus]:
        self._snapshot = self._snapshot.as_offline()
        logger.warning("Using offline database (remote fetch failed)", error=error)
        result: ServiceResult[DatabaseStatus] = ServiceResult.fail(
            error, data=self.status(), url=self.config.remote_url
        )
        return result.timed(started)
