"""
Threat database data models.

A snapshot is immutable: refreshing the database builds a new snapshot and
swaps the reference, it never edits an existing one.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, StrictStr, computed_field


class Provenance(str, Enum):
    """Where the current snapshot's lists came from."""

    ONLINE = "online"
    OFFLINE = "offline"


class RemoteDatabasePayload(BaseModel):
    """Wire format of the remote threat database (and of local database files)."""

    whitelist: list[StrictStr]
    blacklist: list[StrictStr]

    model_config = {"extra": "ignore"}


class ThreatDatabaseSnapshot(BaseModel):
    """Whitelist/blacklist pair plus provenance, replaced wholesale on refresh."""

    whitelist: frozenset[str] = Field(default_factory=frozenset, description="Verified-safe package names")
    blacklist: frozenset[str] = Field(default_factory=frozenset, description="Confirmed-malicious package names")
    provenance: Provenance = Field(default=Provenance.OFFLINE)
    last_fetch_time: datetime | None = Field(default=None, description="Last successful remote fetch")

    model_config = {"frozen": True}

    @classmethod
    def from_payload(
        cls,
        payload: RemoteDatabasePayload,
        provenance: Provenance = Provenance.OFFLINE,
        last_fetch_time: datetime | None = None,
    ) -> ThreatDatabaseSnapshot:
        """Build a snapshot from wire-format lists."""
        return cls(
            whitelist=frozenset(payload.whitelist),
            blacklist=frozenset(payload.blacklist),
            provenance=provenance,
            last_fetch_time=last_fetch_time,
        )

    def to_payload(self) -> RemoteDatabasePayload:
        """Convert back to the wire format, with sorted lists."""
        return RemoteDatabasePayload(whitelist=sorted(self.whitelist), blacklist=sorted(self.blacklist))

    def as_offline(self) -> ThreatDatabaseSnapshot:
        """Copy of this snapshot marked offline; lists and fetch time kept."""
        return self.model_copy(update={"provenance": Provenance.OFFLINE})


class DatabaseStatus(BaseModel):
    """Diagnostic view of the threat database."""

    provenance: Provenance
    last_fetch_time: datetime | None = None
    whitelist_size: int = 0
    blacklist_size: int = 0

    @computed_field
    @property
    def is_online(self) -> bool:
        """Whether the lists were fetched from the remote source this session."""
        return self.provenance == Provenance.ONLINE
