"""
Embedded offline threat database.

Used as the initial snapshot at process start and whenever no remote refresh
has succeeded.
"""

from __future__ import annotations

from ..models.threat_db import Provenance, RemoteDatabasePayload, ThreatDatabaseSnapshot

OFFLINE_WHITELIST: tuple[str, ...] = (
    "com.whatsapp",
    "com.facebook.katana",
    "com.instagram.android",
    "com.jazz.cash",
    "com.easypaisa.app.mobile",
    "com.hbl.mobile",
    "com.ubercab",
    "com.careem.acma",
    "com.google.android.apps.messaging",
    "com.google.android.gm",
    "com.google.android.apps.photos",
    "com.samsung.android.messaging",
    "com.apple.mobilesms",
    "com.google.android.calculator",
    "com.android.calculator2",
    "com.android.flashlight",
)

OFFLINE_BLACKLIST: tuple[str, ...] = (
    "com.easyloan.personal",
    "com.barwaqt.loan",
    "com.pk.loan.credit",
    "com.spyware.tracker",
    "com.shadow.spy.pro",
    "com.hidden.tracker",
    "com.quickcash.loan",
    "com.easymoney.finance",
    "com.instant.loan.hub",
)


def offline_snapshot() -> ThreatDatabaseSnapshot:
    """Build the embedded offline snapshot."""
    return ThreatDatabaseSnapshot.from_payload(
        RemoteDatabasePayload(whitelist=list(OFFLINE_WHITELIST), blacklist=list(OFFLINE_BLACKLIST)),
        provenance=Provenance.OFFLINE,
    )
