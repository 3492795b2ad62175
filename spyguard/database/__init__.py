"""Threat database for SpyGuard."""

from .files import export_database_file, load_database_file
from .offline import OFFLINE_BLACKLIST, OFFLINE_WHITELIST, offline_snapshot
from .store import ThreatDatabase

__all__ = [
    "export_database_file",
    "load_database_file",
    "OFFLINE_BLACKLIST",
    "OFFLINE_WHITELIST",
    "offline_snapshot",
    "ThreatDatabase",
]
