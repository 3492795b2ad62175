"""Test configuration for SpyGuard."""

import tempfile
from pathlib import Path

import httpx
import pytest
import structlog

from spyguard.core.config import Config, DatabaseConfig
from spyguard.database import ThreatDatabase
from spyguard.models import Provenance, ThreatDatabaseSnapshot
from spyguard.services.classification import ClassificationService

TEST_DATABASE_URL = "https://db.spyguard.test/threats.json"


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by CLI commands.

    Yields:
        None: structlog defaults are restored after the test.
    """
    yield
    structlog.reset_defaults()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests.

    Yields:
        Path: A Path object pointing to the temporary directory.
            The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_snapshot():
    """Factory for fixed database snapshots.

    Returns:
        Callable: Builds an offline snapshot from whitelist and blacklist iterables.
    """
    def _make(whitelist=(), blacklist=()):
        return ThreatDatabaseSnapshot(
            whitelist=frozenset(whitelist),
            blacklist=frozenset(blacklist),
            provenance=Provenance.OFFLINE,
        )
    return _make


@pytest.fixture
def database_config():
    """Database configuration pointing at a test URL with a short deadline."""
    return DatabaseConfig(remote_url=TEST_DATABASE_URL, timeout_seconds=1.0)


@pytest.fixture
def make_database(database_config, make_snapshot):
    """Factory for threat databases backed by an httpx mock transport.

    Returns:
        Callable: Builds a ThreatDatabase from an optional request handler,
            whitelist, blacklist and config.
    """
    def _make(handler=None, whitelist=(), blacklist=(), config=None):
        transport = httpx.MockTransport(handler) if handler else None
        return ThreatDatabase(
            config=config or database_config,
            snapshot=make_snapshot(whitelist, blacklist),
            transport=transport,
        )
    return _make


@pytest.fixture
def make_service(make_database):
    """Factory for classification services over fixed snapshots.

    Returns:
        Callable: Builds a ClassificationService from whitelist and blacklist.
    """
    def _make(whitelist=(), blacklist=()):
        database = make_database(whitelist=whitelist, blacklist=blacklist)
        return ClassificationService(database, Config())
    return _make


@pytest.fixture
def offline_service(database_config):
    """Classification service over the embedded offline database."""
    return ClassificationService(ThreatDatabase(config=database_config), Config())
