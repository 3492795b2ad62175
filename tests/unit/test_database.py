"""Unit tests for the threat database store."""

import asyncio
import time

import httpx
import pytest

from spyguard.core.config import DatabaseConfig
from spyguard.database import OFFLINE_BLACKLIST, OFFLINE_WHITELIST, ThreatDatabase
from spyguard.models import Provenance

REMOTE_LISTS = {
    "whitelist": ["com.remote.good"],
    "blacklist": ["com.remote.bad"],
}


def ok_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json=REMOTE_LISTS)


def unreachable_handler(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Name or service not known", request=request)


class TestLookups:
    """Tests for whitelist/blacklist membership."""

    def test_embedded_offline_default(self):
        """Test that a fresh store holds the embedded offline database."""
        database = ThreatDatabase(DatabaseConfig())
        assert set(database.whitelist) == set(OFFLINE_WHITELIST)
        assert set(database.blacklist) == set(OFFLINE_BLACKLIST)
        assert database.is_blacklisted("com.shadow.spy.pro")
        assert database.is_whitelisted("com.whatsapp")
        status = database.status()
        assert status.provenance == Provenance.OFFLINE
        assert status.last_fetch_time is None
        assert not status.is_online

    def test_exact_case_sensitive_membership(self, make_database):
        """Test exact, case-sensitive matching."""
        database = make_database(whitelist=["com.good"], blacklist=["com.bad"])
        assert database.is_whitelisted("com.good")
        assert not database.is_whitelisted("com.Good")
        assert not database.is_whitelisted("com.goo")
        assert database.is_blacklisted("com.bad")
        assert not database.is_blacklisted("com.bad ")

    def test_empty_package_never_matches(self, make_database):
        """Test that the empty string is never a member."""
        database = make_database(whitelist=[""], blacklist=[""])
        assert not database.is_whitelisted("")
        assert not database.is_blacklisted("")

    def test_status_sizes(self, make_database):
        """Test that status reports list sizes."""
        status = make_database(whitelist=["a", "b"], blacklist=["c"]).status()
        assert status.whitelist_size == 2
        assert status.blacklist_size == 1


@pytest.mark.asyncio
class TestRefresh:
    """Tests for refreshing from the remote endpoint."""

    async def test_successful_refresh_replaces_snapshot(self, make_database):
        """Test that a valid response replaces the lists wholesale."""
        database = make_database(ok_handler, whitelist=["com.old.good"], blacklist=["com.old.bad"])
        before = database.snapshot

        result = await database.refresh()

        assert result.success
        assert result.data.is_online
        assert database.snapshot is not before
        assert database.whitelist == ["com.remote.good"]
        assert database.blacklist == ["com.remote.bad"]
        assert not database.is_blacklisted("com.old.bad")
        assert database.status().last_fetch_time is not None

    async def test_request_shape(self, make_database, database_config):
        """Test that the configured URL is fetched with a JSON Accept header."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=REMOTE_LISTS)

        await make_database(handler).refresh()

        assert len(seen) == 1
        assert seen[0].method == "GET"
        assert str(seen[0].url) == database_config.remote_url
        assert seen[0].headers["accept"] == "application/json"

    async def test_unreachable_endpoint_keeps_snapshot(self, make_database):
        """Test that a transport failure leaves the lists untouched and goes offline."""
        database = make_database(unreachable_handler, whitelist=["com.good"], blacklist=["com.bad"])
        before = database.snapshot

        started = time.perf_counter()
        result = await database.refresh()
        elapsed = time.perf_counter() - started

        assert not result.success
        assert "Transport error" in result.error
        assert elapsed < 5.0
        assert database.snapshot.whitelist == before.whitelist
        assert database.snapshot.blacklist == before.blacklist
        assert database.status().provenance == Provenance.OFFLINE
        assert result.data.provenance == Provenance.OFFLINE

    async def test_failure_after_success_keeps_online_lists(self, make_database):
        """Test that a later failure keeps the fetched lists but reports offline."""
        responses = iter([ok_handler, unreachable_handler])

        def handler(request: httpx.Request) -> httpx.Response:
            return next(responses)(request)

        database = make_database(handler)
        await database.refresh()
        fetched_at = database.status().last_fetch_time

        result = await database.refresh()

        assert not result.success
        assert database.blacklist == ["com.remote.bad"]
        assert database.status().provenance == Provenance.OFFLINE
        assert database.status().last_fetch_time == fetched_at

    async def test_timeout_is_bounded(self, make_database):
        """Test that a hanging endpoint is abandoned at the deadline."""
        async def slow_handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(10)
            return httpx.Response(200, json=REMOTE_LISTS)

        config = DatabaseConfig(remote_url="https://slow.spyguard.test/threats.json", timeout_seconds=0.2)
        database = make_database(slow_handler, blacklist=["com.bad"], config=config)

        started = time.perf_counter()
        result = await database.refresh()
        elapsed = time.perf_counter() - started

        assert not result.success
        assert "timed out" in result.error
        assert elapsed < 2.0
        assert database.blacklist == ["com.bad"]

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(500, json=REMOTE_LISTS),
            httpx.Response(404, text="not found"),
            httpx.Response(200, text="<html>maintenance</html>"),
            httpx.Response(200, json={"whitelist": ["com.a"]}),
            httpx.Response(200, json={"blacklist": ["com.a"]}),
            httpx.Response(200, json=[]),
            httpx.Response(200, json={"whitelist": "com.a", "blacklist": []}),
            httpx.Response(200, json={"whitelist": [1, 2], "blacklist": []}),
        ],
    )
    async def test_malformed_responses_fall_back(self, make_database, response):
        """Test that any bad status or shape is treated as a failed fetch."""
        database = make_database(lambda request: response, blacklist=["com.bad"])

        result = await database.refresh()

        assert not result.success
        assert database.blacklist == ["com.bad"]
        assert database.status().provenance == Provenance.OFFLINE

    async def test_empty_lists_are_valid(self, make_database):
        """Test that empty lists are an acceptable remote database."""
        database = make_database(
            lambda request: httpx.Response(200, json={"whitelist": [], "blacklist": []}),
            blacklist=["com.bad"],
        )
        result = await database.refresh()
        assert result.success
        assert database.blacklist == []

    async def test_concurrent_refreshes_share_one_fetch(self, make_database):
        """Test that overlapping refreshes issue a single request."""
        calls = 0

        async def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            await asyncio.sleep(0.05)
            return httpx.Response(200, json=REMOTE_LISTS)

        database = make_database(handler)

        first, second = await asyncio.gather(database.refresh(), database.refresh())

        assert calls == 1
        assert first is second
        assert first.success

        await database.refresh()
        assert calls == 2

    async def test_refresh_never_raises(self, make_database):
        """Test that unexpected handler errors are reported, not raised."""
        def broken_handler(request: httpx.Request) -> httpx.Response:
            raise RuntimeError("boom")

        database = make_database(broken_handler, blacklist=["com.bad"])
        result = await database.refresh()

        assert not result.success
        assert database.blacklist == ["com.bad"]
