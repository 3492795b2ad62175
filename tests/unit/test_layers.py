"""Unit tests for the detection layers."""

import pytest

from spyguard.core.config import HeuristicsConfig
from spyguard.layers import (
    BehavioralWatchdogLayer,
    DatabaseMatchLayer,
    LayerVerdict,
    PermissionHeuristicsLayer,
)
from spyguard.layers.base import format_megabytes
from spyguard.models import ApplicationDescriptor, DetectionLayer, RiskLevel, ThreatCategory


@pytest.fixture
def watchdog():
    """Behavioral watchdog with default thresholds."""
    return BehavioralWatchdogLayer(HeuristicsConfig())


class TestDatabaseMatchLayer:
    """Tests for Layer 1."""

    def test_blacklisted_package(self, make_snapshot):
        """Test that a blacklisted package is flagged as high-risk spyware."""
        layer = DatabaseMatchLayer()
        verdict = layer.evaluate(
            ApplicationDescriptor(package_name="com.bad.app"),
            make_snapshot(blacklist=["com.bad.app"]),
        )
        assert verdict.flagged
        assert verdict.category == ThreatCategory.SPYWARE
        assert verdict.risk_level == RiskLevel.HIGH
        assert verdict.description == "known malicious app detected in threat database"
        assert layer.layer == DetectionLayer.DATABASE_MATCH

    def test_match_is_case_sensitive(self, make_snapshot):
        """Test that membership is exact and case-sensitive."""
        verdict = DatabaseMatchLayer().evaluate(
            ApplicationDescriptor(package_name="COM.BAD.APP"),
            make_snapshot(blacklist=["com.bad.app"]),
        )
        assert not verdict.flagged

    def test_empty_package_never_matches(self, make_snapshot):
        """Test that an empty package name never matches, even an empty entry."""
        verdict = DatabaseMatchLayer().evaluate(
            ApplicationDescriptor(package_name=""),
            make_snapshot(blacklist=[""]),
        )
        assert not verdict.flagged


class TestPermissionHeuristicsLayer:
    """Tests for Layer 2."""

    def test_loan_app_with_contacts(self, make_snapshot):
        """Test predatory loan detection from name plus contacts access."""
        verdict = PermissionHeuristicsLayer().evaluate(
            ApplicationDescriptor(name="Easy Qarz", package_name="com.x", permissions=["READ_CONTACTS"]),
            make_snapshot(),
        )
        assert verdict.category == ThreatCategory.LOAN_APP
        assert verdict.risk_level == RiskLevel.HIGH
        assert "loan" in verdict.description.lower()

    def test_loan_indicator_in_package(self, make_snapshot):
        """Test that indicators are matched in the package name too."""
        verdict = PermissionHeuristicsLayer().evaluate(
            ApplicationDescriptor(name="Helper", package_name="com.FastCredit.app", permissions=["READ_CONTACTS"]),
            make_snapshot(),
        )
        assert verdict.category == ThreatCategory.LOAN_APP

    def test_loan_app_without_contacts_is_unknown_threat(self, make_snapshot):
        """Test that a loan app without contacts access falls to the sensitive check."""
        verdict = PermissionHeuristicsLayer().evaluate(
            ApplicationDescriptor(name="Money Now", permissions=["READ_SMS"]),
            make_snapshot(),
        )
        assert verdict.category == ThreatCategory.UNKNOWN_THREAT

    @pytest.mark.parametrize("permission", ["READ_CONTACTS", "READ_SMS", "CAMERA"])
    def test_sensitive_permission(self, make_snapshot, permission):
        """Test that each sensitive permission flags an unverified app."""
        verdict = PermissionHeuristicsLayer().evaluate(
            ApplicationDescriptor(name="Cleaner", permissions=["INTERNET", permission]),
            make_snapshot(),
        )
        assert verdict.flagged
        assert verdict.category == ThreatCategory.UNKNOWN_THREAT
        assert verdict.risk_level == RiskLevel.HIGH

    def test_harmless_permissions(self, make_snapshot):
        """Test that other permissions do not flag."""
        verdict = PermissionHeuristicsLayer().evaluate(
            ApplicationDescriptor(name="Notes", permissions=["INTERNET", "RECORD_AUDIO", "VIBRATE"]),
            make_snapshot(),
        )
        assert verdict == LayerVerdict.clear()

    def test_system_app_exempt(self, make_snapshot):
        """Test that system apps are never judged by permissions."""
        verdict = PermissionHeuristicsLayer().evaluate(
            ApplicationDescriptor(name="Loan Service", permissions=["READ_CONTACTS"], is_system_app=True),
            make_snapshot(),
        )
        assert not verdict.flagged

    def test_whitelisted_app_exempt(self, make_snapshot):
        """Test that whitelisted packages are never judged by permissions."""
        verdict = PermissionHeuristicsLayer().evaluate(
            ApplicationDescriptor(name="JazzCash", package_name="com.jazz.cash", permissions=["READ_CONTACTS"]),
            make_snapshot(whitelist=["com.jazz.cash"]),
        )
        assert not verdict.flagged


class TestBehavioralWatchdogLayer:
    """Tests for Layer 3."""

    def test_camera_in_background(self, watchdog, make_snapshot):
        """Test background camera use is spyware."""
        verdict = watchdog.evaluate(
            ApplicationDescriptor(is_using_camera_in_background=True),
            make_snapshot(),
        )
        assert verdict.category == ThreatCategory.SPYWARE
        assert verdict.risk_level == RiskLevel.HIGH
        assert "camera" in verdict.description
        assert "screen is off/locked" in verdict.description

    def test_microphone_in_background(self, watchdog, make_snapshot):
        """Test background microphone use names the microphone."""
        verdict = watchdog.evaluate(
            ApplicationDescriptor(is_using_mic_in_background=True),
            make_snapshot(),
        )
        assert verdict.category == ThreatCategory.SPYWARE
        assert "microphone" in verdict.description

    def test_camera_takes_precedence(self, watchdog, make_snapshot):
        """Test that camera is named when both sensors are in use."""
        verdict = watchdog.evaluate(
            ApplicationDescriptor(is_using_camera_in_background=True, is_using_mic_in_background=True),
            make_snapshot(),
        )
        assert "camera" in verdict.description
        assert "microphone" not in verdict.description

    def test_simple_tool_data_leak(self, watchdog, make_snapshot):
        """Test simple tool apps above 10MB of background data."""
        verdict = watchdog.evaluate(
            ApplicationDescriptor(name="Bright Torch", background_data_mb=10.5),
            make_snapshot(),
        )
        assert verdict.category == ThreatCategory.DATA_LEAK
        assert verdict.risk_level == RiskLevel.HIGH
        assert "10.5MB" in verdict.description

    def test_simple_tool_threshold_is_exclusive(self, watchdog, make_snapshot):
        """Test that exactly 10MB is not a leak."""
        verdict = watchdog.evaluate(
            ApplicationDescriptor(name="Stopwatch", background_data_mb=10),
            make_snapshot(),
        )
        assert not verdict.flagged

    def test_simple_tool_system_app_still_flagged(self, watchdog, make_snapshot):
        """Test that the simple tool rule applies to system apps too."""
        verdict = watchdog.evaluate(
            ApplicationDescriptor(name="Clock", background_data_mb=20, is_system_app=True),
            make_snapshot(),
        )
        assert verdict.risk_level == RiskLevel.HIGH

    def test_generic_high_background_usage(self, watchdog, make_snapshot):
        """Test any user app above 50MB of background data."""
        verdict = watchdog.evaluate(
            ApplicationDescriptor(name="Video Player", background_data_mb=75),
            make_snapshot(),
        )
        assert verdict.category == ThreatCategory.DATA_LEAK
        assert verdict.risk_level == RiskLevel.MEDIUM
        assert verdict.description == "High background data usage detected: 75MB"

    def test_generic_rule_skips_system_apps(self, watchdog, make_snapshot):
        """Test that system apps are not flagged for generic usage."""
        verdict = watchdog.evaluate(
            ApplicationDescriptor(name="Play Services", background_data_mb=500, is_system_app=True),
            make_snapshot(),
        )
        assert not verdict.flagged

    def test_custom_thresholds(self, make_snapshot):
        """Test that thresholds come from configuration."""
        layer = BehavioralWatchdogLayer(HeuristicsConfig(high_background_mb=5))
        verdict = layer.evaluate(ApplicationDescriptor(name="Reader", background_data_mb=6), make_snapshot())
        assert verdict.risk_level == RiskLevel.MEDIUM


def test_format_megabytes():
    """Test MB rendering."""
    assert format_megabytes(15.0) == "15"
    assert format_megabytes(12.5) == "12.5"
    assert format_megabytes(0.0) == "0"
