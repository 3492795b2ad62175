"""
Demonstration descriptors.

Covers every detection path against the embedded offline database: three
blacklisted apps (Layer 1), three unverified apps with sensitive permissions
(Layer 2), three behavioral anomalies (Layer 3) and two whitelisted apps. The
whitelist does not exempt an app from Layer 3, so WhatsApp's 100MB of
background data is still reported.
"""

from __future__ import annotations

from typing import Any

from .interface import StaticAppsProvider

SAMPLE_APPS: tuple[dict[str, Any], ...] = (
    {
        "id": "1",
        "name": "ShadowSpy Pro",
        "packageName": "com.shadow.spy.pro",
        "permissions": ["READ_CONTACTS", "READ_SMS", "CAMERA", "RECORD_AUDIO", "ACCESS_FINE_LOCATION"],
        "dataUsageMB": 45,
        "backgroundDataMB": 30,
        "hasLauncherIcon": False,
        "isSystemApp": False,
    },
    {
        "id": "2",
        "name": "QuickCash Loan",
        "packageName": "com.quickcash.loan",
        "permissions": ["READ_CONTACTS", "READ_EXTERNAL_STORAGE", "CAMERA", "ACCESS_FINE_LOCATION"],
        "dataUsageMB": 120,
        "backgroundDataMB": 45,
        "hasLauncherIcon": True,
        "isSystemApp": False,
    },
    {
        "id": "3",
        "name": "Barwaqt Easy Loan",
        "packageName": "com.barwaqt.loan",
        "permissions": ["READ_CONTACTS", "READ_SMS", "READ_EXTERNAL_STORAGE", "CAMERA"],
        "dataUsageMB": 85,
        "backgroundDataMB": 25,
        "hasLauncherIcon": True,
        "isSystemApp": False,
    },
    {
        "id": "4",
        "name": "TotalClean Booster",
        "packageName": "com.totalclean.boost",
        "permissions": ["READ_CONTACTS", "CAMERA", "READ_SMS", "ACCESS_FINE_LOCATION"],
        "dataUsageMB": 35,
        "backgroundDataMB": 15,
        "hasLauncherIcon": True,
        "isSystemApp": False,
    },
    {
        "id": "5",
        "name": "PK Fast Loan Hub",
        "packageName": "com.pkfast.loan.hub",
        "permissions": ["READ_CONTACTS", "READ_EXTERNAL_STORAGE", "CAMERA"],
        "dataUsageMB": 55,
        "backgroundDataMB": 20,
        "hasLauncherIcon": True,
        "isSystemApp": False,
    },
    {
        "id": "6",
        "name": "SystemService Helper",
        "packageName": "com.system.helper.unknown",
        "permissions": ["READ_SMS", "CAMERA", "RECORD_AUDIO"],
        "dataUsageMB": 25,
        "backgroundDataMB": 18,
        "hasLauncherIcon": False,
        "isSystemApp": False,
    },
    {
        "id": "7",
        "name": "Super Flashlight",
        "packageName": "com.super.flashlight.free",
        "permissions": ["CAMERA"],
        "dataUsageMB": 35,
        "backgroundDataMB": 28,
        "hasLauncherIcon": True,
        "isSystemApp": False,
    },
    {
        "id": "8",
        "name": "Smart Calculator Pro",
        "packageName": "com.smart.calculator.pro",
        "permissions": ["READ_CONTACTS", "ACCESS_FINE_LOCATION"],
        "dataUsageMB": 20,
        "backgroundDataMB": 15,
        "hasLauncherIcon": True,
        "isSystemApp": False,
    },
    {
        "id": "9",
        "name": "Photo Gallery Plus",
        "packageName": "com.photo.gallery.plus",
        "permissions": ["READ_EXTERNAL_STORAGE", "CAMERA"],
        "dataUsageMB": 150,
        "backgroundDataMB": 5,
        "hasLauncherIcon": True,
        "isSystemApp": False,
        "isUsingCameraInBackground": True,
    },
    {
        "id": "10",
        "name": "WhatsApp",
        "packageName": "com.whatsapp",
        "permissions": ["READ_CONTACTS", "CAMERA", "RECORD_AUDIO"],
        "dataUsageMB": 500,
        "backgroundDataMB": 100,
        "hasLauncherIcon": True,
        "isSystemApp": False,
    },
    {
        "id": "11",
        "name": "JazzCash",
        "packageName": "com.jazz.cash",
        "permissions": ["READ_CONTACTS", "CAMERA", "READ_SMS"],
        "dataUsageMB": 80,
        "backgroundDataMB": 10,
        "hasLauncherIcon": True,
        "isSystemApp": False,
    },
)


def sample_provider() -> StaticAppsProvider:
    """Provider over the demonstration descriptors."""
    return StaticAppsProvider(SAMPLE_APPS)
