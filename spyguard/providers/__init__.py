"""Installed-application providers for SpyGuard."""

from .file import FileAppsProvider
from .interface import InstalledAppsProvider, StaticAppsProvider
from .samples import SAMPLE_APPS, sample_provider

__all__ = [
    "FileAppsProvider",
    "InstalledAppsProvider",
    "StaticAppsProvider",
    "SAMPLE_APPS",
    "sample_provider",
]
