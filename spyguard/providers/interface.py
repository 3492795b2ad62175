"""
Installed-application provider interface.

Enumerating the applications installed on a device is the host platform's job;
SpyGuard only consumes descriptors through this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from ..models.app import ApplicationDescriptor


class InstalledAppsProvider(ABC):
    """Source of application descriptors to classify."""

    @abstractmethod
    async def list_installed_applications(self) -> list[ApplicationDescriptor]:
        """List the applications to scan.

        Returns:
            list[ApplicationDescriptor]: Normalized descriptors, in a stable order.
        """
        ...


class StaticAppsProvider(InstalledAppsProvider):
    """Provider over an in-memory collection of descriptors or mappings."""

    def __init__(self, apps: Iterable[ApplicationDescriptor | dict[str, Any]]) -> None:
        self._apps = [ApplicationDescriptor.coerce(app) for app in apps]

    async def list_installed_applications(self) -> list[ApplicationDescriptor]:
        return list(self._apps)
