"""
File-based installed-application provider.

Reads a JSON document listing descriptors, either as a bare array or as an
object with an ``apps`` array, through a storage backend.
"""

from __future__ import annotations

import json
from typing import Any

from ..core.exceptions import DescriptorLoadError
from ..core.logging import get_logger
from ..models.app import ApplicationDescriptor
from ..storage import StorageBackend
from .interface import InstalledAppsProvider

logger = get_logger(__name__)


class FileAppsProvider(InstalledAppsProvider):
    """Loads descriptors from a JSON file on every call."""

    def __init__(self, storage: StorageBackend, key: str) -> None:
        """Initialize the provider.

        Args:
            storage: Backend holding the descriptor file.
            key: Storage key of the descriptor file.
        """
        self.storage = storage
        self.key = key

    async def list_installed_applications(self) -> list[ApplicationDescriptor]:
        """Load and normalize the descriptors.

        Raises:
            DescriptorLoadError: If the file is missing, is not JSON, or is not
                a list of objects. Individual fields are never rejected.
        """
        try:
            document = await self.storage.read_json(self.key)
        except FileNotFoundError as e:
            raise DescriptorLoadError(message="File not found", source=self.key, cause=e) from e
        except json.JSONDecodeError as e:
            raise DescriptorLoadError(message="Invalid JSON", source=self.key, cause=e) from e

        entries = self._extract_entries(document)
        apps = [ApplicationDescriptor.coerce(entry) for entry in entries]
        logger.debug("Loaded application descriptors", source=self.key, count=len(apps))
        return apps

    def _extract_entries(self, document: Any) -> list[dict[str, Any]]:
        if isinstance(document, dict) and "apps" in document:
            document = document["apps"]

        if not isinstance(document, list):
            raise DescriptorLoadError(
                message="Expected a JSON array of application descriptors",
                source=self.key,
                field_name="apps",
                expected_type="array",
                actual_value=type(document).__name__,
            )

        for index, entry in enumerate(document):
            if not isinstance(entry, dict):
                raise DescriptorLoadError(
                    message=f"Entry {index} is not an object",
                    source=self.key,
                    expected_type="object",
                    actual_value=type(entry).__name__,
                )
        return document
