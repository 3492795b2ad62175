"""
Reading and writing threat database files.

Local database files use the same JSON shape as the remote endpoint.
"""

from __future__ import annotations

import json

from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import DescriptorLoadError
from ..models.threat_db import RemoteDatabasePayload, ThreatDatabaseSnapshot
from ..storage import StorageBackend


async def load_database_file(storage: StorageBackend, key: str) -> RemoteDatabasePayload:
    """Load a whitelist/blacklist file.

    Args:
        storage: Backend holding the file.
        key: Storage key of the file.

    Returns:
        RemoteDatabasePayload: The validated lists.

    Raises:
        DescriptorLoadError: If the file is missing or malformed.
    """
    try:
        return await storage.read_model(key, RemoteDatabasePayload)
    except FileNotFoundError as e:
        raise DescriptorLoadError(message="File not found", source=key, cause=e) from e
    except (PydanticValidationError, json.JSONDecodeError) as e:
        raise DescriptorLoadError(
            message="Expected an object with 'whitelist' and 'blacklist' string arrays",
            source=key,
            cause=e,
        ) from e


async def export_database_file(storage: StorageBackend, key: str, snapshot: ThreatDatabaseSnapshot) -> str:
    """Write a snapshot's lists in the endpoint's JSON shape."""
    return await storage.write_model(key, snapshot.to_payload())
