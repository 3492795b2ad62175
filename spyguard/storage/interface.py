"""
Storage backend interface.

SpyGuard reads and writes small JSON documents: descriptor batches and threat
database files. Backends only move text; JSON and model decoding is shared.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


class StorageBackend(ABC):
    """Abstract store of UTF-8 text documents addressed by key."""

    @abstractmethod
    async def read_text(self, key: str) -> str:
        """Read a document.

        Args:
            key: Document key.

        Returns:
            str: The document content.

        Raises:
            FileNotFoundError: If no document is stored under the key.
        """
        ...

    @abstractmethod
    async def write_text(self, key: str, content: str) -> str:
        """Write a document, replacing any previous content.

        Args:
            key: Document key.
            content: Text to store.

        Returns:
            str: The key written.
        """
        ...

    @abstractmethod
    async def exists(self, key: str) -> bool:
        ...

    async def read_json(self, key: str) -> Any:
        """Read and decode a JSON document.

        Raises:
            FileNotFoundError: If no document is stored under the key.
            json.JSONDecodeError: If the content is not valid JSON.
        """
        return json.loads(await self.read_text(key))

    async def read_model(self, key: str, model_type: type[T]) -> T:
        """Read a JSON document into a pydantic model.

        Raises:
            FileNotFoundError: If no document is stored under the key.
            pydantic.ValidationError: If the content is not valid JSON for the model.
        """
        return model_type.model_validate_json(await self.read_text(key))

    async def write_model(self, key: str, model: BaseModel) -> str:
        return await self.write_text(key, model.model_dump_json(indent=2))
