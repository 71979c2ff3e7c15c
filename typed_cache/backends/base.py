"""Abstract distributed cache backend interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional


@dataclass(frozen=True)
class CacheEntryOptions:
    """Write options for a single cache entry."""

    absolute_expiration_relative_to_now: timedelta


class CacheBackend(ABC):
    """Key/value store holding string payloads with a TTL."""

    @abstractmethod
    async def get_string(self, key: str) -> Optional[str]:
        """Retrieve a payload.

        Args:
            key: Fully prefixed cache key

        Returns:
            The stored payload, or None if missing or expired

        Raises:
            BackendError: the store could not be reached
        """

    @abstractmethod
    async def set_string(self, key: str, value: str, options: CacheEntryOptions) -> None:
        """Store a payload, replacing any existing entry.

        Args:
            key: Fully prefixed cache key
            value: Serialized payload
            options: Expiration for the entry

        Raises:
            BackendError: the store could not be reached or rejected the write
        """

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Delete an entry; missing keys are ignored.

        Raises:
            BackendError: the store could not be reached
        """

    async def close(self) -> None:
        """Release connections held by the backend."""
