"""
Key-value store abstraction (port).

This module defines the store interface the license repository is built
on. Implementations can use Redis or an in-process dictionary.
"""
from abc import ABC, abstractmethod
from typing import Mapping, Optional


class KeyValueStore(ABC):
    """
    Abstract key-value store port.

    Keys and values are strings. Implementations must raise
    core.domain.exceptions.StorageError for connectivity failures and
    timeouts rather than leaking backend exceptions.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Get a value.

        Args:
            key: Store key

        Returns:
            Stored value or None if the key does not exist
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """
        Set a value without expiration.

        Args:
            key: Store key
            value: Value to store
        """
        pass

    @abstractmethod
    async def write_batch(
        self, items: Mapping[str, str], if_absent: Optional[str] = None
    ) -> bool:
        """
        Atomically write several keys.

        Either every item becomes visible or none does. When ``if_absent``
        is given, the batch commits only if that key does not exist at
        commit time.

        Args:
            items: Keys and values to write
            if_absent: Key that must not exist for the batch to commit

        Returns:
            True if the batch committed, False if the condition failed
        """
        pass

    async def ping(self) -> bool:
        """Check the store is reachable."""
        await self.get("health_check")
        return True

    def close(self) -> None:
        """Release any held connections."""
