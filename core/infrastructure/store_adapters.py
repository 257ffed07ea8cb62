"""
Key-value store adapter implementations.

Provides Redis and in-memory implementations of KeyValueStore, and a
factory that builds the configured one from settings.
"""

import asyncio
import logging
import threading
from typing import Any, Dict, Mapping, Optional

import redis
from asgiref.sync import sync_to_async
from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver
from django.utils.module_loading import import_string
from redis.exceptions import RedisError, WatchError

from core.domain.exceptions import StorageError
from core.infrastructure.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class RedisKeyValueStore(KeyValueStore):
    """
    Redis adapter implementing KeyValueStore.

    The conditional batch uses WATCH/MULTI/EXEC so a concurrent write to
    the guarded key aborts the transaction.
    """

    def __init__(self, location: str, options: Optional[Dict[str, Any]] = None):
        """
        Initialize adapter.

        Args:
            location: Redis URL
            options: Extra keyword arguments for redis.Redis.from_url
                (socket_timeout, socket_connect_timeout, ...)
        """
        params = {"socket_connect_timeout": 5, "socket_timeout": 5}
        params.update(options or {})
        self._client = redis.Redis.from_url(location, decode_responses=True, **params)

    @sync_to_async
    def get(self, key: str) -> Optional[str]:
        """
        Get a value.

        Args:
            key: Store key

        Returns:
            Stored value or None if not found
        """
        try:
            return self._client.get(key)
        except RedisError as e:
            logger.error("Error reading from store: %s", e, exc_info=True)
            raise StorageError("Store read failed") from e

    @sync_to_async
    def set(self, key: str, value: str) -> None:
        """
        Set a value.

        Args:
            key: Store key
            value: Value to store
        """
        try:
            self._client.set(key, value)
        except RedisError as e:
            logger.error("Error writing to store: %s", e, exc_info=True)
            raise StorageError("Store write failed") from e

    @sync_to_async
    def write_batch(
        self, items: Mapping[str, str], if_absent: Optional[str] = None
    ) -> bool:
        """
        Atomically write several keys.

        Args:
            items: Keys and values to write
            if_absent: Key that must not exist for the batch to commit

        Returns:
            True if committed, False if ``if_absent`` already exists
        """
        try:
            with self._client.pipeline() as pipe:
                while True:
                    try:
                        if if_absent is not None:
                            pipe.watch(if_absent)
                            if pipe.exists(if_absent):
                                logger.debug("Batch skipped, key exists: %s", if_absent)
                                return False
                        pipe.multi()
                        pipe.mset(dict(items))
                        pipe.execute()
                        return True
                    except WatchError:
                        # Guarded key changed between WATCH and EXEC; re-check it
                        logger.debug("Batch retry after concurrent write to %s", if_absent)
                        continue
        except RedisError as e:
            logger.error("Error writing batch to store: %s", e, exc_info=True)
            raise StorageError("Store batch write failed") from e

    @sync_to_async
    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except RedisError as e:
            raise StorageError("Store ping failed") from e

    def close(self) -> None:
        self._client.close()


class InMemoryKeyValueStore(KeyValueStore):
    """
    Process-local KeyValueStore.

    Used by the test settings and for local development. Every operation
    yields to the event loop first, the way a network round trip would, so
    concurrent coroutines interleave between a read and a later batch.
    """

    def __init__(self, location: str = "", options: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    async def get(self, key: str) -> Optional[str]:
        await asyncio.sleep(0)
        with self._lock:
            return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.sleep(0)
        with self._lock:
            self._data[key] = value

    async def write_batch(
        self, items: Mapping[str, str], if_absent: Optional[str] = None
    ) -> bool:
        await asyncio.sleep(0)
        with self._lock:
            if if_absent is not None and if_absent in self._data:
                return False
            self._data.update(items)
            return True

    def snapshot(self) -> Dict[str, str]:
        """Return a copy of every stored key and value."""
        with self._lock:
            return dict(self._data)


def build_key_value_store(config: Mapping[str, Any]) -> KeyValueStore:
    """
    Build a store from a settings dictionary.

    Args:
        config: Mapping with BACKEND (dotted path), LOCATION and OPTIONS,
            shaped like an entry of Django's CACHES setting

    Returns:
        KeyValueStore instance
    """
    backend = import_string(config["BACKEND"])
    store = backend(config.get("LOCATION", ""), config.get("OPTIONS") or {})
    logger.info("Key-value store configured: %s", config["BACKEND"])
    return store


_store: Optional[KeyValueStore] = None
_store_lock = threading.Lock()


def get_key_value_store() -> KeyValueStore:
    """
    Return the process-wide store built from settings.KEY_VALUE_STORE.

    The handle is shared by concurrent requests; connection pooling is the
    backend client's job.
    """
    global _store
    with _store_lock:
        if _store is None:
            _store = build_key_value_store(settings.KEY_VALUE_STORE)
        return _store


def reset_key_value_store() -> None:
    """Drop the cached store so the next call rebuilds it from settings."""
    global _store
    with _store_lock:
        if _store is not None:
            _store.close()
        _store = None


@receiver(setting_changed)
def _on_setting_changed(setting, **kwargs):
    if setting == "KEY_VALUE_STORE":
        reset_key_value_store()
