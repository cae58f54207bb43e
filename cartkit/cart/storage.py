"""
Cart Storage - key-value stores for the cart snapshot.

The cart talks to a store through three synchronous calls:
``get(key)``, ``set(key, value)`` and ``delete(key)``. Values are strings.

Adapters:
- MemoryStore: per-process dict, used in tests and for throwaway carts
- FileStore: a single JSON file on disk
- RedisStore: Upstash Redis (sync client)
"""

import json
import os
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from cartkit import config
from cartkit.db import RedisKeys, get_redis_sync
from cartkit.errors import (
    EnvironmentUnavailable,
    StorageError,
    ERROR_NO_STORE,
    ERROR_STORAGE_UNAVAILABLE,
    ERROR_UNKNOWN_STORE,
)
from cartkit.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """Synchronous string key-value store."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class MemoryStore:
    """Dict-backed store. Contents live as long as the instance."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class FileStore:
    """
    Store backed by one JSON object file.

    The whole file is read on every ``get`` and rewritten on every
    ``set``/``delete``. Missing file means an empty store.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read cart file {self.path}: {e}")
            raise StorageError(f"{ERROR_STORAGE_UNAVAILABLE}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"{ERROR_STORAGE_UNAVAILABLE}: {self.path} is not a JSON object")
        return data

    def _write(self, data: dict[str, str]) -> None:
        try:
            os.makedirs(self.path.parent, exist_ok=True)
            tmp_path = self.path.with_name(self.path.name + ".tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Failed to write cart file {self.path}: {e}")
            raise StorageError(f"{ERROR_STORAGE_UNAVAILABLE}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


class RedisStore:
    """
    Store backed by Upstash Redis.

    Keys are namespaced with ``RedisKeys.CART``. When ``ttl`` is positive,
    every write refreshes the expiry so abandoned carts disappear.
    """

    def __init__(self, client=None, ttl: Optional[int] = None):
        self._client = client  # Lazy initialization
        self.ttl = config.CART_TTL if ttl is None else ttl

    @property
    def client(self):
        """Get Redis client (lazy initialization)."""
        if self._client is None:
            self._client = get_redis_sync()
        return self._client

    def get(self, key: str) -> Optional[str]:
        try:
            return self.client.get(RedisKeys.cart_key(key))
        except Exception as e:
            logger.error(f"Failed to get cart from Redis: {e}")
            raise StorageError(f"{ERROR_STORAGE_UNAVAILABLE}: {e}", key=key) from e

    def set(self, key: str, value: str) -> None:
        try:
            if self.ttl > 0:
                self.client.set(RedisKeys.cart_key(key), value, ex=self.ttl)
            else:
                self.client.set(RedisKeys.cart_key(key), value)
        except Exception as e:
            logger.error(f"Failed to save cart to Redis: {e}")
            raise StorageError(f"{ERROR_STORAGE_UNAVAILABLE}: {e}", key=key) from e

    def delete(self, key: str) -> None:
        try:
            self.client.delete(RedisKeys.cart_key(key))
        except Exception as e:
            logger.error(f"Failed to clear cart from Redis: {e}")
            raise StorageError(f"{ERROR_STORAGE_UNAVAILABLE}: {e}", key=key) from e


def get_default_store(kind: Optional[str] = None) -> KeyValueStore:
    """
    Build the store named by ``kind`` (defaults to the CART_STORE setting).

    Raises:
        EnvironmentUnavailable: no store configured, unknown kind, or Redis
            selected without credentials.
    """
    kind = (config.CART_STORE if kind is None else kind).strip().lower()

    if not kind:
        raise EnvironmentUnavailable(ERROR_NO_STORE)
    if kind == "memory":
        return MemoryStore()
    if kind == "file":
        return FileStore(config.CART_FILE_PATH)
    if kind == "redis":
        return RedisStore(client=get_redis_sync())
    raise EnvironmentUnavailable(f"{ERROR_UNKNOWN_STORE}: {kind!r}")


__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "FileStore",
    "RedisStore",
    "get_default_store",
]
