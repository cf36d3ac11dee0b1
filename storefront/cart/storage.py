"""Durable key-value slot for the cart snapshot."""
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from storefront import config
from storefront.db import get_redis_sync, RedisKeys
from storefront.errors import (
    CartStorageError,
    ERROR_CART_STORAGE_UNAVAILABLE,
    ERROR_UNKNOWN_STORAGE_BACKEND,
)
from storefront.logging import get_logger

logger = get_logger(__name__)


class CartStorage(Protocol):
    """Read/write port over a named key."""

    def read(self, key: str) -> Optional[str]:
        ...

    def write(self, key: str, value: str) -> None:
        ...


class MemoryCartStorage:
    """In-process storage; contents vanish with the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def write(self, key: str, value: str) -> None:
        self.data[key] = value


class FileCartStorage:
    """
    One UTF-8 JSON file per key inside ``directory``.

    Writes go to a temporary file first and are moved into place, so a
    crash mid-write never leaves a truncated snapshot behind.
    """

    def __init__(self, directory: "str | Path"):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read cart file {path}: {e}")
            raise CartStorageError(f"{ERROR_CART_STORAGE_UNAVAILABLE}: {e}") from e

    def write(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error(f"Failed to write cart file {path}: {e}")
            raise CartStorageError(f"{ERROR_CART_STORAGE_UNAVAILABLE}: {e}") from e


class RedisCartStorage:
    """Upstash Redis storage with optional expiry for abandoned carts."""

    def __init__(self, client=None, ttl: Optional[int] = None):
        self._client = client
        self.ttl = ttl or None

    @property
    def client(self):
        """Get Redis client (lazy initialization)."""
        if self._client is None:
            try:
                self._client = get_redis_sync()
            except ValueError as e:
                raise CartStorageError(f"{ERROR_CART_STORAGE_UNAVAILABLE}: {e}") from e
        return self._client

    def read(self, key: str) -> Optional[str]:
        try:
            value = self.client.get(RedisKeys.cart_key(key))
        except CartStorageError:
            raise
        except Exception as e:
            logger.error(f"Failed to get cart from Redis: {e}")
            raise CartStorageError(f"{ERROR_CART_STORAGE_UNAVAILABLE}: {e}") from e
        if value is None:
            return None
        return value.decode("utf-8") if isinstance(value, bytes) else str(value)

    def write(self, key: str, value: str) -> None:
        try:
            self.client.set(RedisKeys.cart_key(key), value, ex=self.ttl)
        except CartStorageError:
            raise
        except Exception as e:
            logger.error(f"Failed to save cart to Redis: {e}")
            raise CartStorageError(f"{ERROR_CART_STORAGE_UNAVAILABLE}: {e}") from e


def get_cart_storage(backend: Optional[str] = None) -> CartStorage:
    """Build the configured storage backend (CART_STORAGE_BACKEND)."""
    backend = (backend or config.CART_STORAGE_BACKEND).lower()
    if backend == "memory":
        return MemoryCartStorage()
    if backend == "file":
        return FileCartStorage(config.CART_STORAGE_DIR)
    if backend == "redis":
        return RedisCartStorage(ttl=config.CART_TTL_SECONDS)
    raise ValueError(f"{ERROR_UNKNOWN_STORAGE_BACKEND}: {backend}")
