"""Cart snapshot persistence.

The snapshot is the JSON list of cart items (with amounts) stored under a
single fixed key. Reads are forgiving: anything unreadable counts as "no
snapshot". Writes are strict: a failed write raises ``StorageError``.
"""
import json
from abc import ABC, abstractmethod
from typing import Optional

from upstash_redis.asyncio import Redis as AsyncRedis

from .config import DEFAULT_STORAGE_KEY
from .errors import StorageError
from .logging import get_logger
from .models import Cart

logger = get_logger(__name__)


class CartStorage(ABC):
    """Durable key-value slot holding one cart snapshot."""

    def __init__(self, key: str = DEFAULT_STORAGE_KEY):
        self.key = key

    @abstractmethod
    async def _read(self) -> Optional[str]:
        """Return the raw snapshot, or None if the key is empty."""

    @abstractmethod
    async def _write(self, payload: str) -> None:
        """Overwrite the raw snapshot."""

    async def load(self) -> Optional[Cart]:
        """Load the stored cart, or None if missing or unreadable."""
        try:
            raw = await self._read()
        except Exception as e:
            logger.warning(f"Failed to read cart snapshot '{self.key}': {e}")
            return None

        if not raw:
            return None

        try:
            return Cart.from_list(json.loads(raw))
        except (json.JSONDecodeError, ValueError, TypeError) as e:
            logger.warning(f"Corrupted cart snapshot '{self.key}', starting empty: {e}")
            return None

    async def save(self, cart: Cart) -> None:
        """Overwrite the stored snapshot with ``cart``."""
        try:
            payload = json.dumps(cart.to_list(), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Cart is not serializable: {e}") from e

        try:
            await self._write(payload)
        except StorageError:
            raise
        except Exception as e:
            logger.error(f"Failed to write cart snapshot '{self.key}': {e}")
            raise StorageError(f"Cart storage unavailable: {e}") from e


class RedisCartStorage(CartStorage):
    """Snapshot stored in Upstash Redis (async REST client)."""

    def __init__(self, redis: AsyncRedis, key: str = DEFAULT_STORAGE_KEY):
        super().__init__(key)
        self.redis = redis

    @classmethod
    def from_credentials(cls, url: str, token: str, key: str = DEFAULT_STORAGE_KEY) -> "RedisCartStorage":
        if not url or not token:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        return cls(AsyncRedis(url=url, token=token), key=key)

    async def _read(self) -> Optional[str]:
        return await self.redis.get(self.key)

    async def _write(self, payload: str) -> None:
        # No TTL: the snapshot outlives the session until overwritten
        await self.redis.set(self.key, payload)


class MemoryCartStorage(CartStorage):
    """Snapshot kept in a process-local dict. Survives store restarts, not process restarts."""

    def __init__(self, key: str = DEFAULT_STORAGE_KEY, slots: Optional[dict[str, str]] = None):
        super().__init__(key)
        self.slots = slots if slots is not None else {}

    async def _read(self) -> Optional[str]:
        return self.slots.get(self.key)

    async def _write(self, payload: str) -> None:
        self.slots[self.key] = payload


__all__ = ["CartStorage", "RedisCartStorage", "MemoryCartStorage"]
