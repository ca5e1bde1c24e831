"""
Redis Token Storage - Redis-backed token storage.
"""

from typing import Optional

from storefront_auth.errors import StorageError
from storefront_auth.ports.storage_port import TokenStoragePort


class RedisTokenStorage(TokenStoragePort):
    """
    Redis-backed token storage.

    Values are stored as plain strings under a key prefix. Shared by every
    process pointing at the same Redis database.
    """

    def __init__(
        self,
        redis_client=None,
        prefix: str = "storefront:auth:",
        redis_url: str = "redis://localhost:6379/0",
    ):
        """
        Initialize Redis token storage.

        Args:
            redis_client: Redis client instance (redis.Redis)
            prefix: Key prefix for stored values
            redis_url: URL used when no client is given
        """
        self._redis = redis_client
        self._prefix = prefix
        self._redis_url = redis_url

    def _get_redis(self):
        """Lazy load Redis client."""
        if self._redis is None:
            try:
                import redis
                self._redis = redis.Redis.from_url(
                    self._redis_url,
                    decode_responses=True,
                )
            except ImportError:
                raise ImportError("redis package required: pip install redis")
        return self._redis

    def _key(self, key: str) -> str:
        """Generate Redis key."""
        return f"{self._prefix}{key}"

    def _errors(self):
        import redis
        return (redis.RedisError,)

    def read(self, key: str) -> Optional[str]:
        client = self._get_redis()
        try:
            value = client.get(self._key(key))
        except self._errors() as e:
            raise StorageError(f"Redis read failed: {e}") from e
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value or None

    def write(self, key: str, value: str) -> None:
        client = self._get_redis()
        try:
            client.set(self._key(key), value)
        except self._errors() as e:
            raise StorageError(f"Redis write failed: {e}") from e

    def delete(self, key: str) -> bool:
        client = self._get_redis()
        try:
            return bool(client.delete(self._key(key)))
        except self._errors() as e:
            raise StorageError(f"Redis delete failed: {e}") from e
