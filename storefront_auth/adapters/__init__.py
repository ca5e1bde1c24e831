"""
Adapters - Implementations of ports.

Token Storage:
- FileTokenStorage: One file per key on local disk
- RedisTokenStorage: Redis-backed storage
- MemoryTokenStorage: In-memory storage (testing)
"""

from storefront_auth.adapters.memory_storage import MemoryTokenStorage
from storefront_auth.adapters.file_storage import FileTokenStorage
from storefront_auth.adapters.redis_storage import RedisTokenStorage

__all__ = [
    "MemoryTokenStorage",
    "FileTokenStorage",
    "RedisTokenStorage",
]
