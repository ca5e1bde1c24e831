"""
Memory Token Storage - In-memory token storage (testing only).
"""

from typing import Dict, Optional
from storefront_auth.ports.storage_port import TokenStoragePort


class MemoryTokenStorage(TokenStoragePort):
    """
    In-memory token storage.

    WARNING: Only for testing. Values are lost on restart unless the
    same instance is handed to the next CredentialStore.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def write(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> bool:
        return self._values.pop(key, None) is not None
