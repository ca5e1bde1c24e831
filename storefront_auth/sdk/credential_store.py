"""
Credential Store - Process-wide cache of the single bearer token.

Reads are served from memory after the first successful storage read.
Writes go to memory first and then through to durable storage; a storage
failure never rolls back the in-process value and never raises.
"""

import logging
import threading
from typing import Callable, Optional

from storefront_auth.errors import StorageError
from storefront_auth.ports.storage_port import TokenStoragePort

logger = logging.getLogger(__name__)

AUTH_TOKEN_KEY = "auth_token"

StorageErrorHook = Callable[[str, Exception], None]

# Cache state before the first successful storage read.
_UNLOADED = object()


class CredentialStore:
    """
    Owner of the bearer credential.

    Example:
        store = CredentialStore(FileTokenStorage("~/.storefront"))
        store.set("tok1")
        store.get()  # "tok1", also after a restart
    """

    def __init__(
        self,
        storage: TokenStoragePort,
        key: str = AUTH_TOKEN_KEY,
        on_error: Optional[StorageErrorHook] = None,
    ):
        """
        Initialize credential store.

        Args:
            storage: Durable storage adapter
            key: Storage key holding the raw token
            on_error: Called with (operation, exception) on storage failures
        """
        self._storage = storage
        self._key = key
        self._on_error = on_error
        self._lock = threading.Lock()
        self._cached = _UNLOADED

    def _report(self, operation: str, error: StorageError) -> None:
        logger.warning("Token storage %s failed: %s", operation, error)
        if self._on_error is not None:
            self._on_error(operation, error)

    def get(self) -> Optional[str]:
        """
        Current token, or None when anonymous.

        A failed storage read is not cached, so the next call retries.
        """
        with self._lock:
            if self._cached is not _UNLOADED:
                return self._cached
            try:
                token = self._storage.read(self._key)
            except StorageError as e:
                self._report("read", e)
                return None
            self._cached = token or None
            return self._cached

    def set(self, token: str) -> None:
        """Replace the token; usable in-process even if persisting fails."""
        with self._lock:
            self._cached = token
            try:
                self._storage.write(self._key, token)
            except StorageError as e:
                self._report("write", e)

    def clear(self) -> None:
        """Forget the token in-process and remove the durable copy."""
        with self._lock:
            self._cached = None
            try:
                self._storage.delete(self._key)
            except StorageError as e:
                self._report("delete", e)

    def auth_header(self) -> dict:
        """Authorization header for the current token, empty when anonymous."""
        token = self.get()
        return {"Authorization": f"Bearer {token}"} if token else {}
