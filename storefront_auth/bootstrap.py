"""
Bootstrap - Compose the session core at the process root.

One storage adapter, one credential store, one API client and one
coordinator per process, passed explicitly to whoever needs them.
"""

from typing import Optional

import httpx

from storefront_auth.adapters import FileTokenStorage, MemoryTokenStorage, RedisTokenStorage
from storefront_auth.config import Settings
from storefront_auth.ports.storage_port import TokenStoragePort
from storefront_auth.sdk.credential_store import CredentialStore, StorageErrorHook
from storefront_auth.sdk.http_client import ApiClient
from storefront_auth.sdk.session import Notifier, SessionCoordinator


def create_storage(settings: Settings) -> TokenStoragePort:
    """Build the storage adapter selected by settings.storage."""
    if settings.storage == "memory":
        return MemoryTokenStorage()
    if settings.storage == "redis":
        return RedisTokenStorage(redis_url=settings.redis_url)
    return FileTokenStorage(settings.state_dir)


def create_session(
    settings: Optional[Settings] = None,
    storage: Optional[TokenStoragePort] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    notifier: Optional[Notifier] = None,
    on_storage_error: Optional[StorageErrorHook] = None,
) -> SessionCoordinator:
    """
    Build a ready-to-use SessionCoordinator.

    Args:
        settings: Configuration (default: Settings.from_env())
        storage: Storage adapter overriding settings.storage
        transport: httpx transport (tests pass httpx.MockTransport)
        notifier: User-facing notification hook
        on_storage_error: Telemetry hook for storage failures

    Returns:
        Coordinator holding the persisted credential, not yet hydrated;
        call `await session.restore()` next
    """
    settings = settings or Settings.from_env()
    store = CredentialStore(
        storage or create_storage(settings),
        key=settings.token_key,
        on_error=on_storage_error,
    )
    client = ApiClient(settings.base_url, credentials=store, transport=transport)
    return SessionCoordinator(client, notifier=notifier)
