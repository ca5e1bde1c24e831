"""
Settings - Configuration resolved once from the environment.

Environment variables:
- STOREFRONT_BASE_URL (fallback: BASE_URL, then DEFAULT_BASE_URL)
- STOREFRONT_TOKEN_KEY
- STOREFRONT_STORAGE: "file", "memory" or "redis"
- STOREFRONT_STATE_DIR
- STOREFRONT_REDIS_URL
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from storefront_auth.sdk.credential_store import AUTH_TOKEN_KEY

DEFAULT_BASE_URL = "http://localhost:8000/api"
DEFAULT_STATE_DIR = "~/.storefront"
DEFAULT_REDIS_URL = "redis://localhost:6379/0"

STORAGE_BACKENDS = ("file", "memory", "redis")


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration."""
    base_url: str = DEFAULT_BASE_URL
    token_key: str = AUTH_TOKEN_KEY
    storage: str = "file"
    state_dir: str = DEFAULT_STATE_DIR
    redis_url: str = DEFAULT_REDIS_URL

    def __post_init__(self):
        if self.storage not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unknown storage backend {self.storage!r}; "
                f"expected one of {', '.join(STORAGE_BACKENDS)}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Resolve settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            Settings with documented fallbacks for anything unset
        """
        env = os.environ if environ is None else environ
        return cls(
            base_url=env.get("STOREFRONT_BASE_URL") or env.get("BASE_URL") or DEFAULT_BASE_URL,
            token_key=env.get("STOREFRONT_TOKEN_KEY") or AUTH_TOKEN_KEY,
            storage=(env.get("STOREFRONT_STORAGE") or "file").lower(),
            state_dir=env.get("STOREFRONT_STATE_DIR") or DEFAULT_STATE_DIR,
            redis_url=env.get("STOREFRONT_REDIS_URL") or DEFAULT_REDIS_URL,
        )
