"""
Ports - Interfaces the session core depends on.

Hexagonal architecture: These define WHAT we need, not HOW.
Adapters provide the HOW.
"""

from storefront_auth.ports.storage_port import TokenStoragePort

__all__ = [
    "TokenStoragePort",
]
