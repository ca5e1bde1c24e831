"""
SDK - Credential store, API client, endpoint services and the session
coordinator built on top of them.
"""

from storefront_auth.sdk.credential_store import CredentialStore, AUTH_TOKEN_KEY
from storefront_auth.sdk.http_client import ApiClient, build_query_string
from storefront_auth.sdk.auth_service import AuthService
from storefront_auth.sdk.me_service import MeService
from storefront_auth.sdk.session import SessionCoordinator

__all__ = [
    "CredentialStore",
    "AUTH_TOKEN_KEY",
    "ApiClient",
    "build_query_string",
    "AuthService",
    "MeService",
    "SessionCoordinator",
]
