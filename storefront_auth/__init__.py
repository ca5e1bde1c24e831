"""
Storefront Auth - Session & Credential Core

Token persistence, an authenticated HTTP client and the session state
machine shared by the storefront catalog and its back-office.

Usage:
    from storefront_auth import LoginRequest, create_session

    session = create_session()          # reads STOREFRONT_* from the env
    await session.restore()             # hydrate a persisted token

    # Authenticate
    await session.login(LoginRequest(email="a@b.com", password="secret"))
    print(session.user.full_name)

    # Leave
    await session.sign_out()
"""

__version__ = "0.1.0"

from storefront_auth.bootstrap import create_session
from storefront_auth.config import Settings
from storefront_auth.domain.auth import LoginRequest, RegisterRequest, AuthResponse, RegisterResponse
from storefront_auth.domain.session import SessionState, SessionSnapshot
from storefront_auth.domain.user import UserProfile, UserRole
from storefront_auth.errors import ApiError, RequestCancelledError, StorageError, StorefrontAuthError
from storefront_auth.sdk.credential_store import CredentialStore
from storefront_auth.sdk.http_client import ApiClient
from storefront_auth.sdk.session import SessionCoordinator

__all__ = [
    "create_session",
    "Settings",
    "SessionCoordinator",
    "ApiClient",
    "CredentialStore",
    "LoginRequest",
    "RegisterRequest",
    "AuthResponse",
    "RegisterResponse",
    "SessionState",
    "SessionSnapshot",
    "UserProfile",
    "UserRole",
    "ApiError",
    "RequestCancelledError",
    "StorageError",
    "StorefrontAuthError",
]
