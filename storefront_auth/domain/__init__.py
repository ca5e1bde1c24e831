"""
Domain Models - Pure business entities.

No infrastructure dependencies. Domain logic only.
"""

from storefront_auth.domain.user import UserProfile, UserRole
from storefront_auth.domain.session import SessionState, SessionSnapshot
from storefront_auth.domain.auth import (
    LoginRequest,
    RegisterRequest,
    AuthResponse,
    RegisterResponse,
)

__all__ = [
    "UserProfile",
    "UserRole",
    "SessionState",
    "SessionSnapshot",
    "LoginRequest",
    "RegisterRequest",
    "AuthResponse",
    "RegisterResponse",
]
