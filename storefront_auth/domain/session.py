"""
Session Domain Model - Observable state of the client session.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional
from enum import Enum

from storefront_auth.domain.user import UserProfile


class SessionState(Enum):
    """Session lifecycle states."""
    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED_NO_PROFILE = "authenticated_no_profile"
    AUTHENTICATED_WITH_PROFILE = "authenticated_with_profile"


@dataclass(frozen=True)
class SessionSnapshot:
    """
    Point-in-time view of the session, handed to listeners.

    Domain rules:
    - is_authenticated iff a token is present
    - user may be None while authenticated (profile still loading)
    """
    state: SessionState
    is_authenticated: bool
    loading: bool
    error: Optional[str] = None
    user: Optional[UserProfile] = None
    token: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict (token excluded)."""
        return {
            "state": self.state.value,
            "is_authenticated": self.is_authenticated,
            "loading": self.loading,
            "error": self.error,
            "user": self.user.to_dict() if self.user else None,
        }
