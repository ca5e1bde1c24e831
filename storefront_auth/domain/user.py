"""
User Domain Model - Identity of the authenticated principal.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from enum import Enum


class UserRole(Enum):
    """Roles the backend assigns."""
    CUSTOMER = "customer"        # Public catalog user
    ADMIN = "admin"              # Back-office administrator
    SHOP = "shop"                # Store owner
    MODERATOR = "moderator"      # Review moderation

    @classmethod
    def parse(cls, value: Any) -> Optional["UserRole"]:
        """Parse a server role string; unknown roles map to None."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


_KNOWN_KEYS = {"id", "id_user", "email", "username", "full_name", "phone_number", "role"}


@dataclass
class UserProfile:
    """
    User profile - server-sourced record for the current session.

    Domain rules:
    - Replaced wholesale on every fetch or update, never merged
    - Belongs to exactly one credential
    """
    user_id: Any
    email: Optional[str] = None
    username: Optional[str] = None
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    role: Optional[UserRole] = None

    # Fields the backend sends that we do not model
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def can_access_admin(self) -> bool:
        """Admins and shop owners may enter the back-office."""
        return self.role in (UserRole.ADMIN, UserRole.SHOP)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the server wire shape."""
        data = dict(self.extra)
        data.update({
            "id": self.user_id,
            "email": self.email,
            "username": self.username,
            "full_name": self.full_name,
            "phone_number": self.phone_number,
            "role": self.role.value if self.role else None,
        })
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserProfile":
        """Deserialize from a server payload (`id` or legacy `id_user`)."""
        user_id = data.get("id")
        if user_id is None:
            user_id = data.get("id_user")
        return cls(
            user_id=user_id,
            email=data.get("email"),
            username=data.get("username"),
            full_name=data.get("full_name"),
            phone_number=data.get("phone_number"),
            role=UserRole.parse(data.get("role")),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )
