"""
Auth Domain Models - Login and registration payloads.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional


@dataclass
class LoginRequest:
    """Credentials for /auth/login. Either email or username identifies the user."""
    password: str
    email: Optional[str] = None
    username: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"password": self.password}
        if self.email is not None:
            data["email"] = self.email
        if self.username is not None:
            data["username"] = self.username
        return data


@dataclass
class RegisterRequest:
    """Account creation payload for /auth/register."""
    username: str
    email: str
    password: str
    full_name: str
    phone_number: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "username": self.username,
            "email": self.email,
            "password": self.password,
            "full_name": self.full_name,
            "phone_number": self.phone_number,
        }


@dataclass
class AuthResponse:
    """
    Login/refresh result.

    A response without access_token is valid; it simply does not
    establish a session.
    """
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    user: Optional[Dict[str, Any]] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "AuthResponse":
        if not isinstance(data, dict):
            return cls(raw={})
        user = data.get("user")
        return cls(
            access_token=data.get("access_token") or None,
            refresh_token=data.get("refresh_token") or None,
            user=user if isinstance(user, dict) else None,
            raw=data,
        )


@dataclass
class RegisterResponse:
    """Registration result. No session is created by registering."""
    user_id: Any = None
    verify_email_token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "RegisterResponse":
        if not isinstance(data, dict):
            return cls()
        return cls(
            user_id=data.get("user_id"),
            verify_email_token=data.get("verify_email_token"),
        )


def payload_dict(payload: Any) -> Dict[str, Any]:
    """Accept a request record or a plain mapping."""
    if hasattr(payload, "to_dict"):
        return payload.to_dict()
    return dict(payload)
