"""
Auth Service - Stateless wrappers for the /auth endpoints.

These never touch the credential; SessionCoordinator owns every
credential transition.
"""

from typing import Any, Dict, Optional

from storefront_auth.domain.auth import (
    AuthResponse,
    RegisterResponse,
    payload_dict,
)
from storefront_auth.sdk.http_client import ApiClient


class AuthService:
    """Endpoint wrappers for login, registration and account recovery."""

    def __init__(self, client: ApiClient):
        self._client = client

    async def login(self, payload: Any) -> AuthResponse:
        """POST /auth/login with {email|username, password}."""
        data = await self._client.post("/auth/login", payload_dict(payload))
        return AuthResponse.from_dict(data)

    async def register(self, payload: Any) -> RegisterResponse:
        """POST /auth/register. Does not log the new account in."""
        data = await self._client.post("/auth/register", payload_dict(payload))
        return RegisterResponse.from_dict(data)

    async def refresh(self, refresh_token: str) -> AuthResponse:
        """Exchange a refresh token for a new access token."""
        data = await self._client.post("/auth/refresh", {"refresh_token": refresh_token})
        return AuthResponse.from_dict(data)

    async def logout(
        self,
        refresh_token: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> None:
        """
        Revoke the session server-side.

        Args:
            refresh_token: Refresh token to revoke, if known
            access_token: Bearer token to send when the local credential
                has already been cleared
        """
        body: Dict[str, Any] = {}
        if refresh_token:
            body["refresh_token"] = refresh_token
        headers = {"Authorization": f"Bearer {access_token}"} if access_token else None
        await self._client.post("/auth/logout", body or None, headers=headers)

    async def forgot_password(self, email: str) -> None:
        await self._client.post("/auth/forgot-password", {"email": email})

    async def reset_password(self, token: str, new_password: str) -> None:
        await self._client.post(
            "/auth/reset-password",
            {"token": token, "new_password": new_password},
        )

    async def change_password(self, current_password: str, new_password: str) -> None:
        await self._client.post(
            "/auth/change-password",
            {"current_password": current_password, "new_password": new_password},
        )

    async def request_verify_email(self) -> None:
        await self._client.post("/auth/verify-email/request")

    async def confirm_verify_email(self, token: str) -> None:
        await self._client.post("/auth/verify-email/confirm", {"token": token})
