"""
Me Service - Wrappers for the /me endpoints of the current principal.
"""

from typing import Any, Dict, Mapping, Optional

from storefront_auth.sdk.http_client import ApiClient


class MeService:
    """Profile endpoints. Responses keep the server's {data: ...} envelope."""

    def __init__(self, client: ApiClient):
        self._client = client

    async def get_profile(self) -> Dict[str, Any]:
        """GET /me/profile -> {data: {id, email, username, ...}}"""
        return await self._client.get("/me/profile")

    async def update_profile(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """PATCH /me/profile with any of full_name, phone_number, email."""
        return await self._client.patch("/me/profile", dict(payload))

    async def record_consent(
        self,
        terms_version: Optional[str] = None,
        privacy_version: Optional[str] = None,
    ) -> None:
        body = {}
        if terms_version is not None:
            body["terms_version"] = terms_version
        if privacy_version is not None:
            body["privacy_version"] = privacy_version
        await self._client.post("/me/consent", body)

    async def export_data(self) -> Any:
        return await self._client.get("/me/export")

    async def delete_account(self) -> None:
        await self._client.delete("/me")
