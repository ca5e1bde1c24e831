"""
API Client - Single choke point for backend HTTP I/O.

Attaches the bearer credential, serializes bodies and query parameters,
and turns every non-2xx response into an ApiError. Transport failures
propagate as httpx exceptions. Nothing is retried and no timeout is applied
unless the caller supplies one through a cancellation signal.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

import httpx

from storefront_auth.errors import ApiError, RequestCancelledError
from storefront_auth.sdk.credential_store import CredentialStore

logger = logging.getLogger(__name__)


def _param_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value)
    return str(value)


def build_query_string(params: Optional[Mapping[str, Any]] = None) -> str:
    """
    Encode query parameters.

    None values are skipped, lists repeat the key, dicts are JSON-encoded.

    Returns:
        "?a=1&b=2", or "" when nothing remains
    """
    if not params:
        return ""
    pairs = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _param_value(v)) for v in value)
        else:
            pairs.append((key, _param_value(value)))
    encoded = urlencode(pairs)
    return f"?{encoded}" if encoded else ""


def parse_response(response: httpx.Response) -> Any:
    """
    Decode a response body and raise ApiError for non-2xx statuses.

    JSON content types are parsed; everything else is returned as text.
    """
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        data = response.json() if response.content else None
    else:
        data = response.text

    if not response.is_success:
        raise ApiError(response.status_code, response.reason_phrase, data)

    return data


class ApiClient:
    """
    Async HTTP client bound to one base endpoint.

    Example:
        client = ApiClient("https://api.example.com", credentials=store)
        stores = await client.get("/stores", {"page": 1})
        await client.aclose()
    """

    def __init__(
        self,
        base_url: str,
        credentials: CredentialStore,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize API client.

        Args:
            base_url: Base endpoint, e.g. "https://api.example.com/api"
            credentials: Credential store consulted on every request
            transport: Optional httpx transport (tests use MockTransport)
            client: Optional pre-built httpx.AsyncClient
        """
        self._base_url = base_url.rstrip("/")
        self._credentials = credentials
        self._client = client or httpx.AsyncClient(transport=transport, timeout=None)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def credentials(self) -> CredentialStore:
        return self._credentials

    def set_credential(self, token: str) -> None:
        self._credentials.set(token)

    def clear_credential(self) -> None:
        self._credentials.clear()

    def build_url(self, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Join base endpoint, path and query string."""
        normalized = path if path.startswith("/") else f"/{path}"
        return f"{self._base_url}{normalized}{build_query_string(params)}"

    def build_headers(self, custom: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """JSON content type, bearer header, then caller overrides."""
        headers = {"Content-Type": "application/json"}
        headers.update(self._credentials.auth_header())
        headers.update(custom or {})
        return headers

    async def _send(self, request: httpx.Request, signal: Optional[asyncio.Event]) -> httpx.Response:
        if signal is None:
            return await self._client.send(request)
        if signal.is_set():
            raise RequestCancelledError(f"{request.method} {request.url} cancelled")

        send = asyncio.ensure_future(self._client.send(request))
        cancelled = asyncio.ensure_future(signal.wait())
        try:
            done, _ = await asyncio.wait({send, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancelled.cancel()
            if not send.done():
                send.cancel()

        if send in done:
            return send.result()
        raise RequestCancelledError(f"{request.method} {request.url} cancelled")

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        signal: Optional[asyncio.Event] = None,
    ) -> Any:
        """
        Issue a request and return the decoded body.

        Args:
            method: HTTP method
            path: Path relative to the base endpoint
            params: Query parameters
            body: JSON-serializable body, or a pre-encoded string
            headers: Extra headers (override defaults)
            signal: Setting this event abandons the request

        Returns:
            Parsed JSON or raw text

        Raises:
            ApiError: Non-2xx response
            RequestCancelledError: signal was set first
            httpx.TransportError: Request never completed
        """
        url = self.build_url(path, params)
        content = None
        if body is not None:
            content = body if isinstance(body, str) else json.dumps(body)

        request = self._client.build_request(
            method.upper(),
            url,
            headers=self.build_headers(headers),
            content=content,
        )
        logger.debug("%s %s", request.method, url)

        response = await self._send(request, signal)
        return parse_response(response)

    async def get(self, path: str, params: Optional[Mapping[str, Any]] = None, **kwargs) -> Any:
        return await self.request("GET", path, params=params, **kwargs)

    async def post(self, path: str, body: Any = None, **kwargs) -> Any:
        return await self.request("POST", path, body=body, **kwargs)

    async def put(self, path: str, body: Any = None, **kwargs) -> Any:
        return await self.request("PUT", path, body=body, **kwargs)

    async def patch(self, path: str, body: Any = None, **kwargs) -> Any:
        return await self.request("PATCH", path, body=body, **kwargs)

    async def delete(self, path: str, params: Optional[Mapping[str, Any]] = None, **kwargs) -> Any:
        return await self.request("DELETE", path, params=params, **kwargs)

    async def post_form(
        self,
        path: str,
        data: Optional[Mapping[str, Any]] = None,
        files: Any = None,
        signal: Optional[asyncio.Event] = None,
    ) -> Any:
        """
        Multipart POST for file uploads.

        No Content-Type is set here; httpx adds the multipart boundary.
        The bearer header is still attached.
        """
        request = self._client.build_request(
            "POST",
            self.build_url(path),
            headers=self._credentials.auth_header(),
            data=data,
            files=files,
        )
        logger.debug("POST %s (multipart)", request.url)

        response = await self._send(request, signal)
        return parse_response(response)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
