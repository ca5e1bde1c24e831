"""
Shared fixtures: a scripted fake backend behind httpx.MockTransport.
"""

import inspect
import json

import httpx
import pytest

from storefront_auth.adapters import MemoryTokenStorage
from storefront_auth.sdk.credential_store import AUTH_TOKEN_KEY, CredentialStore
from storefront_auth.sdk.http_client import ApiClient
from storefront_auth.sdk.session import SessionCoordinator

BASE_URL = "http://api.test/api"


class FakeBackend:
    """
    Route table keyed by (method, path below /api).

    Handlers take the httpx.Request and return an httpx.Response; they may
    be coroutines, which lets tests hold a response until an event fires.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def route(self, method, path, handler=None, status=200, json_body=None):
        if handler is None:
            def handler(request, _status=status, _body=json_body):
                return httpx.Response(_status, json=_body)
        self.routes[(method, path)] = handler

    def calls(self, method, path):
        return [r for r in self.requests if r.method == method and r.url.path == f"/api{path}"]

    async def __call__(self, request):
        self.requests.append(request)
        path = request.url.path[len("/api"):]
        handler = self.routes.get((request.method, path))
        if handler is None:
            return httpx.Response(404, json={"message": f"no route {request.method} {path}"})
        response = handler(request)
        if inspect.isawaitable(response):
            response = await response
        return response


def request_json(request):
    """Decode a captured request body."""
    return json.loads(request.content.decode("utf-8"))


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def storage():
    return MemoryTokenStorage()


@pytest.fixture
def store(storage):
    return CredentialStore(storage)


@pytest.fixture
def client(backend, store):
    return ApiClient(BASE_URL, credentials=store, transport=httpx.MockTransport(backend))


@pytest.fixture
def notifications():
    return []


@pytest.fixture
def make_session(backend, notifications):
    """Build a coordinator over a given storage, as a fresh process would."""

    def factory(storage=None, token=None):
        storage = storage or MemoryTokenStorage()
        if token is not None:
            storage.write(AUTH_TOKEN_KEY, token)
        store = CredentialStore(storage)
        api = ApiClient(BASE_URL, credentials=store, transport=httpx.MockTransport(backend))
        return SessionCoordinator(
            api,
            notifier=lambda level, message: notifications.append((level, message)),
        )

    return factory
