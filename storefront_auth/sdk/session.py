"""
Session Coordinator - The application-facing authentication API.

Holds the current credential and identity, sequences login, profile
hydration and logout, and publishes every change to listeners.

Every credential change bumps a generation counter and drops the identity.
Work that suspends (network calls) records the generation first and
re-checks it on resume, so a response for an old credential never writes
the identity of a new one.
"""

import asyncio
import logging
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union

import httpx

from storefront_auth.domain.auth import AuthResponse, RegisterResponse, payload_dict
from storefront_auth.domain.session import SessionSnapshot, SessionState
from storefront_auth.domain.user import UserProfile
from storefront_auth.errors import StorefrontAuthError, describe_error
from storefront_auth.sdk.auth_service import AuthService
from storefront_auth.sdk.http_client import ApiClient
from storefront_auth.sdk.me_service import MeService

logger = logging.getLogger(__name__)

# Errors an operation reports through `error` (and re-raises).
OPERATION_ERRORS = (StorefrontAuthError, httpx.HTTPError)

Listener = Callable[[SessionSnapshot], None]
Notifier = Callable[[str, str], None]


class SessionCoordinator:
    """
    Stateful session over an ApiClient.

    States: anonymous -> authenticating -> authenticated_no_profile
    -> authenticated_with_profile, and back to anonymous on logout or
    on a failed hydration.

    Example:
        session = SessionCoordinator(client)
        await session.restore()                  # strict: bad token -> anonymous
        await session.login(LoginRequest(email="a@b.com", password="x"))
        session.user.full_name
        session.logout()
    """

    def __init__(
        self,
        client: ApiClient,
        auth_service: Optional[AuthService] = None,
        me_service: Optional[MeService] = None,
        notifier: Optional[Notifier] = None,
    ):
        """
        Initialize the coordinator from the persisted credential.

        Args:
            client: API client; its credential store is the source of truth
            auth_service: /auth endpoints (default: built on client)
            me_service: /me endpoints (default: built on client)
            notifier: Called with ("success" | "error", message) for
                user-facing notifications
        """
        self._client = client
        self._auth = auth_service or AuthService(client)
        self._me = me_service or MeService(client)
        self._notifier = notifier

        self._token: Optional[str] = client.credentials.get()
        self._user: Optional[UserProfile] = None
        self._error: Optional[str] = None
        self._refresh_token: Optional[str] = None

        self._pending = 0
        self._logging_in = 0
        self._generation = 0
        self._logout_epoch = 0
        self._hydration: Optional[Tuple[int, asyncio.Future]] = None
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Read model

    @property
    def client(self) -> ApiClient:
        return self._client

    @property
    def user(self) -> Optional[UserProfile]:
        return self._user

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    @property
    def loading(self) -> bool:
        return self._pending > 0

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def state(self) -> SessionState:
        if self._token:
            if self._user is not None:
                return SessionState.AUTHENTICATED_WITH_PROFILE
            return SessionState.AUTHENTICATED_NO_PROFILE
        if self._logging_in:
            return SessionState.AUTHENTICATING
        return SessionState.ANONYMOUS

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            state=self.state,
            is_authenticated=self.is_authenticated,
            loading=self.loading,
            error=self._error,
            user=self._user,
            token=self._token,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with a snapshot after every change.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    def _notify(self, level: str, message: str) -> None:
        if self._notifier is not None:
            self._notifier(level, message)

    # ------------------------------------------------------------------
    # Credential transitions (synchronous, never span an await)

    def _install_credential(self, token: str) -> int:
        self._generation += 1
        self._user = None
        self._hydration = None
        self._client.set_credential(token)
        self._token = token
        self._changed()
        return self._generation

    def _drop_credential(self) -> None:
        self._generation += 1
        self._user = None
        self._hydration = None
        self._client.clear_credential()
        self._token = None
        self._changed()

    # ------------------------------------------------------------------
    # Operation bookkeeping

    def _begin(self, logging_in: bool = False) -> None:
        self._pending += 1
        if logging_in:
            self._logging_in += 1
        self._error = None
        self._changed()

    def _end(self, logging_in: bool = False) -> None:
        self._pending -= 1
        if logging_in:
            self._logging_in -= 1
        self._changed()

    def _fail(self, exc: BaseException, default: str) -> None:
        message = describe_error(exc, default)
        self._error = message
        self._notify("error", message)
        self._changed()

    # ------------------------------------------------------------------
    # Hydration

    def _start_hydration(self, fallback: Optional[Mapping[str, Any]] = None) -> asyncio.Future:
        generation = self._generation
        task = asyncio.ensure_future(self._hydrate(generation, fallback))
        self._hydration = (generation, task)
        return task

    def _hydration_failed(
        self,
        generation: int,
        fallback: Optional[Mapping[str, Any]],
        reason: Any,
    ) -> None:
        if generation != self._generation:
            logger.debug("Ignoring profile failure for a replaced credential")
            return
        if fallback is not None:
            logger.warning("Profile fetch after login failed (%s); using login payload", reason)
            self._user = UserProfile.from_dict(dict(fallback))
            self._changed()
            return
        logger.warning("Profile fetch failed (%s); clearing session", reason)
        self._drop_credential()

    async def _hydrate(self, generation: int, fallback: Optional[Mapping[str, Any]]) -> None:
        self._pending += 1
        self._changed()
        try:
            try:
                response = await self._me.get_profile()
            except OPERATION_ERRORS as e:
                self._hydration_failed(generation, fallback, e)
                return

            data = response.get("data") if isinstance(response, dict) else None
            if not isinstance(data, dict):
                self._hydration_failed(generation, fallback, "malformed profile response")
                return

            if generation != self._generation:
                logger.debug("Discarding profile for a replaced credential")
                return

            self._user = UserProfile.from_dict(data)
        finally:
            self._pending -= 1
            self._changed()

    async def fetch_profile(self) -> Optional[UserProfile]:
        """
        Hydrate the identity if a credential exists and no identity is loaded.

        A hydration already running for the current credential is joined
        rather than repeated. Failure clears the session; nothing is raised.

        Returns:
            The identity after hydration, or None
        """
        if not self._token or self._user is not None:
            return self._user

        current = self._hydration
        if current is not None and current[0] == self._generation and not current[1].done():
            task = current[1]
        else:
            self._error = None
            task = self._start_hydration()

        await asyncio.shield(task)
        return self._user

    async def restore(self) -> Optional[UserProfile]:
        """
        Startup path: pick up the persisted credential and hydrate strictly.

        If the profile cannot be fetched the stored credential is treated as
        invalid and cleared.
        """
        if self._token is None:
            token = self._client.credentials.get()
            if token:
                self._generation += 1
                self._token = token
                self._changed()
        return await self.fetch_profile()

    # ------------------------------------------------------------------
    # Operations

    async def login(self, payload: Any) -> AuthResponse:
        """
        Log in and hydrate the profile.

        If the profile fetch fails right after login, the user object
        embedded in the login response is trusted instead. The session is
        only dropped when the server embedded none.

        Args:
            payload: LoginRequest or {email|username, password}

        Returns:
            The login response, even when it carries no access_token

        Raises:
            ApiError: Server rejected the login (also stored in `error`)
            httpx.TransportError: Server unreachable (also stored in `error`)
        """
        epoch = self._logout_epoch
        self._begin(logging_in=True)
        try:
            response = await self._auth.login(payload)
            if response.access_token:
                if epoch != self._logout_epoch:
                    logger.info("Logged out while login was in flight; not installing credential")
                    return response
                self._install_credential(response.access_token)
                self._refresh_token = response.refresh_token
                await asyncio.shield(self._start_hydration(fallback=response.user))
            return response
        except OPERATION_ERRORS as e:
            self._fail(e, "Login failed")
            raise
        finally:
            self._end(logging_in=True)

    async def register(self, payload: Any) -> RegisterResponse:
        """
        Create an account. Does not log in.

        Raises:
            ApiError: e.g. 409 for a taken email (also stored in `error`)
        """
        self._begin()
        try:
            response = await self._auth.register(payload)
        except OPERATION_ERRORS as e:
            self._fail(e, "Register failed")
            raise
        finally:
            self._end()

        self._notify("success", "Register successful")
        return response

    async def refresh(self, refresh_token: Optional[str] = None) -> AuthResponse:
        """
        Exchange a refresh token for a new credential and re-hydrate.

        Args:
            refresh_token: Token to use (default: the one from the last login)

        Raises:
            ValueError: No refresh token is available
            ApiError: Server rejected the refresh (also stored in `error`)
        """
        token = refresh_token or self._refresh_token
        if not token:
            raise ValueError("No refresh token available")

        epoch = self._logout_epoch
        self._begin()
        try:
            response = await self._auth.refresh(token)
            if response.access_token and epoch == self._logout_epoch:
                self._install_credential(response.access_token)
                self._refresh_token = response.refresh_token or token
                await asyncio.shield(self._start_hydration())
            return response
        except OPERATION_ERRORS as e:
            self._fail(e, "Session refresh failed")
            raise
        finally:
            self._end()

    def logout(self) -> None:
        """Clear credential, identity and error. Always succeeds locally."""
        self._logout_epoch += 1
        self._refresh_token = None
        self._error = None
        self._drop_credential()

    async def sign_out(self) -> None:
        """
        Log out locally, then revoke server-side on a best-effort basis.

        The local state is cleared before the network call; a failing
        server call is logged and does not raise.
        """
        token, refresh_token = self._token, self._refresh_token
        self.logout()
        if not token:
            return
        try:
            await self._auth.logout(refresh_token=refresh_token, access_token=token)
        except OPERATION_ERRORS as e:
            logger.warning("Server-side logout failed: %s", e)

    async def update_profile(self, payload: Any) -> Optional[UserProfile]:
        """
        Update the profile server-side and replace the identity wholesale.

        The response is dropped if the credential changed meanwhile.

        Raises:
            ApiError: Server rejected the update (also stored in `error`)
        """
        generation = self._generation
        self._begin()
        try:
            response = await self._me.update_profile(payload_dict(payload))
        except OPERATION_ERRORS as e:
            self._fail(e, "Profile update failed")
            raise
        finally:
            self._end()

        data = response.get("data") if isinstance(response, dict) else None
        if generation == self._generation and isinstance(data, dict):
            self._user = UserProfile.from_dict(data)
            self._changed()
        return self._user

    def set_user(self, user: Union[UserProfile, Mapping[str, Any], None]) -> None:
        """Force the identity without touching the credential."""
        if user is not None and not isinstance(user, UserProfile):
            user = UserProfile.from_dict(dict(user))
        self._user = user
        self._changed()
