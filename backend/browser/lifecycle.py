"""
Client token lifecycle manager.

Keeps a client's token alive while the user is active:

- a recurring timer refreshes tokens that are close to expiry, but only if
  there was interaction within the activity window
- becoming visible again clears a dead token (and goes to login) or tries a
  refresh
- outbound requests get auth headers; a 401 clears a dead token and goes to
  login unless the client is already there

Expired tokens are never refreshed. Refresh failures are logged and
reported as ``False``; they never raise.
"""

import asyncio
import logging
import time
from typing import Any, Callable, Coroutine, Optional, Sequence

import httpx

from shared.logging_config import mask_token
from modules.tokens import codec

from .activity import VISIBILITY_EVENT, ActivityTracker, EventTarget
from .config import ClientSettings, get_client_settings
from .providers import DEFAULT_PROVIDERS, TokenProvider, resolve_token
from .session import SessionContext
from .storage import GUEST_USER_TYPE, TOKEN_KEY, USER_TYPE_KEY

logger = logging.getLogger(__name__)

GUEST_HEADER = "X-User-Type"


class TokenLifecycleManager:
    """
    Refresh scheduling, header computation and unauthorized handling for
    one ``SessionContext``.

    ``http`` is used for the refresh call only and is never routed through
    header injection. ``clock`` returns Unix seconds so tests can move time.
    """

    def __init__(
        self,
        context: SessionContext,
        http: httpx.AsyncClient,
        settings: Optional[ClientSettings] = None,
        providers: Sequence[tuple[str, TokenProvider]] = DEFAULT_PROVIDERS,
        clock: Callable[[], float] = time.time,
    ):
        self._context = context
        self._http = http
        self._settings = settings or get_client_settings()
        self._providers = providers
        self._clock = clock
        self._activity = ActivityTracker(context, clock)
        self._target: Optional[EventTarget] = None
        self._pending: set[asyncio.Task] = set()

    @property
    def context(self) -> SessionContext:
        return self._context

    @property
    def http(self) -> httpx.AsyncClient:
        return self._http

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    @property
    def activity(self) -> ActivityTracker:
        return self._activity

    # Token state

    def current_token(self) -> Optional[str]:
        return resolve_token(self._context, self._providers)

    def is_guest(self) -> bool:
        return self._context.storage.get_item(USER_TYPE_KEY) == GUEST_USER_TYPE

    def auth_headers(self) -> dict[str, str]:
        """Bearer for a living token, else the guest marker, else nothing."""
        token = self.current_token()
        if token and not codec.is_expired(token, self._clock()):
            return {"Authorization": f"Bearer {token}"}
        if self.is_guest():
            return {GUEST_HEADER: GUEST_USER_TYPE}
        return {}

    def clear_expired_token(self) -> bool:
        """
        Drop a dead token from storage and memory.

        Returns:
            True if the resolved token was expired and got cleared
        """
        token = self.current_token()
        if not token or not codec.is_expired(token, self._clock()):
            return False

        storage = self._context.storage
        storage.remove_item(TOKEN_KEY)
        storage.remove_item(USER_TYPE_KEY)
        self._context.memory_token = None
        logger.info(f"Cleared expired token {mask_token(token)}")
        return True

    # Refresh

    async def refresh_token_if_needed(self) -> bool:
        """
        Swap a token that is about to expire for a new one.

        Returns:
            True only if a well-formed replacement was stored
        """
        token = self.current_token()
        now = self._clock()
        if not token or codec.is_expired(token, now):
            return False
        if not codec.is_expiring_soon(token, self._settings.refresh_window_seconds, now):
            return False

        try:
            response = await self._http.post(
                self._settings.refresh_path,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            logger.warning(f"Token refresh failed: {e}")
            return False

        if not response.is_success:
            logger.warning(f"Token refresh rejected with status {response.status_code}")
            return False

        try:
            payload = response.json()
        except (ValueError, RecursionError):
            logger.warning("Token refresh returned a non-JSON body")
            return False

        new_token = payload.get("token") if isinstance(payload, dict) else None
        if not codec.is_valid_shape(new_token):
            logger.warning("Token refresh returned a malformed token")
            return False

        self._context.storage.set_item(TOKEN_KEY, new_token)
        logger.info(f"Token refreshed: {mask_token(new_token)}")
        return True

    def has_recent_activity(self) -> bool:
        return self._activity.has_recent_activity(self._settings.activity_window_seconds)

    async def tick(self) -> bool:
        """One timer cycle: refresh only if the user was recently active."""
        if not self.has_recent_activity():
            return False
        return await self.refresh_token_if_needed()

    # Timer

    def start_refresh_timer(self) -> asyncio.Task:
        """Start the recurring refresh timer, cancelling any previous one."""
        self.stop_refresh_timer()
        task = asyncio.create_task(self._run_timer())
        self._context.refresh_task = task
        return task

    def stop_refresh_timer(self) -> None:
        task = self._context.refresh_task
        if task is not None and not task.done():
            task.cancel()
        self._context.refresh_task = None

    async def _run_timer(self) -> None:
        interval = self._settings.refresh_interval_seconds
        while True:
            await asyncio.sleep(interval)
            try:
                await self.tick()
            except Exception:
                logger.exception("Token refresh cycle failed")

    # Lifecycle

    def init(self, target: Optional[EventTarget] = None) -> bool:
        """
        Attach listeners and start the timer if a token is present.

        Must run inside an event loop. Listeners are attached once; calling
        again only restarts the timer.

        Returns:
            True if the refresh timer was started
        """
        if target is not None and self._target is None:
            self._activity.attach(target)
            target.add_event_listener(VISIBILITY_EVENT, self._handle_visibility_event)
            self._target = target

        if self.current_token():
            self.start_refresh_timer()
            return True
        return False

    def teardown(self) -> None:
        """Stop the timer, detach listeners and cancel pending handlers."""
        self.stop_refresh_timer()
        self._activity.detach()
        if self._target is not None:
            self._target.remove_event_listener(VISIBILITY_EVENT, self._handle_visibility_event)
            self._target = None
        for task in list(self._pending):
            task.cancel()
        self._pending.clear()

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def _handle_visibility_event(self, visible: Any = None, *_: Any) -> None:
        # Dispatchers pass the new state; fall back to the last known one
        if not isinstance(visible, bool):
            visible = self._context.visible
        self._spawn(self.on_visibility_change(visible))

    async def on_visibility_change(self, visible: bool) -> None:
        """Recover a session when the client becomes visible again."""
        self._context.visible = visible
        if not visible:
            return
        if self.clear_expired_token():
            self.redirect_to_login()
        else:
            await self.refresh_token_if_needed()

    # Navigation

    def redirect_to_login(self) -> bool:
        """Navigate to the login page unless already there."""
        login_path = self._settings.login_path
        if self._context.location.startswith(login_path):
            return False
        logger.info(f"Redirecting from {self._context.location} to {login_path}")
        self._context.navigate(login_path)
        return True

    def handle_unauthorized(self) -> bool:
        """React to a 401: clear a dead token and go to login."""
        self.clear_expired_token()
        return self.redirect_to_login()
