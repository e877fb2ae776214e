"""
Per-client registry of screen controllers.

Reflex state classes only hold serializable vars, so the controllers of
each connected client live here, keyed by the client token Reflex assigns
to the browser tab. Screens are created on first use and released (timers
cancelled) on unmount. A session is dropped with all its screens when its
client logs out or stays idle past ``config.SESSION_IDLE_SECONDS``.
"""

import time
from typing import Any, Callable, Dict

from bookhub_admin import config
from bookhub_admin.controllers.remote import SessionCredentials, call_remote
from bookhub_admin.lib import logs
from bookhub_admin.models.common import Envelope
from bookhub_admin.screens import (
    BookScreen,
    BranchStockStatisticsScreen,
    CategoryScreen,
    LoginIdLookupScreen,
    PasswordChangeEmailScreen,
    PolicyScreen,
    PublisherScreen,
    SignUpScreen,
    StockScreen,
)
from bookhub_admin.services import get_bookhub_service
from bookhub_admin.services.bookhub_service import BookhubService

LOG = logs.logger(__file__)


_SCREEN_FACTORIES: Dict[str, Callable[["AdminSession"], Any]] = {
    "policies": lambda s: PolicyScreen(s.service, s.credentials),
    "publishers": lambda s: PublisherScreen(s.service, s.credentials),
    "stocks": lambda s: StockScreen(s.service, s.credentials),
    "books": lambda s: BookScreen(s.service, s.credentials),
    "categories": lambda s: CategoryScreen(s.service, s.credentials),
    "statistics": lambda s: BranchStockStatisticsScreen(s.service, s.credentials),
    "sign_up": lambda s: SignUpScreen(s.service),
    "login_id_lookup": lambda s: LoginIdLookupScreen(s.service),
    "password_change_email": lambda s: PasswordChangeEmailScreen(s.service),
}


class AdminSession:
    """Credentials and mounted screens of one browser client."""

    def __init__(self, service: BookhubService, access_token: str | None = None) -> None:
        self.service = service
        self.credentials = SessionCredentials(access_token)
        self._screens: dict[str, Any] = {}
        self.last_used = time.monotonic()

    def touch(self) -> None:
        self.last_used = time.monotonic()

    def sync_token(self, access_token: str | None) -> None:
        """Follow the access-token cookie of the client."""
        self.credentials.update(access_token)

    def screen(self, name: str) -> Any:
        if name not in self._screens:
            try:
                factory = _SCREEN_FACTORIES[name]
            except KeyError as exc:
                raise ValueError(f"Unknown screen: {name}") from exc
            self._screens[name] = factory(self)
        return self._screens[name]

    @property
    def policies(self) -> PolicyScreen:
        return self.screen("policies")

    @property
    def publishers(self) -> PublisherScreen:
        return self.screen("publishers")

    @property
    def stocks(self) -> StockScreen:
        return self.screen("stocks")

    @property
    def books(self) -> BookScreen:
        return self.screen("books")

    @property
    def categories(self) -> CategoryScreen:
        return self.screen("categories")

    @property
    def statistics(self) -> BranchStockStatisticsScreen:
        return self.screen("statistics")

    @property
    def sign_up(self) -> SignUpScreen:
        return self.screen("sign_up")

    @property
    def login_id_lookup(self) -> LoginIdLookupScreen:
        return self.screen("login_id_lookup")

    @property
    def password_change_email(self) -> PasswordChangeEmailScreen:
        return self.screen("password_change_email")

    def release_screen(self, name: str) -> None:
        """Unmount one screen; the next use starts from a fresh controller."""
        screen = self._screens.pop(name, None)
        if screen is not None:
            screen.release()

    def release(self) -> None:
        for name in list(self._screens):
            self.release_screen(name)

    async def logout(self) -> Envelope:
        """End the server session and drop the token, whatever the server says."""
        token = self.credentials.token()
        envelope = await call_remote("logout", lambda: self.service.logout(token))
        self.credentials.clear()
        self.release()
        return envelope


_SESSIONS: dict[str, AdminSession] = {}


def get_session(
    client_token: str,
    access_token: str | None = None,
    service: BookhubService | None = None,
) -> AdminSession:
    """
    Return the session of a client, creating it on first use.

    Sessions idle for longer than ``config.SESSION_IDLE_SECONDS`` are
    evicted before a new one is created.

    Args:
        client_token: Reflex client token of the browser tab.
        access_token: Current value of the access-token cookie.
        service: Service override; defaults to the configured service.
    """
    session = _SESSIONS.get(client_token)
    if session is None:
        evict_idle_sessions()
        session = AdminSession(service or get_bookhub_service(), access_token)
        _SESSIONS[client_token] = session
        LOG.info("get_session - new client:%s sessions:%s", client_token, len(_SESSIONS))
    else:
        session.sync_token(access_token)
        session.touch()
    return session


def release_session(client_token: str) -> None:
    session = _SESSIONS.pop(client_token, None)
    if session is not None:
        session.release()


async def end_session(client_token: str, access_token: str | None = None) -> Envelope:
    """Log the client out and forget its session."""
    envelope = await get_session(client_token, access_token).logout()
    release_session(client_token)
    return envelope


def evict_idle_sessions(
    max_idle_seconds: float | None = None, now: float | None = None
) -> int:
    """
    Release every session unused for longer than ``max_idle_seconds``.

    Returns:
        Number of sessions released.
    """
    limit = config.SESSION_IDLE_SECONDS if max_idle_seconds is None else max_idle_seconds
    current = time.monotonic() if now is None else now
    idle = [
        client_token
        for client_token, session in _SESSIONS.items()
        if current - session.last_used > limit
    ]
    for client_token in idle:
        release_session(client_token)
    if idle:
        LOG.info("evict_idle_sessions - released:%s sessions:%s", len(idle), len(_SESSIONS))
    return len(idle)
