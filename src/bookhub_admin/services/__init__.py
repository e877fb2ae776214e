"""
BookHub back end access for the admin screens.

Every screen talks to the back end through a BookhubService and receives
Envelope results. ``BOOKHUB_SERVICE`` selects the implementation:

- http (default): HttpBookhubService calls the BookHub REST API under
  ``BOOKHUB_API_BASE_URL`` with the session's bearer token.
- demo: DemoBookhubService keeps seeded employees, books and stock in memory,
  which is what the tests and offline UI work run against.

get_bookhub_service() builds one instance per kind and every AdminSession
shares it; tokens are passed per call, so the service holds no user state.
"""

from functools import cache
from typing import Callable, Dict

from bookhub_admin import config
from bookhub_admin.lib import logs
from bookhub_admin.services.bookhub_service import BookhubService, RemoteCallError
from bookhub_admin.services.bookhub_service_demo import DemoBookhubService
from bookhub_admin.services.bookhub_service_http import HttpBookhubService

LOG = logs.logger(__file__)

_SERVICE_REGISTRY: Dict[str, Callable[[], BookhubService]] = {
    "demo": lambda: DemoBookhubService(),
    "http": lambda: HttpBookhubService(),
}


@cache
def get_bookhub_service(kind: str | None = None) -> BookhubService:
    """Return the configured service implementation."""
    resolved_kind = (kind or config.SERVICE_KIND).lower()
    LOG.info("get_bookhub_service - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _SERVICE_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown bookhub service kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory()


__all__ = [
    "BookhubService",
    "DemoBookhubService",
    "HttpBookhubService",
    "RemoteCallError",
    "get_bookhub_service",
]
