"""
Remote-call guard and credential provider shared by every controller.

Controllers never talk to a service directly: they go through
``call_remote`` (unauthenticated endpoints) or ``call_with_token``
(authenticated ones). Both always return an Envelope; transport failures
are logged and converted to a generic failure envelope so that nothing
raised by the transport reaches the rendering layer.
"""

from typing import Awaitable, Callable, Protocol

from bookhub_admin.lib import logs
from bookhub_admin.models.common import Envelope
from bookhub_admin.services.bookhub_service import RemoteCallError

LOG = logs.logger(__file__)

UNEXPECTED_FAILURE_MESSAGE = "Something went wrong. Please try again."


class CredentialProvider(Protocol):
    """Source of the employee's access token."""

    def token(self) -> str | None:
        """Return the current token, or None when logged out."""
        ...


class SessionCredentials:
    """Mutable token holder owned by one client session."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token or None

    def token(self) -> str | None:
        return self._token

    def update(self, token: str | None) -> None:
        self._token = token or None

    def clear(self) -> None:
        self._token = None


async def call_remote(
    operation: str, call: Callable[[], Awaitable[Envelope]]
) -> Envelope:
    """
    Await a remote call and convert failures into envelopes.

    Args:
        operation: Name used in log records.
        call: Zero-argument coroutine factory issuing the request.

    Returns:
        The service envelope, or a transport-failure envelope.
    """
    try:
        envelope = await call()
    except RemoteCallError:
        LOG.error("%s - transport failure", operation, exc_info=True)
        return Envelope.transport_failure()
    except Exception:
        LOG.exception("%s - unexpected failure", operation)
        return Envelope.transport_failure(UNEXPECTED_FAILURE_MESSAGE)
    if not envelope.ok:
        LOG.info("%s - code:%s message:%s", operation, envelope.code, envelope.message)
    return envelope


async def call_with_token(
    credentials: CredentialProvider,
    operation: str,
    call: Callable[[str], Awaitable[Envelope]],
) -> Envelope:
    """Like call_remote, but short-circuits with "login required" when there is no token."""
    token = credentials.token()
    if not token:
        return Envelope.login_required()
    return await call_remote(operation, lambda: call(token))
