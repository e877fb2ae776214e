"""
Create / update / remove round-trips with their modal lifecycle.

A CrudCoordinator sits beside one PaginatedListController. It owns the
create and edit modal flags and the selected detail, and refreshes the
listing after every successful mutation. Failures leave the modals open
and the listing untouched.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar

from bookhub_admin.controllers.list_controller import PaginatedListController
from bookhub_admin.controllers.remote import CredentialProvider, call_with_token
from bookhub_admin.lib import logs
from bookhub_admin.models.common import Envelope

LOG = logs.logger(__file__)

D = TypeVar("D")
F = TypeVar("F")
K = TypeVar("K")

INVALID_DETAIL_MESSAGE = "The server returned an unreadable record."


@dataclass(frozen=True)
class CrudSnapshot(Generic[D, K]):
    create_open: bool
    edit_open: bool
    editing_key: K | None
    detail: D | None
    message: str
    notice: str


class CrudCoordinator(Generic[D, F, K]):
    """
    Modal state and mutation calls of one resource screen.

    Attributes:
        create_open: The create modal is shown.
        edit_open: The edit modal is shown.
        detail: Detail loaded by the last ``open_edit``.
        message: Last failure message.
        notice: Last success message.
    """

    def __init__(
        self,
        name: str,
        listing: PaginatedListController,
        credentials: CredentialProvider,
        *,
        create: Callable[[str, F], Awaitable[Envelope]] | None = None,
        update: Callable[[str, K, F], Awaitable[Envelope]] | None = None,
        delete: Callable[[str, K], Awaitable[Envelope]] | None = None,
        hide: Callable[[str, K], Awaitable[Envelope]] | None = None,
        fetch_detail: Callable[[str, K], Awaitable[Envelope]] | None = None,
        parse_detail: Callable[[Any], D] | None = None,
        check_form: Callable[[F], str | None] | None = None,
    ) -> None:
        """
        Args:
            name: Resource name for logs.
            listing: List refreshed after every successful mutation.
            credentials: Token source.
            create: Service call ``(token, form)``.
            update: Service call ``(token, key, form)``.
            delete: Service call ``(token, key)`` that removes the item.
            hide: Service call ``(token, key)`` that soft-deletes the item.
            fetch_detail: Service call ``(token, key)`` returning the detail.
            parse_detail: Converts the detail payload.
            check_form: Returns a message when a required reference is
                missing from the form, None when the form may be sent.
        """
        self.name = name
        self.listing = listing
        self._credentials = credentials
        self._create = create
        self._update = update
        self._delete = delete
        self._hide = hide
        self._fetch_detail = fetch_detail
        self._parse_detail = parse_detail or (lambda data: data)
        self._check_form = check_form
        self.create_open = False
        self.edit_open = False
        self.editing_key: K | None = None
        self.detail: D | None = None
        self.message = ""
        self.notice = ""

    def snapshot(self) -> CrudSnapshot[D, K]:
        return CrudSnapshot(
            create_open=self.create_open,
            edit_open=self.edit_open,
            editing_key=self.editing_key,
            detail=self.detail,
            message=self.message,
            notice=self.notice,
        )

    def open_create(self) -> None:
        self.message = ""
        self.create_open = True

    def close_create(self) -> None:
        self.create_open = False

    async def open_edit(self, key: K, detail: D | None = None) -> Envelope:
        """
        Load the detail of ``key`` and show the edit modal.

        Args:
            key: Item key.
            detail: Already known detail; skips the fetch when given.
        """
        self.message = ""
        if detail is None:
            if self._fetch_detail is None:
                raise ValueError(f"{self.name} has no detail endpoint")
            envelope = await call_with_token(
                self._credentials,
                f"{self.name}.open_edit",
                lambda token: self._fetch_detail(token, key),
            )
            if not envelope.ok:
                self.message = envelope.message
                return envelope
            try:
                detail = self._parse_detail(envelope.data)
            except (AttributeError, TypeError, ValueError, KeyError):
                LOG.error(
                    "%s.open_edit - unreadable detail key:%s", self.name, key, exc_info=True
                )
                self.message = INVALID_DETAIL_MESSAGE
                return Envelope.transport_failure(INVALID_DETAIL_MESSAGE)
        else:
            envelope = Envelope.success(detail)
        self.editing_key = key
        self.detail = detail
        self.edit_open = True
        return envelope

    def close_edit(self) -> None:
        self.edit_open = False
        self.editing_key = None
        self.detail = None

    def _checked(self, form: F) -> Envelope | None:
        if self._check_form is None:
            return None
        problem = self._check_form(form)
        if problem:
            self.message = problem
            return Envelope.local(problem)
        return None

    async def _mutate(
        self,
        operation: str,
        call: Callable[[str], Awaitable[Envelope]],
        after: Callable[[], Awaitable[Envelope]],
    ) -> Envelope:
        envelope = await call_with_token(
            self._credentials, f"{self.name}.{operation}", call
        )
        if not envelope.ok:
            self.message = envelope.message
            return envelope
        LOG.info("%s.%s - %s", self.name, operation, envelope.message)
        self.create_open = False
        self.close_edit()
        self.message = ""
        self.notice = envelope.message
        await after()
        return envelope

    async def submit_create(self, form: F) -> Envelope:
        if self._create is None:
            raise ValueError(f"{self.name} does not support create")
        rejected = self._checked(form)
        if rejected is not None:
            return rejected
        return await self._mutate(
            "create", lambda token: self._create(token, form), self.listing.refresh
        )

    async def submit_update(self, key: K, form: F) -> Envelope:
        if self._update is None:
            raise ValueError(f"{self.name} does not support update")
        rejected = self._checked(form)
        if rejected is not None:
            return rejected
        return await self._mutate(
            "update",
            lambda token: self._update(token, key, form),
            self.listing.refresh,
        )

    async def remove(self, key: K) -> Envelope:
        """Delete ``key`` and rebalance the listing."""
        if self._delete is None:
            raise ValueError(f"{self.name} does not support delete")
        return await self._mutate(
            "remove",
            lambda token: self._delete(token, key),
            self.listing.refresh_after_removal,
        )

    async def hide(self, key: K) -> Envelope:
        """Soft-delete ``key``; the listing is rebalanced as for a deletion."""
        if self._hide is None:
            raise ValueError(f"{self.name} does not support hide")
        return await self._mutate(
            "hide",
            lambda token: self._hide(token, key),
            self.listing.refresh_after_removal,
        )
