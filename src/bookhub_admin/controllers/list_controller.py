"""
Filtered, paginated list retrieval shared by every resource screen.

One PaginatedListController owns the query (filters + page), the last good
page of items and the last failure message for one resource type. It is
generic over the item type and the query type; screens differ only in the
fetcher and parser they pass in.

Rules:
- any actual filter change fetches page 0, exactly once
- navigation outside ``[0, total_pages)`` is ignored without a fetch
- failures keep the previous content (no flicker to empty)
- after a removal, a page left empty steps back one page
"""

from dataclasses import dataclass, fields, replace
from typing import Awaitable, Callable, Generic, Sequence, TypeVar

from bookhub_admin.controllers.remote import CredentialProvider, call_with_token
from bookhub_admin.lib import logs
from bookhub_admin.models.common import Envelope, ListQuery, PageResult, normalize_page

LOG = logs.logger(__file__)

T = TypeVar("T")
Q = TypeVar("Q", bound=ListQuery)

INVALID_PAGE_MESSAGE = "The server returned an unreadable list."


@dataclass(frozen=True)
class ListSnapshot(Generic[T, Q]):
    """Read-only view handed to the rendering layer."""

    query: Q
    content: Sequence[T]
    total_pages: int
    current_page: int
    message: str
    loading: bool

    @property
    def has_previous(self) -> bool:
        return self.current_page > 0

    @property
    def has_next(self) -> bool:
        return self.current_page + 1 < self.total_pages

    @property
    def page_label(self) -> str:
        return f"{self.current_page + 1}/{self.total_pages}"


class PaginatedListController(Generic[T, Q]):
    """
    Query state plus the current page of one resource list.

    Attributes:
        name: Resource name used in log records.
        message: Last failure message, empty after a successful fetch.
        loading: True while a fetch is awaiting the server.
    """

    def __init__(
        self,
        name: str,
        fetcher: Callable[[str, Q], Awaitable[Envelope]],
        parse: Callable[[dict], T],
        credentials: CredentialProvider,
        query: Q,
    ) -> None:
        """
        Args:
            name: Resource name for logs.
            fetcher: Service call taking ``(token, query)``.
            parse: Converts one raw item into the item model.
            credentials: Token source.
            query: Initial filters and page size.
        """
        self.name = name
        self._fetcher = fetcher
        self._parse = parse
        self._credentials = credentials
        self._query: Q = query
        self._page: PageResult[T] = PageResult()
        self.message = ""
        self.loading = False

    @property
    def query(self) -> Q:
        return self._query

    @property
    def content(self) -> Sequence[T]:
        return self._page.content

    @property
    def total_pages(self) -> int:
        return self._page.total_pages

    @property
    def current_page(self) -> int:
        return self._page.current_page

    def snapshot(self) -> ListSnapshot[T, Q]:
        return ListSnapshot(
            query=self._query,
            content=tuple(self._page.content),
            total_pages=self._page.total_pages,
            current_page=self._page.current_page,
            message=self.message,
            loading=self.loading,
        )

    def _same_filters(self, other: Q) -> bool:
        return all(
            getattr(self._query, f.name) == getattr(other, f.name)
            for f in fields(self._query)
            if f.name != "page"
        )

    async def fetch_page(self, page_index: int) -> Envelope:
        """
        Fetch one page with the current filters.

        Returns:
            The envelope of the call (or a local failure envelope).
        """
        request = replace(self._query, page=page_index)
        self.loading = True
        try:
            envelope = await call_with_token(
                self._credentials,
                f"{self.name}.fetch_page",
                lambda token: self._fetcher(token, request),
            )
        finally:
            self.loading = False

        if not envelope.ok:
            self.message = envelope.message
            return envelope

        if not self._same_filters(request):
            # a newer filter change has its own fetch in flight
            LOG.debug("%s - dropping page %s for stale filters", self.name, page_index)
            return envelope

        try:
            page = normalize_page(envelope.data, self._parse)
        except (TypeError, ValueError, KeyError):
            LOG.error("%s - unreadable page payload", self.name, exc_info=True)
            self.message = INVALID_PAGE_MESSAGE
            return Envelope.transport_failure(INVALID_PAGE_MESSAGE)

        self._page = page
        self._query = replace(self._query, page=page.current_page)
        self.message = ""
        LOG.debug(
            "%s - page %s/%s items:%s",
            self.name,
            page.current_page + 1,
            page.total_pages,
            len(page.content),
        )
        return envelope

    async def set_filters(self, **changes) -> Envelope | None:
        """
        Apply filter changes and reload from the first page.

        Returns:
            The fetch envelope, or None when nothing actually changed.

        Raises:
            ValueError: For names that are not filter fields of the query.
        """
        unknown = set(changes) - type(self._query).filter_names()
        if unknown:
            raise ValueError(f"Unknown filter field(s) for {self.name}: {sorted(unknown)}")
        updated = replace(self._query, **changes)
        if updated == self._query:
            return None
        self._query = updated
        return await self.fetch_page(0)

    async def go_to_page(self, target: int) -> Envelope | None:
        """Fetch ``target`` if it exists; out-of-range requests are ignored."""
        if target < 0 or target >= self._page.total_pages:
            return None
        return await self.fetch_page(target)

    async def next_page(self) -> Envelope | None:
        return await self.go_to_page(self._page.current_page + 1)

    async def previous_page(self) -> Envelope | None:
        return await self.go_to_page(self._page.current_page - 1)

    async def refresh(self) -> Envelope:
        return await self.fetch_page(self._page.current_page)

    async def refresh_after_removal(self) -> Envelope:
        """
        Reload after an item disappeared from the listing.

        When the removed item was the only one on a page past the first, the
        page no longer exists and the previous one is fetched instead.
        """
        current = self._page.current_page
        is_last_on_page = len(self._page.content) == 1 and current > 0
        return await self.fetch_page(current - 1 if is_last_on_page else current)
