"""
Book entry form used by the create-book modal.

The author and publisher pickers are search-as-you-type lookups; the
category select is fed by the category cache, one partition at a time.
Author, publisher and category are required references: a form missing one
is rejected locally before any call.
"""

from typing import Sequence

from bookhub_admin import config
from bookhub_admin.controllers.category_cache import CategoryCache
from bookhub_admin.controllers.remote import CredentialProvider
from bookhub_admin.controllers.validation import DebouncedLookup
from bookhub_admin.models.catalog import Author, BookCreateForm, CategoryType, Publisher
from bookhub_admin.models.common import Envelope, ListQuery, normalize_page
from bookhub_admin.services.bookhub_service import BookhubService

AUTHOR_REQUIRED_MESSAGE = "Select an author."
PUBLISHER_REQUIRED_MESSAGE = "Select a publisher."
CATEGORY_REQUIRED_MESSAGE = "Select a category."


def check_book_references(form: BookCreateForm) -> str | None:
    """First missing required reference of a create form, if any."""
    if not form.publisher_id:
        return PUBLISHER_REQUIRED_MESSAGE
    if not form.author_id:
        return AUTHOR_REQUIRED_MESSAGE
    if not form.category_id:
        return CATEGORY_REQUIRED_MESSAGE
    return None


def _author_options(data) -> Sequence[Author]:
    return normalize_page(data, Author.from_dict).content


def _publisher_options(data) -> Sequence[Publisher]:
    return normalize_page(data, Publisher.from_dict).content


class BookEntryForm:
    """
    Lookup and category state of the create-book form.

    Attributes:
        authors: Debounced author lookup.
        publishers: Debounced publisher lookup.
        categories: Category cache shared with the edit form.
        category_type: Partition the category select is showing.
        category_id: Selected second-level category.
    """

    def __init__(
        self,
        service: BookhubService,
        credentials: CredentialProvider,
        categories: CategoryCache,
        debounce: float | None = None,
    ) -> None:
        self.authors: DebouncedLookup[Author] = DebouncedLookup(
            "authors",
            lambda token, text: service.search_authors(
                token, text, 0, config.LOOKUP_PAGE_SIZE
            ),
            _author_options,
            credentials,
            debounce,
        )
        self.publishers: DebouncedLookup[Publisher] = DebouncedLookup(
            "publishers",
            lambda token, text: service.list_publishers(
                token, ListQuery(keyword=text, page_size=config.LOOKUP_PAGE_SIZE)
            ),
            _publisher_options,
            credentials,
            debounce,
        )
        self.categories = categories
        self.category_type = CategoryType.DOMESTIC
        self.category_id: int | None = None
        self.cover_file: bytes | None = None
        self.cover_filename = ""

    async def select_category_type(self, category_type: CategoryType) -> Envelope | None:
        """Switch the category select to another partition, loading it once."""
        self.category_type = CategoryType(category_type)
        self.category_id = None
        return await self.categories.load(self.category_type)

    def category_options(self) -> list[tuple[int, str]]:
        return self.categories.leaf_options(self.category_type)

    def select_category(self, category_id: int | None) -> None:
        self.category_id = category_id or None

    def attach_cover(self, filename: str, data: bytes) -> None:
        self.cover_filename = filename
        self.cover_file = data

    def select_author(self, author_id: int | None) -> None:
        self.authors.select(
            next((a for a in self.authors.options if a.author_id == author_id), None)
        )

    def select_publisher(self, publisher_id: int | None) -> None:
        self.publishers.select(
            next(
                (p for p in self.publishers.options if p.publisher_id == publisher_id),
                None,
            )
        )

    def complete(self, form: BookCreateForm) -> BookCreateForm:
        """Copy the picked references into ``form``."""
        author = self.authors.selected
        publisher = self.publishers.selected
        form.author_id = author.author_id if author else None
        form.publisher_id = publisher.publisher_id if publisher else None
        form.category_id = self.category_id
        if self.cover_file is not None:
            form.cover_file = self.cover_file
            form.cover_filename = self.cover_filename
        return form

    def reset(self) -> None:
        self.cancel()
        for lookup in (self.authors, self.publishers):
            lookup.text = ""
            lookup.options = ()
            lookup.select(None)
            lookup.message = ""
        self.category_id = None
        self.cover_file = None
        self.cover_filename = ""

    def cancel(self) -> None:
        self.authors.cancel()
        self.publishers.cancel()

    async def settle(self) -> None:
        await self.authors.settle()
        await self.publishers.settle()
