"""
Book administration screen.

The catalog search endpoint is unpaged, so the listing always holds a
single page. Hiding a book is a soft delete and rebalances the listing the
same way a deletion does.
"""

from bookhub_admin.controllers.category_cache import CategoryCache
from bookhub_admin.controllers.crud import CrudCoordinator
from bookhub_admin.controllers.list_controller import PaginatedListController
from bookhub_admin.controllers.remote import CredentialProvider
from bookhub_admin.models.catalog import Book, BookCreateForm, BookUpdateForm
from bookhub_admin.models.common import Envelope, ListQuery
from bookhub_admin.screens.book_entry import BookEntryForm, check_book_references
from bookhub_admin.services.bookhub_service import BookhubService

BOOK_NOT_LISTED_MESSAGE = "That book is no longer listed."


def _check_form(form: BookCreateForm | BookUpdateForm) -> str | None:
    if isinstance(form, BookCreateForm):
        return check_book_references(form)
    return None


class BookScreen:
    name = "books"

    def __init__(
        self,
        service: BookhubService,
        credentials: CredentialProvider,
        debounce: float | None = None,
    ) -> None:
        self.listing: PaginatedListController[Book, ListQuery] = (
            PaginatedListController(
                self.name,
                service.search_books,
                Book.from_dict,
                credentials,
                ListQuery(),
            )
        )
        self.crud: CrudCoordinator[Book, BookCreateForm | BookUpdateForm, str] = (
            CrudCoordinator(
                self.name,
                self.listing,
                credentials,
                create=service.create_book,
                update=service.update_book,
                hide=service.hide_book,
                check_form=_check_form,
            )
        )
        self.categories = CategoryCache(service.get_category_tree, credentials)
        self.entry = BookEntryForm(service, credentials, self.categories, debounce)

    async def mount(self) -> Envelope:
        return await self.listing.fetch_page(0)

    async def search(self, keyword: str) -> Envelope | None:
        return await self.listing.set_filters(keyword=keyword)

    def find(self, isbn: str) -> Book | None:
        return next((book for book in self.listing.content if book.isbn == isbn), None)

    async def open_create(self) -> Envelope | None:
        self.entry.reset()
        self.crud.open_create()
        return await self.entry.select_category_type(self.entry.category_type)

    async def open_edit(self, isbn: str) -> Envelope:
        book = self.find(isbn)
        if book is None:
            self.crud.message = BOOK_NOT_LISTED_MESSAGE
            return Envelope.local(BOOK_NOT_LISTED_MESSAGE)
        return await self.crud.open_edit(isbn, book)

    def edit_form(self) -> BookUpdateForm | None:
        book = self.crud.detail
        return BookUpdateForm.from_book(book) if book is not None else None

    async def submit_create(self, form: BookCreateForm) -> Envelope:
        envelope = await self.crud.submit_create(self.entry.complete(form))
        if envelope.ok:
            self.entry.reset()
        return envelope

    async def submit_update(self, form: BookUpdateForm) -> Envelope:
        if self.crud.editing_key is None:
            return Envelope.local(BOOK_NOT_LISTED_MESSAGE)
        return await self.crud.submit_update(self.crud.editing_key, form)

    async def hide(self, isbn: str) -> Envelope:
        return await self.crud.hide(isbn)

    def release(self) -> None:
        self.entry.cancel()
