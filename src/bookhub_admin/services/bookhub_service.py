"""
Abstract base class defining the BookHub remote-call contract.

Every operation is a coroutine returning an Envelope whose ``data`` holds
the raw JSON payload (dicts/lists). Parsing into models is left to the
controllers so that one service can feed any screen.

Implementations:
- HttpBookhubService: httpx client against the BookHub REST API
- DemoBookhubService: in-memory data for development and tests

Transport problems (connection errors, timeouts, unparsable bodies) are
raised as RemoteCallError. Business failures are returned as non-"SU"
envelopes, never raised.
"""

from abc import ABC, abstractmethod

from bookhub_admin.models.auth import PasswordChangeEmailForm, SignUpForm
from bookhub_admin.models.catalog import (
    BookCreateForm,
    BookUpdateForm,
    CategoryType,
    PolicyForm,
    PublisherForm,
    StockUpdateForm,
)
from bookhub_admin.models.common import Envelope, ListQuery, StockQuery


class RemoteCallError(Exception):
    """The remote call did not produce an envelope."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"{operation}: {reason}")
        self.operation = operation
        self.reason = reason


class BookhubService(ABC):
    """
    Remote-call boundary of the admin client.

    Subclasses implement every list/detail/mutation endpoint used by the
    screens. Methods taking a ``token`` require an authenticated employee.
    """

    # Policies

    @abstractmethod
    async def list_policies(self, token: str, query: ListQuery) -> Envelope:
        """Return a page (or bare list) of policies matching the query."""

    @abstractmethod
    async def get_policy(self, token: str, policy_id: int) -> Envelope:
        """Return one policy detail."""

    @abstractmethod
    async def create_policy(self, token: str, form: PolicyForm) -> Envelope: ...

    @abstractmethod
    async def update_policy(
        self, token: str, policy_id: int, form: PolicyForm
    ) -> Envelope: ...

    @abstractmethod
    async def delete_policy(self, token: str, policy_id: int) -> Envelope: ...

    # Publishers

    @abstractmethod
    async def list_publishers(self, token: str, query: ListQuery) -> Envelope: ...

    @abstractmethod
    async def get_publisher(self, token: str, publisher_id: int) -> Envelope: ...

    @abstractmethod
    async def create_publisher(self, token: str, form: PublisherForm) -> Envelope: ...

    @abstractmethod
    async def update_publisher(
        self, token: str, publisher_id: int, form: PublisherForm
    ) -> Envelope: ...

    @abstractmethod
    async def delete_publisher(self, token: str, publisher_id: int) -> Envelope: ...

    # Stock

    @abstractmethod
    async def list_stocks(self, token: str, query: StockQuery) -> Envelope: ...

    @abstractmethod
    async def get_stock(self, token: str, stock_id: int) -> Envelope: ...

    @abstractmethod
    async def update_stock(
        self, token: str, stock_id: int, form: StockUpdateForm
    ) -> Envelope: ...

    # Books

    @abstractmethod
    async def search_books(self, token: str, query: ListQuery) -> Envelope:
        """
        Search the catalog by keyword.

        The endpoint is unpaged: ``data`` is a bare list of books.
        """

    @abstractmethod
    async def create_book(self, token: str, form: BookCreateForm) -> Envelope: ...

    @abstractmethod
    async def update_book(
        self, token: str, isbn: str, form: BookUpdateForm
    ) -> Envelope: ...

    @abstractmethod
    async def hide_book(self, token: str, isbn: str) -> Envelope:
        """Soft-delete: move the book to the HIDDEN status."""

    @abstractmethod
    async def search_authors(
        self, token: str, author_name: str, page: int = 0, size: int = 10
    ) -> Envelope: ...

    # Categories

    @abstractmethod
    async def get_category_tree(
        self, token: str, category_type: CategoryType
    ) -> Envelope:
        """Return the two-level category tree of one partition."""

    # Auth

    @abstractmethod
    async def check_login_id(self, login_id: str) -> Envelope:
        """SU when the login id is still available."""

    @abstractmethod
    async def check_email(self, email: str) -> Envelope: ...

    @abstractmethod
    async def check_phone_number(self, phone_number: str) -> Envelope: ...

    @abstractmethod
    async def sign_up(self, form: SignUpForm) -> Envelope: ...

    @abstractmethod
    async def list_branches(self) -> Envelope: ...

    @abstractmethod
    async def find_login_id(self, token: str) -> Envelope:
        """Resolve the login id behind an emailed one-time token."""

    @abstractmethod
    async def send_password_change_email(
        self, form: PasswordChangeEmailForm
    ) -> Envelope: ...

    async def logout(self, token: str | None) -> Envelope:
        """End the server session. Stateless back ends have nothing to do."""
        return Envelope.success()

    # Statistics

    @abstractmethod
    async def branch_stock_chart(self, token: str, year: int, month: int) -> Envelope:
        """Monthly in/out/loss totals per branch."""

    async def aclose(self) -> None:
        """Release transport resources. Default implementation does nothing."""
