"""
Demo implementation of BookhubService using in-memory data.

This service is useful for:
- Local development without the Spring back end
- Exercising the screens with realistic data
- Tests that need a complete, stateful back end

Mutations change the in-memory copy only; every instance starts from the
seed data in ``bookhub_admin.data.demo_data``. Any non-empty token is
accepted.
"""

import asyncio
import copy
import math
from typing import Any, Callable, Iterable

from bookhub_admin.data import demo_data
from bookhub_admin.lib import logs
from bookhub_admin.models.auth import PasswordChangeEmailForm, SignUpForm
from bookhub_admin.models.catalog import (
    BookCreateForm,
    BookStatus,
    BookUpdateForm,
    CategoryType,
    PolicyForm,
    PublisherForm,
    StockActionType,
    StockUpdateForm,
)
from bookhub_admin.models.common import Envelope, ListQuery, StockQuery
from bookhub_admin.services.bookhub_service import BookhubService

LOG = logs.logger(__file__)

DEMO_RECOVERY_TOKEN = "demo-token"


def _contains(value: str | None, keyword: str) -> bool:
    return keyword.strip().lower() in (value or "").lower()


def _page(rows: list[dict], query: ListQuery) -> dict:
    """Slice rows into the paged payload shape returned by the API."""
    size = max(query.page_size, 1)
    total_pages = math.ceil(len(rows) / size)
    page = max(query.page, 0)
    start = page * size
    return {
        "content": rows[start : start + size],
        "totalPages": total_pages,
        "currentPage": page,
    }


class DemoBookhubService(BookhubService):
    """
    In-memory back end seeded with demo records.

    Attributes:
        latency: Seconds awaited before every response.
    """

    def __init__(self, latency: float = 0.0) -> None:
        self.latency = latency
        self._policies = copy.deepcopy(demo_data.DEMO_POLICIES)
        self._publishers = copy.deepcopy(demo_data.DEMO_PUBLISHERS)
        self._stocks = copy.deepcopy(demo_data.DEMO_STOCKS)
        self._books = copy.deepcopy(demo_data.DEMO_BOOKS)
        self._authors = copy.deepcopy(demo_data.DEMO_AUTHORS)
        self._branches = copy.deepcopy(demo_data.DEMO_BRANCHES)
        self._categories = copy.deepcopy(demo_data.DEMO_CATEGORY_TREES)
        self._employees = copy.deepcopy(demo_data.DEMO_EMPLOYEES)

    async def _respond(
        self, operation: str, token: str | None, produce: Callable[[], Envelope]
    ) -> Envelope:
        if self.latency:
            await asyncio.sleep(self.latency)
        if token is not None and not token:
            return Envelope.failure("Authentication failed.", code="AF")
        envelope = produce()
        LOG.debug("demo %s - code:%s", operation, envelope.code)
        return envelope

    @staticmethod
    def _find(rows: Iterable[dict], key: str, value: Any) -> dict | None:
        return next((row for row in rows if row.get(key) == value), None)

    @staticmethod
    def _next_id(rows: list[dict], key: str) -> int:
        return max((row[key] for row in rows), default=0) + 1

    # Policies

    async def list_policies(self, token: str, query: ListQuery) -> Envelope:
        def produce() -> Envelope:
            rows = [
                p
                for p in self._policies
                if _contains(p["policyTitle"], query.keyword)
                and (not query.type_filter or p["policyType"] == query.type_filter)
                and (not query.start_date or (p["startDate"] or "") >= query.start_date)
                and (not query.end_date or (p["endDate"] or "") <= query.end_date)
            ]
            return Envelope.success(_page(rows, query))

        return await self._respond("list_policies", token, produce)

    async def get_policy(self, token: str, policy_id: int) -> Envelope:
        def produce() -> Envelope:
            policy = self._find(self._policies, "policyId", policy_id)
            if policy is None:
                return Envelope.failure("Policy not found.", code="NP")
            return Envelope.success(dict(policy))

        return await self._respond("get_policy", token, produce)

    async def create_policy(self, token: str, form: PolicyForm) -> Envelope:
        def produce() -> Envelope:
            if not form.policy_title.strip():
                return Envelope.failure("Policy title is required.", code="VF")
            payload = form.to_payload()
            payload["policyId"] = self._next_id(self._policies, "policyId")
            self._policies.append(payload)
            return Envelope.success(dict(payload))

        return await self._respond("create_policy", token, produce)

    async def update_policy(
        self, token: str, policy_id: int, form: PolicyForm
    ) -> Envelope:
        def produce() -> Envelope:
            policy = self._find(self._policies, "policyId", policy_id)
            if policy is None:
                return Envelope.failure("Policy not found.", code="NP")
            policy.update(form.to_payload())
            return Envelope.success(dict(policy))

        return await self._respond("update_policy", token, produce)

    async def delete_policy(self, token: str, policy_id: int) -> Envelope:
        def produce() -> Envelope:
            policy = self._find(self._policies, "policyId", policy_id)
            if policy is None:
                return Envelope.failure("Policy not found.", code="NP")
            self._policies.remove(policy)
            return Envelope.success()

        return await self._respond("delete_policy", token, produce)

    # Publishers

    async def list_publishers(self, token: str, query: ListQuery) -> Envelope:
        def produce() -> Envelope:
            rows = [
                p for p in self._publishers if _contains(p["publisherName"], query.keyword)
            ]
            return Envelope.success(_page(rows, query))

        return await self._respond("list_publishers", token, produce)

    async def get_publisher(self, token: str, publisher_id: int) -> Envelope:
        def produce() -> Envelope:
            publisher = self._find(self._publishers, "publisherId", publisher_id)
            if publisher is None:
                return Envelope.failure("Publisher not found.", code="NP")
            return Envelope.success(dict(publisher))

        return await self._respond("get_publisher", token, produce)

    async def create_publisher(self, token: str, form: PublisherForm) -> Envelope:
        def produce() -> Envelope:
            name = form.publisher_name.strip()
            if not name:
                return Envelope.failure("Publisher name is required.", code="VF")
            if self._find(self._publishers, "publisherName", name):
                return Envelope.failure("Duplicate publisher name.", code="DP")
            row = {
                "publisherId": self._next_id(self._publishers, "publisherId"),
                "publisherName": name,
            }
            self._publishers.append(row)
            return Envelope.success(dict(row))

        return await self._respond("create_publisher", token, produce)

    async def update_publisher(
        self, token: str, publisher_id: int, form: PublisherForm
    ) -> Envelope:
        def produce() -> Envelope:
            publisher = self._find(self._publishers, "publisherId", publisher_id)
            if publisher is None:
                return Envelope.failure("Publisher not found.", code="NP")
            publisher.update(form.to_payload())
            return Envelope.success(dict(publisher))

        return await self._respond("update_publisher", token, produce)

    async def delete_publisher(self, token: str, publisher_id: int) -> Envelope:
        def produce() -> Envelope:
            publisher = self._find(self._publishers, "publisherId", publisher_id)
            if publisher is None:
                return Envelope.failure("Publisher not found.", code="NP")
            self._publishers.remove(publisher)
            return Envelope.success()

        return await self._respond("delete_publisher", token, produce)

    # Stock

    async def list_stocks(self, token: str, query: StockQuery) -> Envelope:
        def produce() -> Envelope:
            branch_id = getattr(query, "branch_id", None)
            rows = [
                s
                for s in self._stocks
                if _contains(s["bookTitle"], query.keyword)
                and (not branch_id or s["branchId"] == branch_id)
            ]
            return Envelope.success(_page(rows, query))

        return await self._respond("list_stocks", token, produce)

    async def get_stock(self, token: str, stock_id: int) -> Envelope:
        def produce() -> Envelope:
            stock = self._find(self._stocks, "stockId", stock_id)
            if stock is None:
                return Envelope.failure("Stock not found.", code="NS")
            return Envelope.success(dict(stock))

        return await self._respond("get_stock", token, produce)

    async def update_stock(
        self, token: str, stock_id: int, form: StockUpdateForm
    ) -> Envelope:
        def produce() -> Envelope:
            stock = self._find(self._stocks, "stockId", stock_id)
            if stock is None:
                return Envelope.failure("Stock not found.", code="NS")
            if form.amount <= 0:
                return Envelope.failure("Amount must be positive.", code="VF")
            delta = form.amount if form.type == StockActionType.IN.value else -form.amount
            if stock["amount"] + delta < 0:
                return Envelope.failure("Not enough stock.", code="NE_STOCK")
            stock["amount"] += delta
            return Envelope.success(dict(stock))

        return await self._respond("update_stock", token, produce)

    # Books

    async def search_books(self, token: str, query: ListQuery) -> Envelope:
        def produce() -> Envelope:
            keyword = query.keyword
            rows = [
                dict(b)
                for b in self._books
                if b["bookStatus"] != BookStatus.HIDDEN.value
                and any(
                    _contains(b[k], keyword)
                    for k in ("bookTitle", "authorName", "publisherName", "isbn")
                )
            ]
            # unpaged endpoint: bare list
            return Envelope.success(rows)

        return await self._respond("search_books", token, produce)

    async def create_book(self, token: str, form: BookCreateForm) -> Envelope:
        def produce() -> Envelope:
            if self._find(self._books, "isbn", form.isbn.strip()):
                return Envelope.failure("duplicate isbn", code="DI")
            author = self._find(self._authors, "authorId", form.author_id) or {}
            publisher = self._find(self._publishers, "publisherId", form.publisher_id) or {}
            row = {
                "isbn": form.isbn.strip(),
                "bookTitle": form.book_title,
                "authorName": author.get("authorName", ""),
                "publisherName": publisher.get("publisherName", ""),
                "bookPrice": form.book_price or 0,
                "bookStatus": BookStatus.ACTIVE.value,
                "description": form.description,
                "policyId": None,
                "categoryId": form.category_id,
            }
            self._books.append(row)
            return Envelope.success(dict(row))

        return await self._respond("create_book", token, produce)

    async def update_book(
        self, token: str, isbn: str, form: BookUpdateForm
    ) -> Envelope:
        def produce() -> Envelope:
            book = self._find(self._books, "isbn", isbn)
            if book is None:
                return Envelope.failure("Book not found.", code="NB")
            book.update(form.to_payload())
            return Envelope.success(dict(book))

        return await self._respond("update_book", token, produce)

    async def hide_book(self, token: str, isbn: str) -> Envelope:
        def produce() -> Envelope:
            book = self._find(self._books, "isbn", isbn)
            if book is None:
                return Envelope.failure("Book not found.", code="NB")
            book["bookStatus"] = BookStatus.HIDDEN.value
            return Envelope.success()

        return await self._respond("hide_book", token, produce)

    async def search_authors(
        self, token: str, author_name: str, page: int = 0, size: int = 10
    ) -> Envelope:
        def produce() -> Envelope:
            rows = [a for a in self._authors if _contains(a["authorName"], author_name)]
            return Envelope.success(_page(rows, ListQuery(page=page, page_size=size)))

        return await self._respond("search_authors", token, produce)

    # Categories

    async def get_category_tree(
        self, token: str, category_type: CategoryType
    ) -> Envelope:
        def produce() -> Envelope:
            tree = self._categories.get(CategoryType(category_type).value)
            if tree is None:
                return Envelope.failure("Unknown category type.", code="VF")
            return Envelope.success(copy.deepcopy(tree))

        return await self._respond("get_category_tree", token, produce)

    # Auth

    def _availability(self, key: str, value: str, label: str) -> Envelope:
        if self._find(self._employees, key, value):
            return Envelope.failure(f"{label} is already in use.", code="EX")
        return Envelope.success(message=f"{label} is available.")

    async def check_login_id(self, login_id: str) -> Envelope:
        return await self._respond(
            "check_login_id", None, lambda: self._availability("loginId", login_id, "Login id")
        )

    async def check_email(self, email: str) -> Envelope:
        return await self._respond(
            "check_email", None, lambda: self._availability("email", email, "Email")
        )

    async def check_phone_number(self, phone_number: str) -> Envelope:
        return await self._respond(
            "check_phone_number",
            None,
            lambda: self._availability("phoneNumber", phone_number, "Phone number"),
        )

    async def sign_up(self, form: SignUpForm) -> Envelope:
        def produce() -> Envelope:
            if self._find(self._employees, "loginId", form.login_id):
                return Envelope.failure("Login id is already in use.", code="EX")
            if form.password != form.confirm_password:
                return Envelope.failure("Passwords do not match.", code="VF")
            self._employees.append(
                {
                    "loginId": form.login_id,
                    "email": form.email,
                    "phoneNumber": form.phone_number,
                }
            )
            return Envelope.success(message="Sign-up request submitted.")

        return await self._respond("sign_up", None, produce)

    async def list_branches(self) -> Envelope:
        return await self._respond(
            "list_branches", None, lambda: Envelope.success(copy.deepcopy(self._branches))
        )

    async def find_login_id(self, token: str) -> Envelope:
        def produce() -> Envelope:
            if token != DEMO_RECOVERY_TOKEN:
                return Envelope.failure("The link has expired.", code="IT")
            return Envelope.success(self._employees[0]["loginId"])

        return await self._respond("find_login_id", None, produce)

    async def send_password_change_email(
        self, form: PasswordChangeEmailForm
    ) -> Envelope:
        def produce() -> Envelope:
            match = next(
                (
                    e
                    for e in self._employees
                    if e["loginId"] == form.login_id
                    and e["email"] == form.email
                    and e["phoneNumber"] == form.phone_number
                ),
                None,
            )
            if match is None:
                return Envelope.failure("No matching employee.", code="NE_EMP")
            return Envelope.success(message="A password change email has been sent.")

        return await self._respond("send_password_change_email", None, produce)

    # Statistics

    async def branch_stock_chart(self, token: str, year: int, month: int) -> Envelope:
        def produce() -> Envelope:
            rows = [
                {
                    "branchName": b["branchName"],
                    "inAmount": (b["branchId"] * 37 + month * 11 + year) % 120,
                    "outAmount": (b["branchId"] * 29 + month * 7 + year) % 90,
                    "lossAmount": (b["branchId"] + month) % 6,
                }
                for b in self._branches
            ]
            return Envelope.success(rows)

        return await self._respond("branch_stock_chart", token, produce)
