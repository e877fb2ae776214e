"""
httpx-backed implementation of BookhubService.

Talks to the BookHub REST API (Spring back end). Every response body is a
JSON envelope ``{"code", "message", "data"}``, including error responses,
so the body is parsed regardless of the HTTP status. Only a body that is
not an envelope, or a transport error, raises RemoteCallError.

Authenticated calls carry ``Authorization: Bearer <token>``. Book create and
update are multipart requests: the JSON DTO travels as one part and the
optional cover image as another.

Environment Variables:
    BOOKHUB_API_BASE_URL: API root, e.g. ``http://localhost:8080/api/v1``
    BOOKHUB_REQUEST_TIMEOUT: per-request timeout in seconds
"""

import json
from typing import Any

import httpx
from benedict import benedict

from bookhub_admin import config
from bookhub_admin.lib import logs
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
from bookhub_admin.services.bookhub_service import BookhubService, RemoteCallError

LOG = logs.logger(__file__)


def _parse_envelope(operation: str, response: httpx.Response) -> Envelope:
    """
    Convert an HTTP response into an Envelope.

    Uses benedict keypaths to read the result code and the logged page
    count without caring whether ``data`` is an object, a list or absent.
    """
    try:
        payload = response.json()
    except ValueError as exc:
        raise RemoteCallError(
            operation, f"status {response.status_code}: body is not JSON"
        ) from exc
    if not isinstance(payload, dict):
        raise RemoteCallError(
            operation, f"status {response.status_code}: body is not an envelope"
        )

    body = benedict(payload)
    code = body.get("code")
    if not code:
        raise RemoteCallError(
            operation, f"status {response.status_code}: envelope has no code"
        )
    LOG.debug(
        "%s - status:%s code:%s totalPages:%s",
        operation,
        response.status_code,
        code,
        body.get("data.totalPages") if isinstance(payload.get("data"), dict) else None,
    )
    return Envelope(
        code=str(code),
        message=str(body.get("message") or ""),
        data=payload.get("data"),
    )


def _multipart(dto: dict, part_name: str, cover: bytes | None, filename: str) -> dict:
    files: dict[str, Any] = {
        part_name: (None, json.dumps(dto), "application/json"),
    }
    if cover:
        files["coverImageFile"] = (filename or "cover.jpg", cover, "image/*")
    return files


class HttpBookhubService(BookhubService):
    """
    Production service using the BookHub REST API.

    Attributes:
        base_url: API root every path is resolved against.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the HTTP client.

        Args:
            base_url: API root; defaults to BOOKHUB_API_BASE_URL.
            timeout: Request timeout in seconds.
            transport: Optional transport override (tests use MockTransport).
        """
        self.base_url = base_url or config.API_BASE_URL
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or config.REQUEST_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def _call(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        token: str | None = None,
        params: dict | None = None,
        json_body: dict | None = None,
        files: dict | None = None,
    ) -> Envelope:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json_body,
                files=files,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            raise RemoteCallError(operation, str(exc) or type(exc).__name__) from exc
        return _parse_envelope(operation, response)

    async def aclose(self) -> None:
        await self._client.aclose()

    # Policies

    async def list_policies(self, token: str, query: ListQuery) -> Envelope:
        return await self._call(
            "list_policies",
            "GET",
            "/common/policies",
            token=token,
            params=query.params(type_param="policyType"),
        )

    async def get_policy(self, token: str, policy_id: int) -> Envelope:
        return await self._call(
            "get_policy", "GET", f"/common/policies/{policy_id}", token=token
        )

    async def create_policy(self, token: str, form: PolicyForm) -> Envelope:
        return await self._call(
            "create_policy",
            "POST",
            "/admin/policies",
            token=token,
            json_body=form.to_payload(),
        )

    async def update_policy(
        self, token: str, policy_id: int, form: PolicyForm
    ) -> Envelope:
        return await self._call(
            "update_policy",
            "PUT",
            f"/admin/policies/{policy_id}",
            token=token,
            json_body=form.to_payload(),
        )

    async def delete_policy(self, token: str, policy_id: int) -> Envelope:
        return await self._call(
            "delete_policy", "DELETE", f"/admin/policies/{policy_id}", token=token
        )

    # Publishers

    async def list_publishers(self, token: str, query: ListQuery) -> Envelope:
        return await self._call(
            "list_publishers",
            "GET",
            "/admin/publishers",
            token=token,
            params=query.params(),
        )

    async def get_publisher(self, token: str, publisher_id: int) -> Envelope:
        return await self._call(
            "get_publisher", "GET", f"/admin/publishers/{publisher_id}", token=token
        )

    async def create_publisher(self, token: str, form: PublisherForm) -> Envelope:
        return await self._call(
            "create_publisher",
            "POST",
            "/admin/publishers",
            token=token,
            json_body=form.to_payload(),
        )

    async def update_publisher(
        self, token: str, publisher_id: int, form: PublisherForm
    ) -> Envelope:
        return await self._call(
            "update_publisher",
            "PUT",
            f"/admin/publishers/{publisher_id}",
            token=token,
            json_body=form.to_payload(),
        )

    async def delete_publisher(self, token: str, publisher_id: int) -> Envelope:
        return await self._call(
            "delete_publisher",
            "DELETE",
            f"/admin/publishers/{publisher_id}",
            token=token,
        )

    # Stock

    async def list_stocks(self, token: str, query: StockQuery) -> Envelope:
        return await self._call(
            "list_stocks",
            "GET",
            "/admin/stocks",
            token=token,
            params=query.params(type_param="stockActionType"),
        )

    async def get_stock(self, token: str, stock_id: int) -> Envelope:
        return await self._call(
            "get_stock", "GET", f"/admin/stocks/{stock_id}", token=token
        )

    async def update_stock(
        self, token: str, stock_id: int, form: StockUpdateForm
    ) -> Envelope:
        return await self._call(
            "update_stock",
            "PUT",
            f"/admin/stocks/{stock_id}",
            token=token,
            json_body=form.to_payload(),
        )

    # Books

    async def search_books(self, token: str, query: ListQuery) -> Envelope:
        return await self._call(
            "search_books",
            "GET",
            "/common/books/search",
            token=token,
            params={"keyword": query.keyword.strip()},
        )

    async def create_book(self, token: str, form: BookCreateForm) -> Envelope:
        return await self._call(
            "create_book",
            "POST",
            "/admin/books",
            token=token,
            files=_multipart(
                form.to_payload(), "dto", form.cover_file, form.cover_filename
            ),
        )

    async def update_book(
        self, token: str, isbn: str, form: BookUpdateForm
    ) -> Envelope:
        return await self._call(
            "update_book",
            "PUT",
            f"/admin/books/{isbn}",
            token=token,
            files=_multipart(
                form.to_payload(), "dto", form.cover_file, form.cover_filename
            ),
        )

    async def hide_book(self, token: str, isbn: str) -> Envelope:
        return await self._call(
            "hide_book", "PUT", f"/admin/books/hidden/{isbn}", token=token
        )

    async def search_authors(
        self, token: str, author_name: str, page: int = 0, size: int = 10
    ) -> Envelope:
        return await self._call(
            "search_authors",
            "GET",
            "/admin/authors",
            token=token,
            params={"authorName": author_name, "page": page, "size": size},
        )

    # Categories

    async def get_category_tree(
        self, token: str, category_type: CategoryType
    ) -> Envelope:
        return await self._call(
            "get_category_tree",
            "GET",
            f"/common/categories/tree/{CategoryType(category_type).value}",
            token=token,
        )

    # Auth

    async def check_login_id(self, login_id: str) -> Envelope:
        return await self._call(
            "check_login_id",
            "GET",
            "/auth/login-id-exists",
            params={"loginId": login_id},
        )

    async def check_email(self, email: str) -> Envelope:
        return await self._call(
            "check_email", "GET", "/auth/email-exists", params={"email": email}
        )

    async def check_phone_number(self, phone_number: str) -> Envelope:
        return await self._call(
            "check_phone_number",
            "GET",
            "/auth/phone-number-exists",
            params={"phoneNumber": phone_number},
        )

    async def sign_up(self, form: SignUpForm) -> Envelope:
        return await self._call(
            "sign_up", "POST", "/auth/signup", json_body=form.to_payload()
        )

    async def list_branches(self) -> Envelope:
        return await self._call("list_branches", "GET", "/auth/branches")

    async def find_login_id(self, token: str) -> Envelope:
        return await self._call(
            "find_login_id", "GET", "/auth/login-id-find", params={"token": token}
        )

    async def send_password_change_email(
        self, form: PasswordChangeEmailForm
    ) -> Envelope:
        return await self._call(
            "send_password_change_email",
            "POST",
            "/auth/password-change/email",
            json_body=form.to_payload(),
        )

    async def logout(self, token: str | None) -> Envelope:
        return await self._call("logout", "POST", "/auth/logout", token=token)

    # Statistics

    async def branch_stock_chart(self, token: str, year: int, month: int) -> Envelope:
        return await self._call(
            "branch_stock_chart",
            "GET",
            "/admin/statistics/stocks/branch",
            token=token,
            params={"year": year, "month": month},
        )
