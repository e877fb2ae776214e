"""
Common models shared by every BookHub admin screen.

This module defines:

- Envelope: the uniform ``{code, message, data}`` wrapper returned by every
  remote call, plus the locally produced failure codes
- ListQuery / StockQuery: filter and paging state for list screens
- PageResult: one normalized page of items
- normalize_page: the single place that reconciles the paged and the bare
  list response shapes
"""

from dataclasses import dataclass, field, fields
from typing import Any, Callable, Generic, Sequence, TypeVar

from benedict import benedict

T = TypeVar("T")

SUCCESS = "SU"
# Codes produced on the client side; the server never sends these.
LOCAL_VALIDATION = "LV"
LOGIN_REQUIRED = "LR"
TRANSPORT_FAILURE = "NE"

LOGIN_REQUIRED_MESSAGE = "Login required."
TRANSPORT_FAILURE_MESSAGE = "Could not reach the server. Please try again."


@dataclass(frozen=True, slots=True)
class Envelope:
    """
    Result of a remote call.

    Attributes:
        code: ``"SU"`` on success, anything else is a failure.
        message: Display-ready text authored by the server (or the client for
            local failures).
        data: Optional payload.
    """

    code: str
    message: str = ""
    data: Any = None

    @property
    def ok(self) -> bool:
        """True when the call succeeded."""
        return self.code == SUCCESS

    @classmethod
    def success(cls, data: Any = None, message: str = "Success.") -> "Envelope":
        return cls(code=SUCCESS, message=message, data=data)

    @classmethod
    def failure(cls, message: str, code: str = "ER") -> "Envelope":
        return cls(code=code, message=message)

    @classmethod
    def local(cls, message: str) -> "Envelope":
        """Failure of a client-side check; never reached the network."""
        return cls(code=LOCAL_VALIDATION, message=message)

    @classmethod
    def login_required(cls) -> "Envelope":
        return cls(code=LOGIN_REQUIRED, message=LOGIN_REQUIRED_MESSAGE)

    @classmethod
    def transport_failure(cls, message: str = TRANSPORT_FAILURE_MESSAGE) -> "Envelope":
        return cls(code=TRANSPORT_FAILURE, message=message)

    @classmethod
    def from_dict(cls, data: dict | None) -> "Envelope":
        """Deserialize a JSON envelope; a missing code is treated as a failure."""
        if not data:
            return cls.transport_failure()
        return cls(
            code=str(data.get("code") or TRANSPORT_FAILURE),
            message=str(data.get("message") or ""),
            data=data.get("data"),
        )

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "data": self.data}


@dataclass(frozen=True, slots=True)
class ListQuery:
    """
    Filter and paging state of a list screen.

    ``page`` is zero-based. Every field other than ``page`` and ``page_size``
    is a filter field; changing one resets the screen to the first page.
    """

    keyword: str = ""
    type_filter: str = ""
    start_date: str = ""
    end_date: str = ""
    page: int = 0
    page_size: int = 10

    @classmethod
    def filter_names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls)) - {"page", "page_size"}

    def params(self, type_param: str = "type") -> dict[str, Any]:
        """Request parameters; blank filters are omitted."""
        params: dict[str, Any] = {"page": self.page, "size": self.page_size}
        keyword = self.keyword.strip()
        if keyword:
            params["keyword"] = keyword
        if self.type_filter:
            params[type_param] = self.type_filter
        if self.start_date:
            params["start"] = self.start_date
        if self.end_date:
            params["end"] = self.end_date
        return params


@dataclass(frozen=True, slots=True)
class StockQuery(ListQuery):
    """Stock list query; adds a branch filter."""

    branch_id: int | None = None

    def params(self, type_param: str = "type") -> dict[str, Any]:
        params = ListQuery.params(self, type_param)
        if self.branch_id:
            params["branchId"] = self.branch_id
        return params


@dataclass(frozen=True, slots=True)
class PageResult(Generic[T]):
    """One page of items. ``current_page`` is zero-based."""

    content: Sequence[T] = field(default_factory=tuple)
    total_pages: int = 0
    current_page: int = 0

    @property
    def is_empty(self) -> bool:
        return len(self.content) == 0


def normalize_page(
    data: Any, parse: Callable[[dict], T] | None = None
) -> PageResult[T]:
    """
    Normalize either response shape into a PageResult.

    Paged responses look like ``{"content": [...], "totalPages": n,
    "currentPage": i}``. Spring style responses that nest the counts
    under ``page`` (``page.totalPages``, ``page.number``) are read as
    well. Unpaged endpoints return a bare list, which becomes a single
    page. ``None`` becomes an empty page with no pages at all.

    Args:
        data: The ``data`` member of a successful envelope.
        parse: Optional converter applied to every raw item.
    """
    convert = parse or (lambda item: item)
    if data is None:
        return PageResult(content=(), total_pages=0, current_page=0)
    if isinstance(data, (list, tuple)):
        return PageResult(
            content=tuple(convert(item) for item in data),
            total_pages=1,
            current_page=0,
        )
    if isinstance(data, dict) and "content" in data:
        # content items are not keypath-safe
        meta = benedict({key: value for key, value in data.items() if key != "content"})
        total_pages = meta.get("totalPages", meta.get("page.totalPages"))
        current_page = meta.get("currentPage", meta.get("page.number"))
        return PageResult(
            content=tuple(convert(item) for item in data.get("content") or []),
            total_pages=max(int(total_pages or 0), 0),
            current_page=max(int(current_page or 0), 0),
        )
    raise ValueError(f"Unrecognized page payload: {type(data).__name__}")
