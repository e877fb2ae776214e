"""
Back-office domain models and request forms.

Items mirror the camelCase JSON returned by the BookHub REST API:

    Policy / PolicyDetail   pricing and discount policies
    Publisher               publisher directory entry
    Stock                   stock level of one book at one branch
    Book                    catalog entry (keyed by ISBN)
    Author, Branch          lookup values
    CategoryNode            two-level category tree
    BranchStockBar          statistics row

Items are immutable and always replaced wholesale by a subsequent fetch.
Forms serialize to the payloads the REST API expects via ``to_payload()``.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence


class PolicyType(str, Enum):
    BOOK_DISCOUNT = "BOOK_DISCOUNT"
    CATEGORY_DISCOUNT = "CATEGORY_DISCOUNT"
    TOTAL_PRICE_DISCOUNT = "TOTAL_PRICE_DISCOUNT"


class StockActionType(str, Enum):
    IN = "IN"
    OUT = "OUT"
    LOSS = "LOSS"


class BookStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    HIDDEN = "HIDDEN"


class CategoryType(str, Enum):
    """Top-level discriminator of the category tree."""

    DOMESTIC = "DOMESTIC"
    FOREIGN = "FOREIGN"


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True, slots=True)
class Policy:
    """Row of the policy list."""

    policy_id: int
    policy_title: str
    policy_type: str
    start_date: str = ""
    end_date: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Policy":
        return cls(
            policy_id=_int(data.get("policyId")),
            policy_title=data.get("policyTitle", ""),
            policy_type=data.get("policyType", ""),
            start_date=data.get("startDate") or "",
            end_date=data.get("endDate") or "",
        )

    @property
    def key(self) -> int:
        return self.policy_id

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class PolicyDetail:
    """Full policy as shown in the edit modal."""

    policy_id: int
    policy_title: str
    policy_description: str
    policy_type: str
    total_price_achieve: int | None = None
    discount_percent: int | None = None
    start_date: str = ""
    end_date: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PolicyDetail":
        return cls(
            policy_id=_int(data.get("policyId")),
            policy_title=data.get("policyTitle", ""),
            policy_description=data.get("policyDescription") or "",
            policy_type=data.get("policyType", ""),
            total_price_achieve=data.get("totalPriceAchieve"),
            discount_percent=data.get("discountPercent"),
            start_date=data.get("startDate") or "",
            end_date=data.get("endDate") or "",
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class Publisher:
    publisher_id: int
    publisher_name: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Publisher":
        return cls(
            publisher_id=_int(data.get("publisherId")),
            publisher_name=data.get("publisherName", ""),
        )

    @property
    def key(self) -> int:
        return self.publisher_id

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class Stock:
    stock_id: int
    book_isbn: str
    book_title: str
    branch_id: int
    branch_name: str
    amount: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Stock":
        return cls(
            stock_id=_int(data.get("stockId")),
            book_isbn=data.get("bookIsbn") or "",
            book_title=data.get("bookTitle", ""),
            branch_id=_int(data.get("branchId")),
            branch_name=data.get("branchName", ""),
            amount=_int(data.get("amount")),
        )

    @property
    def key(self) -> int:
        return self.stock_id

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class Book:
    """Catalog entry; the ISBN is the stable key."""

    isbn: str
    book_title: str
    author_name: str
    publisher_name: str
    book_price: int
    book_status: str = BookStatus.ACTIVE.value
    description: str = ""
    policy_id: int | None = None
    category_id: int | None = None
    cover_url: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Book":
        return cls(
            isbn=str(data.get("isbn", "")),
            book_title=data.get("bookTitle", ""),
            author_name=data.get("authorName", ""),
            publisher_name=data.get("publisherName", ""),
            book_price=_int(data.get("bookPrice")),
            book_status=data.get("bookStatus") or BookStatus.ACTIVE.value,
            description=data.get("description") or "",
            policy_id=data.get("policyId"),
            category_id=data.get("categoryId"),
            cover_url=data.get("coverUrl") or "",
        )

    @property
    def key(self) -> str:
        return self.isbn

    @property
    def formatted_price(self) -> str:
        return f"{self.book_price:,} KRW"

    def to_dict(self) -> dict:
        data = asdict(self)
        data["formatted_price"] = self.formatted_price
        return data


@dataclass(frozen=True, slots=True)
class Author:
    author_id: int
    author_name: str
    author_email: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Author":
        return cls(
            author_id=_int(data.get("authorId")),
            author_name=data.get("authorName", ""),
            author_email=data.get("authorEmail") or "",
        )

    @property
    def label(self) -> str:
        return f"{self.author_name} ({self.author_email})"


@dataclass(frozen=True, slots=True)
class Branch:
    branch_id: int
    branch_name: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Branch":
        return cls(
            branch_id=_int(data.get("branchId")),
            branch_name=data.get("branchName", ""),
        )


@dataclass(frozen=True, slots=True)
class CategoryNode:
    """Category with its (already fetched) children."""

    category_id: int
    category_name: str
    sub_categories: Sequence["CategoryNode"] = field(default_factory=tuple)

    @property
    def is_branch(self) -> bool:
        return len(self.sub_categories) > 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CategoryNode":
        return cls(
            category_id=_int(data.get("categoryId")),
            category_name=data.get("categoryName", ""),
            sub_categories=tuple(
                cls.from_dict(child) for child in data.get("subCategories") or []
            ),
        )

    def to_dict(self) -> dict:
        return {
            "category_id": self.category_id,
            "category_name": self.category_name,
            "sub_categories": [child.to_dict() for child in self.sub_categories],
        }


@dataclass(frozen=True, slots=True)
class BranchStockBar:
    """In/out/loss totals of one branch for a month."""

    branch_name: str
    in_amount: int = 0
    out_amount: int = 0
    loss_amount: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BranchStockBar":
        return cls(
            branch_name=data.get("branchName", ""),
            in_amount=_int(data.get("inAmount")),
            out_amount=_int(data.get("outAmount")),
            loss_amount=_int(data.get("lossAmount")),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class PolicyForm:
    policy_title: str = ""
    policy_description: str = ""
    policy_type: str = PolicyType.BOOK_DISCOUNT.value
    total_price_achieve: int | None = None
    discount_percent: int | None = None
    start_date: str = ""
    end_date: str = ""

    @classmethod
    def from_detail(cls, detail: PolicyDetail) -> "PolicyForm":
        return cls(
            policy_title=detail.policy_title,
            policy_description=detail.policy_description,
            policy_type=detail.policy_type,
            total_price_achieve=detail.total_price_achieve,
            discount_percent=detail.discount_percent,
            start_date=detail.start_date,
            end_date=detail.end_date,
        )

    def to_payload(self) -> dict:
        return {
            "policyTitle": self.policy_title,
            "policyDescription": self.policy_description or None,
            "policyType": self.policy_type,
            "totalPriceAchieve": self.total_price_achieve,
            "discountPercent": self.discount_percent,
            "startDate": self.start_date or None,
            "endDate": self.end_date or None,
        }


@dataclass(slots=True)
class PublisherForm:
    publisher_name: str = ""

    def to_payload(self) -> dict:
        return {"publisherName": self.publisher_name.strip()}


@dataclass(slots=True)
class StockUpdateForm:
    """Stock movement recorded against one stock row."""

    type: str = StockActionType.IN.value
    amount: int = 0
    branch_id: int | None = None
    book_isbn: str = ""
    description: str = ""

    def to_payload(self) -> dict:
        return {
            "type": self.type,
            "amount": self.amount,
            "branchId": self.branch_id,
            "bookIsbn": self.book_isbn,
            "description": self.description or None,
        }


@dataclass(slots=True)
class BookCreateForm:
    isbn: str = ""
    book_title: str = ""
    category_id: int | None = None
    author_id: int | None = None
    publisher_id: int | None = None
    book_price: int | None = None
    published_date: str = ""
    page_count: str = ""
    language: str = ""
    description: str = ""
    cover_file: bytes | None = None
    cover_filename: str = ""

    def to_payload(self) -> dict:
        return {
            "isbn": self.isbn.strip(),
            "bookTitle": self.book_title,
            "categoryId": self.category_id,
            "authorId": self.author_id,
            "publisherId": self.publisher_id,
            "bookPrice": self.book_price,
            "publishedDate": self.published_date,
            "pageCount": self.page_count,
            "language": self.language,
            "description": self.description,
        }


@dataclass(slots=True)
class BookUpdateForm:
    isbn: str
    book_price: int
    description: str = ""
    book_status: str = BookStatus.ACTIVE.value
    policy_id: int | None = None
    category_id: int | None = None
    cover_file: bytes | None = None
    cover_filename: str = ""

    @classmethod
    def from_book(cls, book: Book) -> "BookUpdateForm":
        return cls(
            isbn=book.isbn,
            book_price=book.book_price,
            description=book.description,
            book_status=book.book_status,
            policy_id=book.policy_id,
            category_id=book.category_id,
        )

    def to_payload(self) -> dict:
        payload = {
            "isbn": self.isbn,
            "bookPrice": self.book_price,
            "description": self.description,
            "bookStatus": self.book_status,
            "categoryId": self.category_id,
        }
        # the server keeps the current policy when the key is absent
        if self.policy_id is not None:
            payload["policyId"] = self.policy_id
        return payload
