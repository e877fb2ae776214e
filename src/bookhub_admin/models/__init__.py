"""
Data models for the BookHub admin client.

This package provides:
- The remote-call Envelope and the list query/page models
- Back-office items (policies, publishers, stock, books, categories)
- Request forms for every create/update operation

All models are Python dataclasses with from_dict/to_dict helpers.
"""

from bookhub_admin.models.auth import PasswordChangeEmailForm, SignUpForm
from bookhub_admin.models.catalog import (
    Author,
    Book,
    BookCreateForm,
    BookStatus,
    BookUpdateForm,
    Branch,
    BranchStockBar,
    CategoryNode,
    CategoryType,
    Policy,
    PolicyDetail,
    PolicyForm,
    PolicyType,
    Publisher,
    PublisherForm,
    Stock,
    StockActionType,
    StockUpdateForm,
)
from bookhub_admin.models.common import (
    Envelope,
    ListQuery,
    PageResult,
    StockQuery,
    normalize_page,
)

__all__ = [
    "Author",
    "Book",
    "BookCreateForm",
    "BookStatus",
    "BookUpdateForm",
    "Branch",
    "BranchStockBar",
    "CategoryNode",
    "CategoryType",
    "Envelope",
    "ListQuery",
    "PageResult",
    "PasswordChangeEmailForm",
    "Policy",
    "PolicyDetail",
    "PolicyForm",
    "PolicyType",
    "Publisher",
    "PublisherForm",
    "SignUpForm",
    "Stock",
    "StockActionType",
    "StockQuery",
    "StockUpdateForm",
    "normalize_page",
]
