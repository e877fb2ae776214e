"""
Reflex UI components for the BookHub admin application.

This package provides one builder per page plus the shared pieces:
- layout: page shell, navigation and message banners
- tables: data table, pagination, modal and form inputs
- resource_pages: policies, publishers and stock
- book_page: book search with the create / edit forms
- category_tree: collapsible category partitions
- auth_pages: token entry, sign-up and account recovery
- statistics: branch stock chart

All builders are pure functions returning Reflex components bound to the
state classes in ``bookhub_admin.state``.
"""

from bookhub_admin.components.auth_pages import (
    index_page,
    login_id_page,
    password_change_page,
    sign_up_page,
)
from bookhub_admin.components.book_page import book_page
from bookhub_admin.components.category_tree import category_page
from bookhub_admin.components.resource_pages import (
    policy_page,
    publisher_page,
    stock_page,
)
from bookhub_admin.components.statistics import statistics_page

__all__ = [
    "book_page",
    "category_page",
    "index_page",
    "login_id_page",
    "password_change_page",
    "policy_page",
    "publisher_page",
    "sign_up_page",
    "statistics_page",
    "stock_page",
]
