"""
Per-screen composition of controllers.

Each screen wires the controllers it needs to the service calls of one
back-office page and exposes ``mount()`` (first load) and ``release()``
(cancel anything scheduled). Screens are owned by a client session.
"""

from bookhub_admin.screens.account_recovery import (
    LoginIdLookupScreen,
    PasswordChangeEmailScreen,
)
from bookhub_admin.screens.book import BookScreen
from bookhub_admin.screens.book_entry import BookEntryForm
from bookhub_admin.screens.category import CategoryScreen
from bookhub_admin.screens.policy import PolicyScreen
from bookhub_admin.screens.publisher import PublisherScreen
from bookhub_admin.screens.sign_up import SignUpScreen
from bookhub_admin.screens.statistics import BranchStockStatisticsScreen
from bookhub_admin.screens.stock import StockScreen

__all__ = [
    "BookEntryForm",
    "BookScreen",
    "BranchStockStatisticsScreen",
    "CategoryScreen",
    "LoginIdLookupScreen",
    "PasswordChangeEmailScreen",
    "PolicyScreen",
    "PublisherScreen",
    "SignUpScreen",
    "StockScreen",
]
