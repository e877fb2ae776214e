"""
Resource-orchestration controllers.

Controllers hold per-screen state (queries, pages, modal flags, field
validation) and issue remote calls through the BookhubService. They never
import the UI framework, so they can be driven directly from tests.
"""

from bookhub_admin.controllers.category_cache import CategoryCache, PartitionStatus
from bookhub_admin.controllers.crud import CrudCoordinator
from bookhub_admin.controllers.list_controller import PaginatedListController
from bookhub_admin.controllers.remote import (
    CredentialProvider,
    SessionCredentials,
    call_remote,
    call_with_token,
)
from bookhub_admin.controllers.validation import (
    CancellableTimer,
    DebouncedLookup,
    FieldValidator,
    PasswordPair,
)

__all__ = [
    "CancellableTimer",
    "CategoryCache",
    "CredentialProvider",
    "CrudCoordinator",
    "DebouncedLookup",
    "FieldValidator",
    "PaginatedListController",
    "PartitionStatus",
    "PasswordPair",
    "SessionCredentials",
    "call_remote",
    "call_with_token",
]
