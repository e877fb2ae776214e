"""Category browser: the two partitions as a collapsible tree."""

from bookhub_admin.controllers.category_cache import CategoryCache
from bookhub_admin.controllers.remote import CredentialProvider
from bookhub_admin.models.catalog import CategoryNode, CategoryType
from bookhub_admin.models.common import Envelope
from bookhub_admin.services.bookhub_service import BookhubService


class CategoryScreen:
    name = "categories"

    def __init__(self, service: BookhubService, credentials: CredentialProvider) -> None:
        self.cache = CategoryCache(service.get_category_tree, credentials)
        self.selected: CategoryNode | None = None

    async def mount(self) -> Envelope:
        # partitions load on first selection
        return Envelope.success()

    async def select_partition(self, key: CategoryType) -> Envelope | None:
        return await self.cache.select_partition(key)

    def toggle_category(self, category_id: int) -> None:
        self.cache.toggle_category(category_id)

    def select_category(self, category_id: int) -> CategoryNode | None:
        """Pick a node of the expanded partition, at either level."""
        key = self.cache.expanded_partition
        self.selected = None
        if key is None:
            return None
        for node in self.cache.nodes(key):
            if node.category_id == category_id:
                self.selected = node
                break
            child = next(
                (c for c in node.sub_categories if c.category_id == category_id), None
            )
            if child is not None:
                self.selected = child
                break
        return self.selected

    def release(self) -> None:
        pass
