"""
Lazy, per-partition cache of the two-level category tree.

Each partition (DOMESTIC / FOREIGN) is fetched at most once per mounted
screen unless invalidated. At most one partition is expanded at a time and
every partition switch resets the set of expanded category ids.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Mapping, Sequence

from bookhub_admin.controllers.remote import CredentialProvider, call_with_token
from bookhub_admin.lib import logs
from bookhub_admin.models.catalog import CategoryNode, CategoryType
from bookhub_admin.models.common import Envelope

LOG = logs.logger(__file__)

INVALID_TREE_MESSAGE = "The server returned an unreadable category tree."


class PartitionStatus(str, Enum):
    UNLOADED = "UNLOADED"
    LOADING = "LOADING"
    LOADED = "LOADED"


@dataclass
class _Partition:
    status: PartitionStatus = PartitionStatus.UNLOADED
    nodes: tuple[CategoryNode, ...] = ()
    generation: int = 0


@dataclass(frozen=True)
class CategorySnapshot:
    nodes: Mapping[CategoryType, Sequence[CategoryNode]]
    statuses: Mapping[CategoryType, PartitionStatus]
    expanded_partition: CategoryType | None = None
    expanded_ids: frozenset[int] = field(default_factory=frozenset)
    message: str = ""


class CategoryCache:
    """
    Category partitions with their load status and expansion state.

    Attributes:
        expanded_partition: Partition currently shown, or None.
        expanded_ids: Ids of top-level categories whose children are shown.
        message: Last failure message.
    """

    def __init__(
        self,
        fetch_tree: Callable[[str, CategoryType], Awaitable[Envelope]],
        credentials: CredentialProvider,
    ) -> None:
        self._fetch_tree = fetch_tree
        self._credentials = credentials
        self._partitions: dict[CategoryType, _Partition] = {
            key: _Partition() for key in CategoryType
        }
        self.expanded_partition: CategoryType | None = None
        self.expanded_ids: set[int] = set()
        self.message = ""

    def status(self, key: CategoryType) -> PartitionStatus:
        return self._partitions[key].status

    def nodes(self, key: CategoryType) -> tuple[CategoryNode, ...]:
        return self._partitions[key].nodes

    async def load(self, key: CategoryType) -> Envelope | None:
        """
        Load a partition unless it is already loaded or loading.

        Visibility is left untouched.

        Returns:
            None when a load for ``key`` is already in flight, otherwise the
            outcome envelope (cached partitions succeed without a call).
        """
        key = CategoryType(key)
        partition = self._partitions[key]
        if partition.status is PartitionStatus.LOADED:
            return Envelope.success(partition.nodes)
        if partition.status is PartitionStatus.LOADING:
            return None
        if not self._credentials.token():
            self.message = Envelope.login_required().message
            return Envelope.login_required()

        partition.status = PartitionStatus.LOADING
        generation = partition.generation
        envelope = await call_with_token(
            self._credentials,
            f"categories.{key.value}",
            lambda token: self._fetch_tree(token, key),
        )
        if partition.generation != generation:
            LOG.debug("categories.%s - invalidated while loading", key.value)
            return envelope
        if not envelope.ok:
            partition.status = PartitionStatus.UNLOADED
            self.message = envelope.message
            return envelope
        try:
            nodes = tuple(CategoryNode.from_dict(raw) for raw in envelope.data or [])
        except (AttributeError, TypeError, ValueError):
            LOG.error("categories.%s - unreadable tree", key.value, exc_info=True)
            partition.status = PartitionStatus.UNLOADED
            self.message = INVALID_TREE_MESSAGE
            return Envelope.transport_failure(INVALID_TREE_MESSAGE)

        partition.status = PartitionStatus.LOADED
        partition.nodes = nodes
        self.message = ""
        LOG.info("categories.%s - loaded top_level:%s", key.value, len(nodes))
        return envelope

    async def select_partition(self, key: CategoryType) -> Envelope | None:
        """
        Show, hide or switch to a partition, loading it on first use.

        Returns:
            None when the request was ignored because the partition is
            still loading, otherwise the outcome envelope.
        """
        key = CategoryType(key)
        if not self._credentials.token():
            self.message = Envelope.login_required().message
            return Envelope.login_required()
        if self._partitions[key].status is PartitionStatus.LOADING:
            return None

        envelope = await self.load(key)
        if envelope is None or not envelope.ok:
            return envelope
        self.expanded_ids = set()
        self.expanded_partition = None if self.expanded_partition is key else key
        return envelope

    def toggle_category(self, category_id: int) -> None:
        if category_id in self.expanded_ids:
            self.expanded_ids.discard(category_id)
        else:
            self.expanded_ids.add(category_id)

    def invalidate(self, key: CategoryType) -> None:
        """Forget a partition so that the next selection refetches it."""
        key = CategoryType(key)
        partition = self._partitions[key]
        partition.status = PartitionStatus.UNLOADED
        partition.nodes = ()
        partition.generation += 1
        if self.expanded_partition is key:
            self.expanded_partition = None
            self.expanded_ids = set()

    @staticmethod
    def is_branch(node: CategoryNode) -> bool:
        return node.is_branch

    def leaf_options(self, key: CategoryType) -> list[tuple[int, str]]:
        """
        Selectable categories of a loaded partition as ``(id, label)`` pairs.

        Books are filed under second-level categories only, so top-level
        nodes contribute their children and nothing else.
        """
        return [
            (child.category_id, f"{node.category_name} > {child.category_name}")
            for node in self._partitions[CategoryType(key)].nodes
            for child in node.sub_categories
        ]

    def snapshot(self) -> CategorySnapshot:
        return CategorySnapshot(
            nodes={key: p.nodes for key, p in self._partitions.items()},
            statuses={key: p.status for key, p in self._partitions.items()},
            expanded_partition=self.expanded_partition,
            expanded_ids=frozenset(self.expanded_ids),
            message=self.message,
        )
