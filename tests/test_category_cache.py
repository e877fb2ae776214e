import asyncio

from bookhub_admin.controllers.category_cache import (
    INVALID_TREE_MESSAGE,
    CategoryCache,
    PartitionStatus,
)
from bookhub_admin.controllers.remote import SessionCredentials
from bookhub_admin.models.catalog import CategoryType
from bookhub_admin.models.common import LOGIN_REQUIRED, Envelope
from bookhub_admin.services.bookhub_service_demo import DemoBookhubService

DOMESTIC = CategoryType.DOMESTIC
FOREIGN = CategoryType.FOREIGN


def _cache(service, credentials, call_log) -> CategoryCache:
    call_log.wrap(service, "get_category_tree")
    return CategoryCache(service.get_category_tree, credentials)


def test_first_selection_loads_and_expands(service, credentials, call_log):
    cache = _cache(service, credentials, call_log)

    envelope = asyncio.run(cache.select_partition(DOMESTIC))

    assert envelope.ok
    assert call_log.count("get_category_tree") == 1
    assert cache.status(DOMESTIC) is PartitionStatus.LOADED
    assert cache.status(FOREIGN) is PartitionStatus.UNLOADED
    assert cache.expanded_partition is DOMESTIC
    assert [n.category_name for n in cache.nodes(DOMESTIC)] == [
        "Literature",
        "Humanities",
        "Magazines",
    ]


def test_reselecting_loaded_partition_uses_cache(service, credentials, call_log):
    cache = _cache(service, credentials, call_log)

    async def scenario():
        await cache.select_partition(DOMESTIC)
        await cache.select_partition(FOREIGN)
        await cache.select_partition(DOMESTIC)

    asyncio.run(scenario())

    assert call_log.count("get_category_tree") == 2
    assert cache.expanded_partition is DOMESTIC


def test_selecting_expanded_partition_collapses_it(service, credentials, call_log):
    cache = _cache(service, credentials, call_log)

    async def scenario():
        await cache.select_partition(FOREIGN)
        await cache.select_partition(FOREIGN)

    asyncio.run(scenario())

    assert cache.expanded_partition is None
    assert cache.status(FOREIGN) is PartitionStatus.LOADED


def test_switching_partitions_resets_expanded_ids(service, credentials, call_log):
    cache = _cache(service, credentials, call_log)

    async def scenario():
        await cache.select_partition(DOMESTIC)
        cache.toggle_category(1)
        cache.toggle_category(2)
        assert cache.expanded_ids == {1, 2}
        await cache.select_partition(FOREIGN)

    asyncio.run(scenario())

    assert cache.expanded_ids == set()
    assert cache.snapshot().expanded_partition is FOREIGN


def test_toggle_category_twice_collapses():
    cache = CategoryCache(DemoBookhubService().get_category_tree, SessionCredentials("t"))

    cache.toggle_category(4)
    cache.toggle_category(4)

    assert cache.expanded_ids == set()


def test_failed_load_leaves_partition_unloaded():
    async def fetch_tree(token, key):
        return Envelope.failure("Category service down.", code="CD")

    cache = CategoryCache(fetch_tree, SessionCredentials("t"))

    envelope = asyncio.run(cache.select_partition(DOMESTIC))

    assert not envelope.ok
    assert cache.status(DOMESTIC) is PartitionStatus.UNLOADED
    assert cache.expanded_partition is None
    assert cache.message == "Category service down."


def test_failed_switch_keeps_open_partition_and_expansion():
    async def fetch_tree(token, key):
        if key is FOREIGN:
            return Envelope.failure("Category service down.", code="CD")
        return await DemoBookhubService().get_category_tree(token, key)

    cache = CategoryCache(fetch_tree, SessionCredentials("t"))

    async def scenario():
        await cache.select_partition(DOMESTIC)
        cache.toggle_category(1)
        return await cache.select_partition(FOREIGN)

    envelope = asyncio.run(scenario())

    assert not envelope.ok
    assert cache.expanded_partition is DOMESTIC
    assert cache.expanded_ids == {1}
    assert cache.status(FOREIGN) is PartitionStatus.UNLOADED
    assert cache.message == "Category service down."


def test_unreadable_tree_is_reported():
    async def fetch_tree(token, key):
        return Envelope.success([42])

    cache = CategoryCache(fetch_tree, SessionCredentials("t"))

    envelope = asyncio.run(cache.load(FOREIGN))

    assert not envelope.ok
    assert cache.message == INVALID_TREE_MESSAGE
    assert cache.status(FOREIGN) is PartitionStatus.UNLOADED


def test_selection_while_loading_is_ignored(call_log):
    service = DemoBookhubService(latency=0.01)
    cache = _cache(service, SessionCredentials("t"), call_log)

    async def scenario():
        return await asyncio.gather(
            cache.select_partition(DOMESTIC), cache.select_partition(DOMESTIC)
        )

    first, second = asyncio.run(scenario())

    assert first.ok
    assert second is None
    assert call_log.count("get_category_tree") == 1
    assert cache.expanded_partition is DOMESTIC


def test_missing_token_makes_no_call(service, call_log):
    cache = _cache(service, SessionCredentials(None), call_log)

    envelope = asyncio.run(cache.select_partition(DOMESTIC))

    assert envelope.code == LOGIN_REQUIRED
    assert call_log.count("get_category_tree") == 0


def test_invalidate_forces_refetch(service, credentials, call_log):
    cache = _cache(service, credentials, call_log)

    async def scenario():
        await cache.select_partition(DOMESTIC)
        cache.invalidate(DOMESTIC)
        assert cache.expanded_partition is None
        await cache.select_partition(DOMESTIC)

    asyncio.run(scenario())

    assert call_log.count("get_category_tree") == 2
    assert cache.expanded_partition is DOMESTIC


def test_leaf_options_list_second_level_only(service, credentials, call_log):
    cache = _cache(service, credentials, call_log)

    asyncio.run(cache.load(DOMESTIC))

    assert cache.leaf_options(DOMESTIC) == [
        (11, "Literature > Novels"),
        (12, "Literature > Poetry"),
        (13, "Humanities > History"),
    ]
    assert cache.expanded_partition is None
    assert not cache.is_branch(cache.nodes(DOMESTIC)[2])
