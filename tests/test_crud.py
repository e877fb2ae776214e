import asyncio

import pytest

from bookhub_admin.controllers.crud import INVALID_DETAIL_MESSAGE, CrudCoordinator
from bookhub_admin.controllers.list_controller import PaginatedListController
from bookhub_admin.models.catalog import (
    BookCreateForm,
    BookStatus,
    CategoryType,
    Policy,
    PolicyForm,
    PublisherForm,
)
from bookhub_admin.models.common import (
    LOCAL_VALIDATION,
    TRANSPORT_FAILURE,
    Envelope,
    ListQuery,
)
from bookhub_admin.screens.book import BOOK_NOT_LISTED_MESSAGE, BookScreen
from bookhub_admin.screens.book_entry import (
    CATEGORY_REQUIRED_MESSAGE,
    PUBLISHER_REQUIRED_MESSAGE,
)
from bookhub_admin.screens.policy import PolicyScreen
from bookhub_admin.screens.publisher import NAME_REQUIRED_MESSAGE, PublisherScreen
from bookhub_admin.screens.stock import AMOUNT_MESSAGE, StockScreen

EXISTING_ISBN = "9788936434120"


def _book_screen(service, credentials, call_log) -> BookScreen:
    for name in ("search_books", "create_book", "hide_book"):
        call_log.wrap(service, name)
    return BookScreen(service, credentials, debounce=0.01)


async def _pick_references(screen: BookScreen) -> None:
    screen.entry.authors.on_input("Han")
    screen.entry.publishers.on_input("Chang")
    await screen.entry.settle()
    screen.entry.select_author(1)
    screen.entry.select_publisher(2)
    screen.entry.select_category(11)


def test_duplicate_isbn_keeps_create_modal_open(service, credentials, call_log):
    screen = _book_screen(service, credentials, call_log)

    async def scenario():
        await screen.mount()
        await screen.open_create()
        await _pick_references(screen)
        return await screen.submit_create(
            BookCreateForm(isbn=EXISTING_ISBN, book_title="Human Acts", book_price=15000)
        )

    envelope = asyncio.run(scenario())

    assert envelope.code == "DI"
    assert screen.crud.create_open
    assert screen.crud.message == "duplicate isbn"
    assert call_log.count("search_books") == 1
    # the picked references survive for another attempt
    assert screen.entry.authors.selected.author_id == 1
    assert screen.entry.category_id == 11


def test_create_book_closes_modal_and_refreshes(service, credentials, call_log):
    screen = _book_screen(service, credentials, call_log)

    async def scenario():
        await screen.mount()
        await screen.open_create()
        await _pick_references(screen)
        screen.entry.attach_cover("cover.png", b"\x89PNG")
        return await screen.submit_create(
            BookCreateForm(isbn="9791190000001", book_title="The White Book", book_price=14000)
        )

    envelope = asyncio.run(scenario())

    assert envelope.ok
    assert not screen.crud.create_open
    assert screen.crud.notice == envelope.message
    assert call_log.count("search_books") == 2
    created = screen.find("9791190000001")
    assert created is not None
    assert created.author_name == "Han Kang"
    assert created.publisher_name == "Changbi"
    assert created.category_id == 11
    (_, sent_form), = call_log.calls["create_book"]
    assert sent_form.cover_file == b"\x89PNG"
    assert screen.entry.authors.selected is None
    assert screen.entry.cover_file is None


def test_missing_references_are_rejected_locally(service, credentials, call_log):
    screen = _book_screen(service, credentials, call_log)

    async def scenario():
        await screen.mount()
        await screen.open_create()
        first = await screen.submit_create(BookCreateForm(isbn="9791190000002"))
        await _pick_references(screen)
        screen.entry.select_category(None)
        second = await screen.submit_create(BookCreateForm(isbn="9791190000002"))
        return first, second

    first, second = asyncio.run(scenario())

    assert first.code == LOCAL_VALIDATION
    assert first.message == PUBLISHER_REQUIRED_MESSAGE
    assert second.message == CATEGORY_REQUIRED_MESSAGE
    assert call_log.count("create_book") == 0
    assert screen.crud.create_open


def test_open_create_loads_category_options(service, credentials, call_log):
    screen = _book_screen(service, credentials, call_log)

    async def scenario():
        await screen.open_create()
        await screen.entry.select_category_type(CategoryType.FOREIGN)

    asyncio.run(scenario())

    assert screen.entry.category_options() == [
        (21, "Fiction > Contemporary"),
        (22, "Fiction > Classics"),
        (23, "Philosophy > Political"),
    ]
    assert screen.entry.category_id is None


def test_hide_book_removes_it_from_listing(service, credentials, call_log):
    screen = _book_screen(service, credentials, call_log)

    async def scenario():
        await screen.mount()
        return await screen.hide(EXISTING_ISBN)

    envelope = asyncio.run(scenario())

    assert envelope.ok
    assert screen.find(EXISTING_ISBN) is None
    assert call_log.count("search_books") == 2


def test_failed_hide_keeps_listing(service, credentials, call_log):
    screen = _book_screen(service, credentials, call_log)

    async def scenario():
        await screen.mount()
        return await screen.hide("0000000000000")

    envelope = asyncio.run(scenario())

    assert not envelope.ok
    assert screen.crud.message == "Book not found."
    assert screen.crud.notice == ""
    assert call_log.count("hide_book") == 1
    assert call_log.count("search_books") == 1
    assert screen.find(EXISTING_ISBN) is not None


def test_edit_book_updates_price(service, credentials, call_log):
    screen = _book_screen(service, credentials, call_log)

    async def scenario():
        await screen.mount()
        await screen.open_edit(EXISTING_ISBN)
        form = screen.edit_form()
        form.book_price = 16000
        form.book_status = BookStatus.INACTIVE.value
        return await screen.submit_update(form)

    envelope = asyncio.run(scenario())

    assert envelope.ok
    assert not screen.crud.edit_open
    book = screen.find(EXISTING_ISBN)
    assert book.book_price == 16000
    assert book.book_status == BookStatus.INACTIVE.value


def test_edit_unlisted_book_is_refused(service, credentials, call_log):
    screen = _book_screen(service, credentials, call_log)

    envelope = asyncio.run(screen.open_edit("0000000000000"))

    assert envelope.code == LOCAL_VALIDATION
    assert screen.crud.message == BOOK_NOT_LISTED_MESSAGE
    assert not screen.crud.edit_open


def test_policy_edit_round_trip(service, credentials):
    screen = PolicyScreen(service, credentials, page_size=5)

    async def scenario():
        await screen.mount()
        await screen.crud.open_edit(1)
        form = screen.edit_form()
        form.policy_title = "Spring reading fortnight"
        return await screen.crud.submit_update(1, form)

    envelope = asyncio.run(scenario())

    assert envelope.ok
    assert screen.crud.detail is None
    assert screen.listing.content[0].policy_title == "Spring reading fortnight"


def test_policy_edit_of_missing_item_opens_nothing(service, credentials):
    screen = PolicyScreen(service, credentials)

    envelope = asyncio.run(screen.crud.open_edit(999))

    assert not envelope.ok
    assert screen.crud.message == "Policy not found."
    assert not screen.crud.edit_open
    assert screen.edit_form() is None


def test_failed_delete_keeps_listing(service, credentials, call_log):
    call_log.wrap(service, "list_policies")
    screen = PolicyScreen(service, credentials, page_size=5)

    async def scenario():
        await screen.mount()
        return await screen.crud.remove(999)

    envelope = asyncio.run(scenario())

    assert envelope.code == "NP"
    assert screen.crud.message == "Policy not found."
    assert screen.crud.notice == ""
    assert call_log.count("list_policies") == 1
    assert len(screen.listing.content) == 5


def test_unreadable_detail_opens_nothing(service, credentials):
    async def fetch_detail(token, key):
        return Envelope.success(None)

    listing = PaginatedListController(
        "policies", service.list_policies, Policy.from_dict, credentials, ListQuery()
    )
    crud = CrudCoordinator(
        "policies",
        listing,
        credentials,
        fetch_detail=fetch_detail,
        parse_detail=Policy.from_dict,
    )

    envelope = asyncio.run(crud.open_edit(1))

    assert envelope.code == TRANSPORT_FAILURE
    assert crud.message == INVALID_DETAIL_MESSAGE
    assert not crud.edit_open
    assert crud.editing_key is None
    assert crud.detail is None


def test_create_policy_refreshes_current_page(service, credentials):
    screen = PolicyScreen(service, credentials, page_size=5)

    async def scenario():
        await screen.mount()
        screen.crud.open_create()
        return await screen.crud.submit_create(
            PolicyForm(policy_title="Rainy day", discount_percent=5)
        )

    envelope = asyncio.run(scenario())

    assert envelope.ok
    assert not screen.crud.create_open
    assert screen.listing.total_pages == 3
    assert screen.listing.current_page == 0


def test_publisher_name_required(service, credentials, call_log):
    call_log.wrap(service, "create_publisher")
    screen = PublisherScreen(service, credentials)

    envelope = asyncio.run(screen.crud.submit_create(PublisherForm(publisher_name="  ")))

    assert envelope.message == NAME_REQUIRED_MESSAGE
    assert call_log.count("create_publisher") == 0


def test_duplicate_publisher_message_is_shown(service, credentials):
    screen = PublisherScreen(service, credentials)

    async def scenario():
        await screen.mount()
        screen.crud.open_create()
        return await screen.crud.submit_create(PublisherForm(publisher_name="Changbi"))

    envelope = asyncio.run(scenario())

    assert not envelope.ok
    assert screen.crud.create_open
    assert screen.crud.message == "Duplicate publisher name."


def test_stock_movement_updates_amount(service, credentials):
    screen = StockScreen(service, credentials)

    async def scenario():
        await screen.mount()
        await screen.crud.open_edit(1)
        rejected = await screen.record_movement("IN", 0)
        accepted = await screen.record_movement("IN", 5, "restock")
        return rejected, accepted

    rejected, accepted = asyncio.run(scenario())

    assert rejected.message == AMOUNT_MESSAGE
    assert accepted.ok
    assert [b.branch_name for b in screen.branches] == ["Gangnam", "Jongno", "Busan Seomyeon"]
    stock = next(s for s in screen.listing.content if s.stock_id == 1)
    assert stock.amount == 12


def test_stock_listing_loads_despite_unreadable_branches(service, credentials):
    async def unreadable_branches():
        return Envelope.success([42])

    service.list_branches = unreadable_branches
    screen = StockScreen(service, credentials)

    envelope = asyncio.run(screen.mount())

    assert envelope.ok
    assert screen.branches == ()
    assert screen.listing.content


def test_stock_branch_filter(service, credentials):
    screen = StockScreen(service, credentials)

    async def scenario():
        await screen.mount()
        await screen.listing.set_filters(branch_id=2)

    asyncio.run(scenario())

    assert {s.branch_name for s in screen.listing.content} == {"Jongno"}


def test_unsupported_operation_raises(service, credentials):
    listing = PaginatedListController(
        "policies", service.list_policies, Policy.from_dict, credentials, ListQuery()
    )
    crud = CrudCoordinator("policies", listing, credentials)

    with pytest.raises(ValueError):
        asyncio.run(crud.remove(1))
    with pytest.raises(ValueError):
        asyncio.run(crud.open_edit(1))
