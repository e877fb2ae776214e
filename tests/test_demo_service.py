import asyncio

from bookhub_admin.models.auth import PasswordChangeEmailForm, SignUpForm
from bookhub_admin.models.catalog import StockUpdateForm
from bookhub_admin.models.common import ListQuery
from bookhub_admin.services import get_bookhub_service
from bookhub_admin.services.bookhub_service_demo import (
    DEMO_RECOVERY_TOKEN,
    DemoBookhubService,
)


def test_policy_pages(service):
    envelope = asyncio.run(service.list_policies("t", ListQuery(page=2, page_size=5)))

    assert envelope.ok
    assert envelope.data["totalPages"] == 3
    assert envelope.data["currentPage"] == 2
    assert [p["policyId"] for p in envelope.data["content"]] == [11, 12]


def test_policy_type_filter(service):
    envelope = asyncio.run(
        service.list_policies("t", ListQuery(type_filter="TOTAL_PRICE_DISCOUNT"))
    )

    assert {p["policyType"] for p in envelope.data["content"]} == {"TOTAL_PRICE_DISCOUNT"}
    assert len(envelope.data["content"]) == 3


def test_empty_token_is_rejected(service):
    envelope = asyncio.run(service.list_publishers("", ListQuery()))

    assert envelope.code == "AF"


def test_hidden_books_are_not_searchable(service):
    async def scenario():
        await service.hide_book("t", "9780099448822")
        return await service.search_books("t", ListQuery(keyword="norwegian"))

    envelope = asyncio.run(scenario())

    assert envelope.ok
    assert envelope.data == []


def test_stock_cannot_go_negative(service):
    envelope = asyncio.run(
        service.update_stock("t", 1, StockUpdateForm(type="LOSS", amount=100))
    )

    assert not envelope.ok


def test_sign_up_then_login_id_is_taken(service):
    form = SignUpForm(
        login_id="newuser1",
        password="Abc12345!",
        confirm_password="Abc12345!",
        name="New User",
        email="newuser1@bookhub.example",
        phone_number="01011112222",
        birth_date="1990-01-01",
        branch_id=1,
    )

    async def scenario():
        signed = await service.sign_up(form)
        check = await service.check_login_id("newuser1")
        return signed, check

    signed, check = asyncio.run(scenario())

    assert signed.ok
    assert not check.ok


def test_recovery_endpoints(service):
    async def scenario():
        found = await service.find_login_id(DEMO_RECOVERY_TOKEN)
        expired = await service.find_login_id("old-token")
        sent = await service.send_password_change_email(
            PasswordChangeEmailForm("admin01", "admin01@bookhub.example", "01012345678")
        )
        return found, expired, sent

    found, expired, sent = asyncio.run(scenario())

    assert found.data == "admin01"
    assert not expired.ok
    assert sent.ok


def test_instances_do_not_share_state():
    first, second = DemoBookhubService(), DemoBookhubService()

    asyncio.run(first.delete_publisher("t", 1))
    envelope = asyncio.run(second.get_publisher("t", 1))

    assert envelope.ok


def test_service_factory_resolves_kinds():
    assert isinstance(get_bookhub_service("demo"), DemoBookhubService)
