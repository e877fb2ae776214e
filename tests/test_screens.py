import asyncio

import pytest

from bookhub_admin import sessions
from bookhub_admin.controllers.remote import SessionCredentials
from bookhub_admin.models.catalog import CategoryType
from bookhub_admin.models.common import (
    LOCAL_VALIDATION,
    LOGIN_REQUIRED,
    TRANSPORT_FAILURE,
    Envelope,
)
from bookhub_admin.screens.account_recovery import (
    ALL_FIELDS_REQUIRED_MESSAGE as EMAIL_FIELDS_REQUIRED_MESSAGE,
    INVALID_TOKEN_MESSAGE,
    LoginIdLookupScreen,
    PasswordChangeEmailScreen,
)
from bookhub_admin.screens.category import CategoryScreen
from bookhub_admin.screens.sign_up import (
    ALL_FIELDS_REQUIRED_MESSAGE,
    INVALID_BRANCHES_MESSAGE,
    SignUpScreen,
)
from bookhub_admin.screens.statistics import (
    INVALID_CHART_MESSAGE,
    INVALID_MONTH_MESSAGE,
    BranchStockStatisticsScreen,
    parse_month,
)
from bookhub_admin.services.bookhub_service_demo import DEMO_RECOVERY_TOKEN
from bookhub_admin.sessions import (
    AdminSession,
    end_session,
    evict_idle_sessions,
    get_session,
    release_session,
)


async def _unreadable_rows(*args) -> Envelope:
    return Envelope.success([42, "x"])


def _filled_sign_up(screen: SignUpScreen) -> None:
    screen.validator.set_value("login_id", "newuser1")
    screen.validator.set_value("email", "newuser1@bookhub.example")
    screen.validator.set_value("phone_number", "01011112222")
    screen.passwords.set_password("Abc12345!")
    screen.passwords.set_confirm_password("Abc12345!")
    screen.set_birth_date("1990-01-01")
    screen.set_branch("2")


def test_sign_up_requires_name_birth_date_and_branch(service, call_log):
    call_log.wrap(service, "sign_up")
    screen = SignUpScreen(service)
    _filled_sign_up(screen)

    envelope = asyncio.run(screen.submit())

    assert envelope.code == LOCAL_VALIDATION
    assert screen.message == ALL_FIELDS_REQUIRED_MESSAGE
    assert call_log.count("sign_up") == 0
    assert not screen.completed

    screen.set_name("New User")
    assert screen.message == ""


def test_sign_up_submits_complete_form(service, call_log):
    call_log.wrap(service, "sign_up")
    screen = SignUpScreen(service)

    async def scenario():
        await screen.mount()
        _filled_sign_up(screen)
        screen.set_name("New User")
        return await screen.submit()

    envelope = asyncio.run(scenario())

    assert envelope.ok
    assert screen.completed
    assert len(screen.branches) == 3
    (sent,), = call_log.calls["sign_up"]
    assert sent.name == "New User"
    assert sent.branch_id == 2
    assert sent.email == "newuser1@bookhub.example"


def test_sign_up_checks_fields_on_blur(service):
    screen = SignUpScreen(service)

    async def scenario():
        await screen.validator.check_field("login_id", "admin01")
        await screen.validator.check_field("email", "fresh01@bookhub.example")
        await screen.validator.check_field("phone_number", "0201234567")

    asyncio.run(scenario())

    fields = screen.validator.snapshot()
    assert fields["login_id"].exists_message == "Login id is already in use."
    assert fields["email"].not_exists_message == "Email is available."
    assert fields["phone_number"].exists_message == "Not a valid mobile number."
    assert fields["login_id"] is not screen.validator["login_id"]


def test_sign_up_reports_unreadable_branch_list(service):
    service.list_branches = _unreadable_rows
    screen = SignUpScreen(service)

    envelope = asyncio.run(screen.mount())

    assert envelope.code == TRANSPORT_FAILURE
    assert screen.message == INVALID_BRANCHES_MESSAGE
    assert screen.branches == ()


def test_set_branch_ignores_garbage(service):
    screen = SignUpScreen(service)

    screen.set_branch("not-a-number")

    assert screen.branch_id == 0


def test_login_id_lookup(service):
    screen = LoginIdLookupScreen(service)

    missing = asyncio.run(screen.lookup(None))
    assert missing.code == LOCAL_VALIDATION
    assert screen.message == INVALID_TOKEN_MESSAGE

    asyncio.run(screen.lookup(DEMO_RECOVERY_TOKEN))
    assert screen.login_id == "admin01"
    assert screen.message == ""

    asyncio.run(screen.lookup("expired"))
    assert screen.login_id == ""
    assert screen.message == "The link has expired."


def test_password_change_email(service):
    screen = PasswordChangeEmailScreen(service)
    screen.set_field("login_id", "admin01")

    incomplete = asyncio.run(screen.submit())
    assert incomplete.code == LOCAL_VALIDATION
    assert screen.message == EMAIL_FIELDS_REQUIRED_MESSAGE

    screen.set_field("email", "admin01@bookhub.example")
    assert screen.message == ""
    screen.set_field("phone_number", "01000000000")
    asyncio.run(screen.submit())
    assert screen.message == "Email not sent: No matching employee."
    assert not screen.sent

    screen.set_field("phone_number", "01012345678")
    envelope = asyncio.run(screen.submit())
    assert envelope.ok
    assert screen.sent
    assert screen.progress_message == ""


def test_password_change_rejects_unknown_field(service):
    screen = PasswordChangeEmailScreen(service)

    with pytest.raises(ValueError):
        screen.set_field("password", "secret")


def test_parse_month():
    assert parse_month("2025-03") == (2025, 3)
    assert parse_month("2025-13") is None
    assert parse_month("March") is None
    assert parse_month("") is None


def test_statistics_search(service, credentials):
    screen = BranchStockStatisticsScreen(service, credentials)

    assert not screen.set_month("2025")
    assert screen.message == INVALID_MONTH_MESSAGE
    assert screen.set_month("2025-06")
    assert screen.month_value == "2025-06"

    envelope = asyncio.run(screen.search())

    assert envelope.ok
    assert [bar.branch_name for bar in screen.bars] == [
        "Gangnam",
        "Jongno",
        "Busan Seomyeon",
    ]


def test_statistics_reports_unreadable_chart(service, credentials):
    screen = BranchStockStatisticsScreen(service, credentials)
    asyncio.run(screen.search())
    bars = screen.bars
    service.branch_stock_chart = _unreadable_rows

    envelope = asyncio.run(screen.search())

    assert envelope.code == TRANSPORT_FAILURE
    assert screen.message == INVALID_CHART_MESSAGE
    assert screen.bars == bars


def test_statistics_requires_login(service):
    screen = BranchStockStatisticsScreen(service, SessionCredentials(None))

    envelope = asyncio.run(screen.mount())

    assert envelope.code == LOGIN_REQUIRED
    assert screen.message == "Login required."


def test_category_screen_selects_nodes(service, credentials):
    screen = CategoryScreen(service, credentials)

    assert screen.select_category(11) is None
    asyncio.run(screen.select_partition(CategoryType.DOMESTIC))

    assert screen.select_category(11).category_name == "Novels"
    assert screen.select_category(2).category_name == "Humanities"
    assert screen.select_category(21) is None


def test_session_keeps_screens_until_released(service):
    session = AdminSession(service, "token")

    books = session.books
    assert session.screen("books") is books
    session.release_screen("books")
    assert session.books is not books

    with pytest.raises(ValueError):
        session.screen("orders")


def test_logout_clears_token_and_screens(service):
    session = AdminSession(service, "token")
    policies = session.policies

    envelope = asyncio.run(session.logout())

    assert envelope.ok
    assert session.credentials.token() is None
    assert session.policies is not policies


def test_get_session_follows_cookie(service):
    try:
        session = get_session("client-1", "first", service)
        assert get_session("client-1", "second") is session
        assert session.credentials.token() == "second"
    finally:
        release_session("client-1")


def test_end_session_logs_out_and_forgets_client(service, call_log):
    call_log.wrap(service, "logout")
    session = get_session("client-2", "token", service)
    policies = session.policies

    envelope = asyncio.run(end_session("client-2", "token"))

    assert envelope.ok
    assert "client-2" not in sessions._SESSIONS
    assert session.credentials.token() is None
    assert session.policies is not policies
    assert call_log.calls["logout"] == [("token",)]


def test_idle_sessions_are_evicted(service):
    try:
        idle = get_session("client-idle", "first", service)
        busy = get_session("client-busy", "second", service)
        idle.last_used = busy.last_used - 120

        evicted = evict_idle_sessions(60, now=busy.last_used + 1)

        assert evicted == 1
        assert "client-idle" not in sessions._SESSIONS
        assert sessions._SESSIONS["client-busy"] is busy
    finally:
        release_session("client-idle")
        release_session("client-busy")
