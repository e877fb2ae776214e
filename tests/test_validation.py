import asyncio

from bookhub_admin.controllers.remote import SessionCredentials
from bookhub_admin.controllers.validation import (
    CHECK_FAILED_MESSAGE,
    EMAIL_RULE,
    LOGIN_ID_RULE,
    PASSWORD_MATCH_MESSAGE,
    PASSWORD_MISMATCH_MESSAGE,
    PASSWORD_RULE,
    PHONE_NUMBER_RULE,
    CancellableTimer,
    DebouncedLookup,
    FieldCheck,
    FieldState,
    FieldValidator,
    PasswordPair,
)
from bookhub_admin.models.common import LOCAL_VALIDATION, Envelope, TRANSPORT_FAILURE
from bookhub_admin.services.bookhub_service import RemoteCallError


class RecordingRemote:
    def __init__(self, envelope: Envelope | None = None, on_call=None) -> None:
        self.values: list[str] = []
        self._envelope = envelope or Envelope.success(message="Available.")
        self._on_call = on_call

    async def __call__(self, value: str) -> Envelope:
        self.values.append(value)
        if self._on_call is not None:
            self._on_call(value)
        return self._envelope


def test_login_id_rule():
    assert LOGIN_ID_RULE.accepts("admin01")
    assert LOGIN_ID_RULE.accepts("abcd")
    assert not LOGIN_ID_RULE.accepts("abc")
    assert not LOGIN_ID_RULE.accepts("1admin")
    assert not LOGIN_ID_RULE.accepts("a" * 14)
    assert not LOGIN_ID_RULE.accepts("admin 01")


def test_contact_rules():
    assert EMAIL_RULE.accepts("admin01@bookhub.example")
    assert not EMAIL_RULE.accepts("admin01@bookhub")
    assert PHONE_NUMBER_RULE.accepts("01012345678")
    assert not PHONE_NUMBER_RULE.accepts("0101234567")
    assert not PHONE_NUMBER_RULE.accepts("02012345678")


def test_password_rule():
    assert PASSWORD_RULE.accepts("Abc12345!")
    assert not PASSWORD_RULE.accepts("abcdefgh")
    assert not PASSWORD_RULE.accepts("Ab1!")
    assert not PASSWORD_RULE.accepts("Abc12345!" * 2)


def test_password_pair_matches_locally():
    pair = PasswordPair()
    pair.set_password("Abc12345!")
    pair.set_confirm_password("Abc12345!")

    envelope = pair.check()

    assert envelope.ok
    assert pair.success_message == PASSWORD_MATCH_MESSAGE
    assert pair.fail_message == ""


def test_password_pair_mismatch_and_edit_clears():
    pair = PasswordPair()
    pair.set_password("Abc12345!")
    pair.set_confirm_password("Abc12345?")

    envelope = pair.check()

    assert envelope.code == LOCAL_VALIDATION
    assert pair.fail_message == PASSWORD_MISMATCH_MESSAGE

    pair.set_confirm_password("Abc12345")
    assert pair.fail_message == ""
    assert pair.success_message == ""


def test_password_pair_format_hint_wins():
    pair = PasswordPair()
    pair.set_password("short")

    envelope = pair.check()

    assert envelope.code == LOCAL_VALIDATION
    assert pair.fail_message == PASSWORD_RULE.hint


def test_password_pair_waits_for_confirmation():
    pair = PasswordPair()
    pair.set_password("Abc12345!")

    assert pair.check() is None
    assert pair.fail_message == ""


def test_bad_format_never_calls_remote():
    remote = RecordingRemote()
    validator = FieldValidator({"login_id": FieldCheck(LOGIN_ID_RULE, remote)})

    envelope = asyncio.run(validator.check_field("login_id", "1x"))

    assert envelope.code == LOCAL_VALIDATION
    assert remote.values == []
    assert validator["login_id"].exists_message == LOGIN_ID_RULE.hint
    assert validator["login_id"].not_exists_message == ""


def test_empty_value_is_not_checked():
    remote = RecordingRemote()
    validator = FieldValidator({"login_id": FieldCheck(LOGIN_ID_RULE, remote)})

    assert asyncio.run(validator.check_field("login_id", "")) is None
    assert remote.values == []


def test_available_and_taken_login_ids(service):
    validator = FieldValidator(
        {"login_id": FieldCheck(LOGIN_ID_RULE, service.check_login_id)}
    )

    asyncio.run(validator.check_field("login_id", "newuser1"))
    assert validator["login_id"].not_exists_message == "Login id is available."
    assert validator["login_id"].exists_message == ""

    asyncio.run(validator.check_field("login_id", "admin01"))
    assert validator["login_id"].exists_message == "Login id is already in use."
    assert validator["login_id"].not_exists_message == ""


def test_editing_clears_messages():
    remote = RecordingRemote()
    validator = FieldValidator({"email": FieldCheck(EMAIL_RULE, remote)})
    asyncio.run(validator.check_field("email", "someone@bookhub.example"))
    assert validator["email"].not_exists_message == "Available."

    validator.set_value("email", "someone@bookhub.exampl")

    assert validator["email"].not_exists_message == ""
    assert validator["email"].exists_message == ""


def test_snapshot_holds_values_and_messages_only():
    validator = FieldValidator({"email": FieldCheck(EMAIL_RULE, RecordingRemote())})
    asyncio.run(validator.check_field("email", "someone@bookhub.example"))

    snapshot = validator.snapshot()
    validator.set_value("email", "other@bookhub.example")

    assert snapshot["email"] == FieldState(
        value="someone@bookhub.example", not_exists_message="Available."
    )


def test_result_for_stale_value_is_dropped():
    validator = None

    def user_keeps_typing(value: str) -> None:
        validator.set_value("phone_number", value + "9")

    remote = RecordingRemote(on_call=user_keeps_typing)
    validator = FieldValidator(
        {"phone_number": FieldCheck(PHONE_NUMBER_RULE, remote)}
    )

    asyncio.run(validator.check_field("phone_number", "01099998888"))

    assert remote.values == ["01099998888"]
    assert validator["phone_number"].value == "010999988889"
    assert validator["phone_number"].not_exists_message == ""
    assert validator["phone_number"].exists_message == ""


def test_failure_without_message_uses_generic_text():
    remote = RecordingRemote(Envelope.failure("", code="XX"))
    validator = FieldValidator({"login_id": FieldCheck(LOGIN_ID_RULE, remote)})

    asyncio.run(validator.check_field("login_id", "someone"))

    assert validator["login_id"].exists_message == CHECK_FAILED_MESSAGE


def test_transport_error_becomes_failure_message():
    async def broken(value: str) -> Envelope:
        raise RemoteCallError("check_login_id", "connection refused")

    validator = FieldValidator({"login_id": FieldCheck(LOGIN_ID_RULE, broken)})

    envelope = asyncio.run(validator.check_field("login_id", "someone"))

    assert envelope.code == TRANSPORT_FAILURE
    assert validator["login_id"].exists_message == envelope.message


class RecordingSearch:
    def __init__(self, on_call=None) -> None:
        self.texts: list[str] = []
        self._on_call = on_call

    async def __call__(self, token: str, text: str) -> Envelope:
        self.texts.append(text)
        if self._on_call is not None:
            self._on_call(text)
        return Envelope.success([f"{text}-1", f"{text}-2"])


def _lookup(search, token="token", delay=0.01) -> DebouncedLookup:
    return DebouncedLookup(
        "authors", search, list, SessionCredentials(token), delay=delay
    )


def test_rapid_keystrokes_issue_one_lookup():
    search = RecordingSearch()
    lookup = _lookup(search)

    async def scenario():
        lookup.on_input("Ha")
        lookup.on_input("Han")
        assert lookup.snapshot().pending
        await lookup.settle()

    asyncio.run(scenario())

    assert search.texts == ["Han"]
    assert list(lookup.options) == ["Han-1", "Han-2"]
    assert not lookup.snapshot().pending


def test_cleared_input_cancels_pending_lookup():
    search = RecordingSearch()
    lookup = _lookup(search)

    async def scenario():
        lookup.on_input("Ha")
        lookup.on_input("")
        await lookup.settle()

    asyncio.run(scenario())

    assert search.texts == []
    assert lookup.options == ()


def test_lookup_needs_a_token():
    search = RecordingSearch()
    lookup = _lookup(search, token=None)

    async def scenario():
        lookup.on_input("Han")
        assert not lookup.timer.pending
        await lookup.settle()

    asyncio.run(scenario())

    assert search.texts == []


def test_lookup_result_for_old_text_is_dropped():
    lookup = None

    def user_keeps_typing(text: str) -> None:
        lookup.text = text + "g"

    search = RecordingSearch(on_call=user_keeps_typing)
    lookup = _lookup(search)

    async def scenario():
        lookup.on_input("Kan")
        await lookup.settle()

    asyncio.run(scenario())

    assert search.texts == ["Kan"]
    assert lookup.options == ()


def test_cancel_does_not_abort_fired_action():
    finished = []

    async def action():
        await asyncio.sleep(0.01)
        finished.append(True)

    async def scenario():
        timer = CancellableTimer(0)
        timer.schedule(action)
        await asyncio.sleep(0.001)
        timer.cancel()
        await timer.wait()

    asyncio.run(scenario())

    assert finished == [True]
