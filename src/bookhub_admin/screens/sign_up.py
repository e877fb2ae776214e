"""
Employee sign-up screen.

Login id, email and phone number are checked for format and availability
when the field loses focus. The password pair is checked locally. Name,
birth date and branch have no field check; they are all required at
submit time and editing any of them clears the general message.
"""

from bookhub_admin.controllers.remote import call_remote
from bookhub_admin.controllers.validation import (
    EMAIL_RULE,
    LOGIN_ID_RULE,
    PHONE_NUMBER_RULE,
    FieldCheck,
    FieldValidator,
    PasswordPair,
)
from bookhub_admin.lib import logs
from bookhub_admin.models.auth import SignUpForm
from bookhub_admin.models.catalog import Branch
from bookhub_admin.models.common import Envelope
from bookhub_admin.services.bookhub_service import BookhubService

LOG = logs.logger(__file__)

ALL_FIELDS_REQUIRED_MESSAGE = "Please fill in every field."
SIGN_UP_FAILED_MESSAGE = "Sign-up failed."
INVALID_BRANCHES_MESSAGE = "The server returned an unreadable branch list."


class SignUpScreen:
    """
    Attributes:
        validator: Blur-triggered checks for login id, email and phone number.
        passwords: Password and confirmation.
        branches: Branch options.
        message: General message under the form.
        completed: The last submit succeeded.
    """

    name = "sign_up"

    def __init__(self, service: BookhubService) -> None:
        self._service = service
        self.validator = FieldValidator(
            {
                "login_id": FieldCheck(LOGIN_ID_RULE, service.check_login_id),
                "email": FieldCheck(EMAIL_RULE, service.check_email),
                "phone_number": FieldCheck(PHONE_NUMBER_RULE, service.check_phone_number),
            }
        )
        self.passwords = PasswordPair()
        self.employee_name = ""
        self.birth_date = ""
        self.branch_id = 0
        self.branches: tuple[Branch, ...] = ()
        self.message = ""
        self.completed = False

    async def mount(self) -> Envelope:
        envelope = await call_remote("sign_up.branches", self._service.list_branches)
        if not envelope.ok:
            self.message = envelope.message
            return envelope
        try:
            self.branches = tuple(Branch.from_dict(raw) for raw in envelope.data or [])
        except (AttributeError, TypeError, ValueError, KeyError):
            LOG.error("sign_up.branches - unreadable branch list", exc_info=True)
            self.message = INVALID_BRANCHES_MESSAGE
            return Envelope.transport_failure(INVALID_BRANCHES_MESSAGE)
        return envelope

    def set_name(self, value: str) -> None:
        if value != self.employee_name:
            self.employee_name = value
            self.message = ""

    def set_birth_date(self, value: str) -> None:
        if value != self.birth_date:
            self.birth_date = value
            self.message = ""

    def set_branch(self, branch_id: int | str | None) -> None:
        try:
            value = int(branch_id or 0)
        except (TypeError, ValueError):
            value = 0
        if value != self.branch_id:
            self.branch_id = value
            self.message = ""

    def form(self) -> SignUpForm:
        return SignUpForm(
            login_id=self.validator["login_id"].value,
            password=self.passwords.password,
            confirm_password=self.passwords.confirm_password,
            name=self.employee_name,
            email=self.validator["email"].value,
            phone_number=self.validator["phone_number"].value,
            birth_date=self.birth_date,
            branch_id=self.branch_id,
        )

    async def submit(self) -> Envelope:
        if not (self.employee_name and self.birth_date and self.branch_id):
            self.message = ALL_FIELDS_REQUIRED_MESSAGE
            return Envelope.local(ALL_FIELDS_REQUIRED_MESSAGE)
        form = self.form()
        envelope = await call_remote("sign_up", lambda: self._service.sign_up(form))
        self.completed = envelope.ok
        if envelope.ok:
            LOG.info("sign_up - request submitted login_id:%s", form.login_id)
        self.message = envelope.message or (
            "" if envelope.ok else SIGN_UP_FAILED_MESSAGE
        )
        return envelope

    def release(self) -> None:
        pass
