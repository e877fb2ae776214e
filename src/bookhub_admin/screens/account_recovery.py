"""Login id lookup from an emailed link, and the password-change email request."""

from bookhub_admin.controllers.remote import call_remote
from bookhub_admin.models.auth import PasswordChangeEmailForm
from bookhub_admin.models.common import Envelope
from bookhub_admin.services.bookhub_service import BookhubService

INVALID_TOKEN_MESSAGE = "The link is not valid."
ALL_FIELDS_REQUIRED_MESSAGE = "Please fill in every field."
SENDING_MESSAGE = "Sending the email. Please wait."


class LoginIdLookupScreen:
    """Resolves the login id behind the one-time token of an emailed link."""

    name = "login_id_lookup"

    def __init__(self, service: BookhubService) -> None:
        self._service = service
        self.login_id = ""
        self.message = ""

    async def lookup(self, link_token: str | None) -> Envelope:
        if not link_token:
            self.message = INVALID_TOKEN_MESSAGE
            return Envelope.local(INVALID_TOKEN_MESSAGE)
        envelope = await call_remote(
            "find_login_id", lambda: self._service.find_login_id(link_token)
        )
        if envelope.ok and envelope.data:
            self.login_id = str(envelope.data)
            self.message = ""
        else:
            self.login_id = ""
            self.message = envelope.message
        return envelope


class PasswordChangeEmailScreen:
    """
    Requests a password-change email.

    Login id, email and phone number must all be given; any edit clears
    the failure message.
    """

    name = "password_change_email"

    def __init__(self, service: BookhubService) -> None:
        self._service = service
        self.form = PasswordChangeEmailForm()
        self.message = ""
        self.progress_message = ""
        self.sent = False

    def set_field(self, name: str, value: str) -> None:
        if name not in ("login_id", "email", "phone_number"):
            raise ValueError(f"Unknown field: {name}")
        if getattr(self.form, name) != value:
            setattr(self.form, name, value)
            self.message = ""

    async def submit(self) -> Envelope:
        if not self.form.is_complete:
            self.message = ALL_FIELDS_REQUIRED_MESSAGE
            return Envelope.local(ALL_FIELDS_REQUIRED_MESSAGE)
        self.progress_message = SENDING_MESSAGE
        form = PasswordChangeEmailForm(
            login_id=self.form.login_id,
            email=self.form.email,
            phone_number=self.form.phone_number,
        )
        try:
            envelope = await call_remote(
                "send_password_change_email",
                lambda: self._service.send_password_change_email(form),
            )
        finally:
            self.progress_message = ""
        self.sent = envelope.ok
        if envelope.ok:
            self.message = envelope.message
        else:
            self.message = f"Email not sent: {envelope.message}"
        return envelope
