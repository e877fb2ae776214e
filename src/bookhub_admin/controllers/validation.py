"""
Asynchronous field validation for forms.

Two trigger styles are supported:

- blur-triggered checks (FieldValidator): a local format rule, then exactly
  one remote availability call. Used by the sign-up form for login id,
  email and phone number.
- keystroke-debounced lookups (DebouncedLookup): every keystroke replaces
  the pending timer, so only the last keystroke inside the window reaches
  the server. Used for the author and publisher pickers.

Each field record owns its own CancellableTimer. In-flight calls are never
cancelled; instead a result is dropped when the field value has moved on
since the call was issued.
"""

import asyncio
import re
from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Generic, Mapping, Sequence, TypeVar

from bookhub_admin import config
from bookhub_admin.controllers.remote import (
    CredentialProvider,
    call_remote,
    call_with_token,
)
from bookhub_admin.lib import logs
from bookhub_admin.models.common import Envelope

LOG = logs.logger(__file__)

T = TypeVar("T")


@dataclass(frozen=True)
class FieldRule:
    """Synchronous format predicate with the hint shown when it fails."""

    pattern: re.Pattern
    hint: str

    def accepts(self, value: str) -> bool:
        return self.pattern.fullmatch(value) is not None


LOGIN_ID_RULE = FieldRule(
    re.compile(r"[A-Za-z][A-Za-z0-9]{3,12}"),
    "Login id must start with a letter and use 4 to 13 letters or digits.",
)
PASSWORD_RULE = FieldRule(
    re.compile(r"(?=.*[A-Za-z])(?=.*\d)(?=.*[!@#$%*?])[A-Za-z\d!@#$%*?]{8,16}"),
    "Password must be 8 to 16 characters and include a letter, a digit and one of !@#$%*?.",
)
EMAIL_RULE = FieldRule(
    re.compile(r"[A-Za-z][A-Za-z\d]+@[A-Za-z\d.-]+\.[A-Za-z]{2,}"),
    "Not a valid email address.",
)
PHONE_NUMBER_RULE = FieldRule(
    re.compile(r"010\d{8}"),
    "Not a valid mobile number.",
)

PASSWORD_MISMATCH_MESSAGE = "Passwords do not match."
PASSWORD_MATCH_MESSAGE = "Passwords match."
CHECK_FAILED_MESSAGE = "Could not check availability. Please try again."


class CancellableTimer:
    """
    A single deferred action.

    Scheduling replaces whatever was pending. Cancelling only clears the
    timer; an action that already fired runs to completion.
    """

    def __init__(self, delay: float) -> None:
        self.delay = delay
        self._handle: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, action: Callable[[], Awaitable[None]]) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, action)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, action: Callable[[], Awaitable[None]]) -> None:
        self._handle = None
        task = asyncio.ensure_future(action())
        self._tasks.add(task)
        task.add_done_callback(self._finished)

    def _finished(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            LOG.error("Deferred action failed", exc_info=task.exception())

    async def wait(self) -> None:
        """Return once nothing is pending and every fired action has finished."""
        loop = asyncio.get_running_loop()
        while self._handle is not None or self._tasks:
            if self._handle is not None:
                await asyncio.sleep(max(self._handle.when() - loop.time(), 0))
            else:
                await asyncio.gather(*self._tasks, return_exceptions=True)


@dataclass
class FieldState:
    """
    Validation state of one form field.

    At most one of ``exists_message`` (failure / already used) and
    ``not_exists_message`` (available) is non-empty.
    """

    value: str = ""
    exists_message: str = ""
    not_exists_message: str = ""

    def clear_messages(self) -> None:
        self.exists_message = ""
        self.not_exists_message = ""

    def fail(self, message: str) -> None:
        self.exists_message = message
        self.not_exists_message = ""

    def succeed(self, message: str) -> None:
        self.exists_message = ""
        self.not_exists_message = message


@dataclass(frozen=True)
class FieldCheck:
    """Format rule plus the remote availability call for one field."""

    rule: FieldRule
    remote: Callable[[str], Awaitable[Envelope]]


class FieldValidator:
    """Blur-triggered validation of a fixed set of fields."""

    def __init__(self, checks: Mapping[str, FieldCheck]) -> None:
        self._checks = dict(checks)
        self.fields: dict[str, FieldState] = {name: FieldState() for name in checks}

    def __getitem__(self, name: str) -> FieldState:
        return self.fields[name]

    def set_value(self, name: str, value: str) -> None:
        """Record a new value; messages for the old value disappear at once."""
        state = self.fields[name]
        if state.value == value:
            return
        state.value = value
        state.clear_messages()

    async def check_field(self, name: str, raw_value: str | None = None) -> Envelope | None:
        """
        Validate one field on loss of focus.

        Args:
            name: Field name.
            raw_value: Value to check; defaults to the recorded value.

        Returns:
            None when the field is empty, a local failure envelope when the
            format is wrong, otherwise the availability envelope.
        """
        if raw_value is not None:
            self.set_value(name, raw_value)
        state = self.fields[name]
        value = state.value
        if not value:
            return None

        check = self._checks[name]
        if not check.rule.accepts(value):
            state.fail(check.rule.hint)
            return Envelope.local(check.rule.hint)

        envelope = await call_remote(f"check_{name}", lambda: check.remote(value))
        if state.value != value:
            LOG.debug("check_%s - value changed while checking, result dropped", name)
            return envelope
        if envelope.ok:
            state.succeed(envelope.message)
        elif envelope.message:
            state.fail(envelope.message)
        else:
            state.fail(CHECK_FAILED_MESSAGE)
        return envelope

    def snapshot(self) -> dict[str, FieldState]:
        return {name: replace(state) for name, state in self.fields.items()}


class PasswordPair:
    """Password and confirmation checked together, locally."""

    def __init__(self) -> None:
        self.password = ""
        self.confirm_password = ""
        self.fail_message = ""
        self.success_message = ""

    def _clear(self) -> None:
        self.fail_message = ""
        self.success_message = ""

    def set_password(self, value: str) -> None:
        if value != self.password:
            self.password = value
            self._clear()

    def set_confirm_password(self, value: str) -> None:
        if value != self.confirm_password:
            self.confirm_password = value
            self._clear()

    def check(self) -> Envelope | None:
        """Run on loss of focus of either field. Never calls the server."""
        if self.password and not PASSWORD_RULE.accepts(self.password):
            self.fail_message, self.success_message = PASSWORD_RULE.hint, ""
            return Envelope.local(PASSWORD_RULE.hint)
        if self.password and self.confirm_password:
            if self.password != self.confirm_password:
                self.fail_message, self.success_message = PASSWORD_MISMATCH_MESSAGE, ""
                return Envelope.local(PASSWORD_MISMATCH_MESSAGE)
            self.fail_message, self.success_message = "", PASSWORD_MATCH_MESSAGE
            return Envelope.success(message=PASSWORD_MATCH_MESSAGE)
        return None


@dataclass(frozen=True)
class LookupSnapshot(Generic[T]):
    text: str
    options: Sequence[T] = field(default_factory=tuple)
    selected: T | None = None
    message: str = ""
    pending: bool = False


class DebouncedLookup(Generic[T]):
    """
    Search-as-you-type option list.

    Attributes:
        text: Current input text.
        options: Options returned for the latest settled query.
        selected: Option picked by the user, if any.
    """

    def __init__(
        self,
        name: str,
        search: Callable[[str, str], Awaitable[Envelope]],
        parse_options: Callable[[Any], Sequence[T]],
        credentials: CredentialProvider,
        delay: float | None = None,
    ) -> None:
        """
        Args:
            name: Lookup name for logs.
            search: Service call taking ``(token, text)``.
            parse_options: Turns the envelope data into options.
            credentials: Token source.
            delay: Debounce window in seconds.
        """
        self.name = name
        self._search = search
        self._parse_options = parse_options
        self._credentials = credentials
        self.timer = CancellableTimer(
            config.SEARCH_DEBOUNCE_SECONDS if delay is None else delay
        )
        self.text = ""
        self.options: Sequence[T] = ()
        self.selected: T | None = None
        self.message = ""

    def on_input(self, text: str) -> None:
        """Handle one keystroke: replace the pending lookup with one for ``text``."""
        self.timer.cancel()
        self.text = text
        if not text or not self._credentials.token():
            return
        self.timer.schedule(lambda: self._lookup(text))

    async def _lookup(self, text: str) -> None:
        envelope = await call_with_token(
            self._credentials,
            f"{self.name}.lookup",
            lambda token: self._search(token, text),
        )
        if text != self.text:
            LOG.debug("%s - result for %r dropped, input is now %r", self.name, text, self.text)
            return
        if not envelope.ok:
            self.message = envelope.message
            return
        try:
            self.options = tuple(self._parse_options(envelope.data))
        except (TypeError, ValueError, KeyError):
            LOG.error("%s - unreadable options payload", self.name, exc_info=True)
            return
        self.message = ""

    def select(self, option: T | None) -> None:
        self.selected = option

    def cancel(self) -> None:
        self.timer.cancel()

    async def settle(self) -> None:
        """Wait for the pending lookup, if any, to complete."""
        await self.timer.wait()

    def snapshot(self) -> LookupSnapshot[T]:
        return LookupSnapshot(
            text=self.text,
            options=tuple(self.options),
            selected=self.selected,
            message=self.message,
            pending=self.timer.pending,
        )
