"""
Reflex state management for the BookHub admin application.

State classes are thin: every handler delegates to the screen controllers
of the client session (see ``bookhub_admin.sessions``) and then copies the
controller snapshots into plain, serializable vars for rendering.
"""

from typing import Any

import reflex as rx

from bookhub_admin import config, sessions
from bookhub_admin.lib import logs
from bookhub_admin.models.catalog import (
    BookCreateForm,
    CategoryType,
    PolicyForm,
    PolicyType,
    PublisherForm,
    StockActionType,
)
from bookhub_admin.screens import (
    BookScreen,
    BranchStockStatisticsScreen,
    CategoryScreen,
    PolicyScreen,
    PublisherScreen,
    SignUpScreen,
    StockScreen,
)

LOG = logs.logger(__file__)

POLICY_TYPES = [t.value for t in PolicyType]
STOCK_ACTIONS = [a.value for a in StockActionType]
ALL_OPTION = "ALL"


def _int_or_none(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _text(form_data: dict, key: str) -> str:
    return str(form_data.get(key) or "").strip()


def _as_dict(item: Any) -> dict:
    return item.to_dict() if item is not None else {}


class SessionState(rx.State):
    """Root state: the access-token cookie and the per-client session."""

    access_token: str = rx.Cookie("", name=config.ACCESS_TOKEN_COOKIE, path="/")
    logout_message: str = ""

    @rx.var
    def logged_in(self) -> bool:
        return bool(self.access_token)

    def _session(self) -> sessions.AdminSession:
        return sessions.get_session(
            self.router.session.client_token, self.access_token or None
        )

    @rx.event
    def use_token(self, form_data: dict):
        """Store an access token issued by the BookHub login page."""
        self.access_token = _text(form_data, "access_token")
        self.logout_message = ""
        self._session()
        return rx.redirect("/books")

    @rx.event
    async def logout(self):
        envelope = await sessions.end_session(
            self.router.session.client_token, self.access_token or None
        )
        self.access_token = ""
        self.logout_message = envelope.message if not envelope.ok else ""
        return rx.redirect("/")


class ListScreenMixin(rx.State, mixin=True):
    """Vars and handlers shared by every paginated resource screen."""

    rows: list[dict] = []
    total_pages: int = 0
    current_page: int = 0
    page_label: str = "0/0"
    has_previous: bool = False
    has_next: bool = False
    loading: bool = False
    message: str = ""
    notice: str = ""
    create_open: bool = False
    edit_open: bool = False
    detail: dict = {}
    keyword: str = ""

    def _screen(self):
        raise NotImplementedError

    def _sync(self) -> None:
        screen = self._screen()
        page = screen.listing.snapshot()
        crud = screen.crud.snapshot()
        self.rows = [item.to_dict() for item in page.content]
        self.total_pages = page.total_pages
        self.current_page = page.current_page
        self.page_label = page.page_label
        self.has_previous = page.has_previous
        self.has_next = page.has_next
        self.loading = page.loading
        self.keyword = page.query.keyword
        self.message = crud.message or page.message
        self.notice = crud.notice
        self.create_open = crud.create_open
        self.edit_open = crud.edit_open
        self.detail = _as_dict(crud.detail)

    @rx.event
    async def on_mount(self):
        await self._screen().mount()
        self._sync()

    @rx.event
    def on_unmount(self):
        self._session().release_screen(self._screen().name)

    @rx.event
    async def next_page(self):
        await self._screen().listing.next_page()
        self._sync()

    @rx.event
    async def previous_page(self):
        await self._screen().listing.previous_page()
        self._sync()

    async def _open_create(self) -> None:
        self._screen().crud.open_create()

    async def _open_edit(self, key: str) -> None:
        await self._screen().crud.open_edit(int(key))

    @rx.event
    async def open_create(self):
        await self._open_create()
        self._sync()

    @rx.event
    def close_create(self):
        self._screen().crud.close_create()
        self._sync()

    @rx.event
    async def open_edit(self, key: str):
        await self._open_edit(key)
        self._sync()

    @rx.event
    def close_edit(self):
        self._screen().crud.close_edit()
        self._sync()


class PolicyState(ListScreenMixin, SessionState):
    type_filter: str = ALL_OPTION
    start_date: str = ""
    end_date: str = ""

    def _screen(self) -> PolicyScreen:
        return self._session().policies

    @staticmethod
    def _form(form_data: dict) -> PolicyForm:
        return PolicyForm(
            policy_title=_text(form_data, "policy_title"),
            policy_description=_text(form_data, "policy_description"),
            policy_type=_text(form_data, "policy_type") or PolicyType.BOOK_DISCOUNT.value,
            total_price_achieve=_int_or_none(form_data.get("total_price_achieve")),
            discount_percent=_int_or_none(form_data.get("discount_percent")),
            start_date=_text(form_data, "start_date"),
            end_date=_text(form_data, "end_date"),
        )

    @rx.event
    async def apply_filters(self, form_data: dict):
        policy_type = _text(form_data, "policy_type")
        self.type_filter = policy_type or ALL_OPTION
        self.start_date = _text(form_data, "start_date")
        self.end_date = _text(form_data, "end_date")
        await self._screen().listing.set_filters(
            keyword=_text(form_data, "keyword"),
            type_filter="" if policy_type == ALL_OPTION else policy_type,
            start_date=self.start_date,
            end_date=self.end_date,
        )
        self._sync()

    @rx.event
    async def submit_create(self, form_data: dict):
        await self._screen().crud.submit_create(self._form(form_data))
        self._sync()

    @rx.event
    async def submit_update(self, form_data: dict):
        crud = self._screen().crud
        if crud.editing_key is not None:
            await crud.submit_update(crud.editing_key, self._form(form_data))
        self._sync()

    @rx.event
    async def remove(self, policy_id: int):
        await self._screen().crud.remove(int(policy_id))
        self._sync()


class PublisherState(ListScreenMixin, SessionState):
    def _screen(self) -> PublisherScreen:
        return self._session().publishers

    @rx.event
    async def apply_filters(self, form_data: dict):
        await self._screen().listing.set_filters(keyword=_text(form_data, "keyword"))
        self._sync()

    @rx.event
    async def submit_create(self, form_data: dict):
        form = PublisherForm(publisher_name=_text(form_data, "publisher_name"))
        await self._screen().crud.submit_create(form)
        self._sync()

    @rx.event
    async def submit_update(self, form_data: dict):
        crud = self._screen().crud
        if crud.editing_key is not None:
            form = PublisherForm(publisher_name=_text(form_data, "publisher_name"))
            await crud.submit_update(crud.editing_key, form)
        self._sync()

    @rx.event
    async def remove(self, publisher_id: int):
        await self._screen().crud.remove(int(publisher_id))
        self._sync()


class StockState(ListScreenMixin, SessionState):
    action_filter: str = ALL_OPTION
    branch_filter: str = ALL_OPTION
    branch_options: list[dict] = []

    def _screen(self) -> StockScreen:
        return self._session().stocks

    def _sync(self) -> None:
        super()._sync()
        self.branch_options = [
            {"value": str(b.branch_id), "label": b.branch_name}
            for b in self._screen().branches
        ]

    @rx.event
    async def apply_filters(self, form_data: dict):
        action = _text(form_data, "action") or ALL_OPTION
        branch = _text(form_data, "branch_id") or ALL_OPTION
        self.action_filter = action
        self.branch_filter = branch
        await self._screen().listing.set_filters(
            keyword=_text(form_data, "keyword"),
            type_filter="" if action == ALL_OPTION else action,
            branch_id=None if branch == ALL_OPTION else _int_or_none(branch),
        )
        self._sync()

    @rx.event
    async def submit_update(self, form_data: dict):
        await self._screen().record_movement(
            _text(form_data, "action") or StockActionType.IN.value,
            _int_or_none(form_data.get("amount")) or 0,
            _text(form_data, "description"),
        )
        self._sync()


class BookState(ListScreenMixin, SessionState):
    """Book search, the create form with its lookups, and the edit form."""

    author_text: str = ""
    author_options: list[dict] = []
    author_id: str = ""
    publisher_text: str = ""
    publisher_options: list[dict] = []
    publisher_id: str = ""
    category_type: str = CategoryType.DOMESTIC.value
    category_options: list[dict] = []
    category_id: str = ""
    cover_filename: str = ""

    def _screen(self) -> BookScreen:
        return self._session().books

    def _sync(self) -> None:
        super()._sync()
        entry = self._screen().entry
        authors = entry.authors.snapshot()
        publishers = entry.publishers.snapshot()
        self.author_text = authors.text
        self.author_options = [
            {"value": str(a.author_id), "label": a.label} for a in authors.options
        ]
        self.author_id = str(authors.selected.author_id) if authors.selected else ""
        self.publisher_text = publishers.text
        self.publisher_options = [
            {"value": str(p.publisher_id), "label": p.publisher_name}
            for p in publishers.options
        ]
        self.publisher_id = (
            str(publishers.selected.publisher_id) if publishers.selected else ""
        )
        self.category_type = entry.category_type.value
        self.category_options = [
            {"value": str(cid), "label": label} for cid, label in entry.category_options()
        ]
        self.category_id = str(entry.category_id) if entry.category_id else ""
        self.cover_filename = entry.cover_filename
        if entry.categories.message and not self.message:
            self.message = entry.categories.message

    @rx.event
    async def apply_filters(self, form_data: dict):
        await self._screen().search(_text(form_data, "keyword"))
        self._sync()

    async def _open_create(self) -> None:
        await self._screen().open_create()

    async def _open_edit(self, key: str) -> None:
        await self._screen().open_edit(str(key))

    @rx.event
    def set_author_text(self, text: str):
        self._screen().entry.authors.on_input(text)
        self.author_text = text
        return BookState.settle_lookups

    @rx.event
    def set_publisher_text(self, text: str):
        self._screen().entry.publishers.on_input(text)
        self.publisher_text = text
        return BookState.settle_lookups

    @rx.event(background=True)
    async def settle_lookups(self):
        async with self:
            entry = self._screen().entry
        await entry.settle()
        async with self:
            self._sync()

    @rx.event
    def select_author(self, value: str):
        self._screen().entry.select_author(_int_or_none(value))
        self._sync()

    @rx.event
    def select_publisher(self, value: str):
        self._screen().entry.select_publisher(_int_or_none(value))
        self._sync()

    @rx.event
    async def select_category_type(self, value: str):
        await self._screen().entry.select_category_type(CategoryType(value))
        self._sync()

    @rx.event
    def select_category(self, value: str):
        self._screen().entry.select_category(_int_or_none(value))
        self._sync()

    @rx.event
    async def upload_cover(self, files: list[rx.UploadFile]):
        for file in files[:1]:
            self._screen().entry.attach_cover(file.filename or "cover", await file.read())
        self._sync()

    @rx.event
    async def submit_create(self, form_data: dict):
        form = BookCreateForm(
            isbn=_text(form_data, "isbn"),
            book_title=_text(form_data, "book_title"),
            book_price=_int_or_none(form_data.get("book_price")),
            published_date=_text(form_data, "published_date"),
            page_count=_text(form_data, "page_count"),
            language=_text(form_data, "language"),
            description=_text(form_data, "description"),
        )
        await self._screen().submit_create(form)
        self._sync()

    @rx.event
    async def submit_update(self, form_data: dict):
        screen = self._screen()
        base = screen.edit_form()
        if base is not None:
            base.book_price = _int_or_none(form_data.get("book_price")) or 0
            base.description = _text(form_data, "description")
            base.book_status = _text(form_data, "book_status") or base.book_status
            base.policy_id = _int_or_none(form_data.get("policy_id"))
            base.category_id = _int_or_none(form_data.get("category_id"))
            await screen.submit_update(base)
        self._sync()

    @rx.event
    async def hide(self, isbn: str):
        await self._screen().hide(str(isbn))
        self._sync()


class CategoryState(SessionState):
    """Collapsible two-partition category tree."""

    partitions: list[dict] = []
    visible_rows: list[dict] = []
    selected_name: str = ""
    message: str = ""

    def _screen(self) -> CategoryScreen:
        return self._session().categories

    def _sync(self) -> None:
        screen = self._screen()
        snapshot = screen.cache.snapshot()
        self.partitions = [
            {
                "key": key.value,
                "label": "Domestic" if key is CategoryType.DOMESTIC else "Foreign",
                "expanded": snapshot.expanded_partition is key,
                "status": snapshot.statuses[key].value,
            }
            for key in CategoryType
        ]
        rows = []
        if snapshot.expanded_partition is not None:
            for node in snapshot.nodes[snapshot.expanded_partition]:
                expanded = node.category_id in snapshot.expanded_ids
                rows.append(
                    {
                        "category_id": node.category_id,
                        "name": node.category_name,
                        "depth": 0,
                        "is_branch": node.is_branch,
                        "expanded": expanded,
                    }
                )
                if expanded:
                    rows.extend(
                        {
                            "category_id": child.category_id,
                            "name": child.category_name,
                            "depth": 1,
                            "is_branch": False,
                            "expanded": False,
                        }
                        for child in node.sub_categories
                    )
        self.visible_rows = rows
        self.selected_name = screen.selected.category_name if screen.selected else ""
        self.message = snapshot.message

    @rx.event
    def on_mount(self):
        self._sync()

    @rx.event
    def on_unmount(self):
        self._session().release_screen(self._screen().name)

    @rx.event
    async def select_partition(self, key: str):
        await self._screen().select_partition(CategoryType(key))
        self._sync()

    @rx.event
    def toggle_category(self, category_id: int):
        self._screen().toggle_category(int(category_id))
        self._sync()

    @rx.event
    def select_category(self, category_id: int):
        self._screen().select_category(int(category_id))
        self._sync()


class SignUpState(SessionState):
    login_id: str = ""
    login_id_fail: str = ""
    login_id_ok: str = ""
    email: str = ""
    email_fail: str = ""
    email_ok: str = ""
    phone_number: str = ""
    phone_number_fail: str = ""
    phone_number_ok: str = ""
    password: str = ""
    confirm_password: str = ""
    password_fail: str = ""
    password_ok: str = ""
    employee_name: str = ""
    birth_date: str = ""
    branch_id: str = ""
    branch_options: list[dict] = []
    message: str = ""

    def _screen(self) -> SignUpScreen:
        return self._session().sign_up

    def _sync(self) -> None:
        screen = self._screen()
        fields = screen.validator.snapshot()
        for name in ("login_id", "email", "phone_number"):
            setattr(self, name, fields[name].value)
            setattr(self, f"{name}_fail", fields[name].exists_message)
            setattr(self, f"{name}_ok", fields[name].not_exists_message)
        self.password = screen.passwords.password
        self.confirm_password = screen.passwords.confirm_password
        self.password_fail = screen.passwords.fail_message
        self.password_ok = screen.passwords.success_message
        self.employee_name = screen.employee_name
        self.birth_date = screen.birth_date
        self.branch_id = str(screen.branch_id) if screen.branch_id else ""
        self.branch_options = [
            {"value": str(b.branch_id), "label": b.branch_name} for b in screen.branches
        ]
        self.message = screen.message

    @rx.event
    async def on_mount(self):
        await self._screen().mount()
        self._sync()

    @rx.event
    def on_unmount(self):
        self._session().release_screen("sign_up")

    @rx.event
    def set_field(self, name: str, value: str):
        screen = self._screen()
        if name in ("login_id", "email", "phone_number"):
            screen.validator.set_value(name, value)
        elif name == "password":
            screen.passwords.set_password(value)
        elif name == "confirm_password":
            screen.passwords.set_confirm_password(value)
        elif name == "name":
            screen.set_name(value)
        elif name == "birth_date":
            screen.set_birth_date(value)
        elif name == "branch_id":
            screen.set_branch(value)
        self._sync()

    @rx.event
    async def check_field(self, name: str):
        await self._screen().validator.check_field(name)
        self._sync()

    @rx.event
    def check_passwords(self):
        self._screen().passwords.check()
        self._sync()

    @rx.event
    async def submit(self):
        screen = self._screen()
        envelope = await screen.submit()
        self._sync()
        if envelope.ok:
            self._session().release_screen("sign_up")
            return [rx.toast.success(envelope.message), rx.redirect("/")]


class LoginIdLookupState(SessionState):
    found_login_id: str = ""
    message: str = ""

    @rx.event
    async def on_load(self):
        screen = self._session().login_id_lookup
        await screen.lookup(self.router.page.params.get("token"))
        self.found_login_id = screen.login_id
        self.message = screen.message


class PasswordChangeEmailState(SessionState):
    message: str = ""
    progress_message: str = ""

    @rx.event
    async def submit(self, form_data: dict):
        screen = self._session().password_change_email
        for name in ("login_id", "email", "phone_number"):
            screen.set_field(name, _text(form_data, name))
        self.progress_message = screen.progress_message
        envelope = await screen.submit()
        self.message = screen.message
        self.progress_message = screen.progress_message
        if envelope.ok:
            self._session().release_screen("password_change_email")
            return [rx.toast.success(envelope.message), rx.redirect("/")]


class StatisticsState(SessionState):
    month: str = ""
    bars: list[dict] = []
    message: str = ""

    def _screen(self) -> BranchStockStatisticsScreen:
        return self._session().statistics

    def _sync(self) -> None:
        screen = self._screen()
        self.month = screen.month_value
        self.bars = [bar.to_dict() for bar in screen.bars]
        self.message = screen.message

    @rx.event
    async def on_mount(self):
        await self._screen().mount()
        self._sync()

    @rx.event
    async def search(self, form_data: dict):
        screen = self._screen()
        if screen.set_month(_text(form_data, "month")):
            await screen.search()
        self._sync()
