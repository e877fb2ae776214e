"""
Book administration page.

Search results, the create form (author / publisher pickers that search as
you type, category partition switch and cover upload) and the edit form.
"""

import reflex as rx

from bookhub_admin.components.layout import banners, page_shell
from bookhub_admin.components.tables import data_table, labeled_input, modal, option_select
from bookhub_admin.models.catalog import BookStatus, CategoryType
from bookhub_admin.state import BookState

COVER_UPLOAD_ID = "book_cover"

_CATEGORY_TYPES = [
    {"value": CategoryType.DOMESTIC.value, "label": "Domestic books"},
    {"value": CategoryType.FOREIGN.value, "label": "Foreign books"},
]
_EDITABLE_STATUSES = [
    {"value": s.value, "label": s.value.title()}
    for s in (BookStatus.ACTIVE, BookStatus.INACTIVE)
]


def _lookup(label, text, on_change, options, value, on_select) -> rx.Component:
    """Search box plus the option list it feeds."""
    return rx.box(
        rx.text(label, as_="label", size="2"),
        rx.input(value=text, on_change=on_change, placeholder=f"Search {label.lower()}"),
        rx.el.select(
            rx.el.option(f"Select {label.lower()}", value=""),
            rx.foreach(options, lambda o: rx.el.option(o["label"], value=o["value"])),
            value=value,
            on_change=on_select,
            class_name="select",
        ),
        class_name="form-field",
    )


def _create_form() -> rx.Component:
    return rx.box(
        banners(BookState.message),
        option_select(
            "category_type",
            _CATEGORY_TYPES,
            value=BookState.category_type,
            on_change=BookState.select_category_type,
        ),
        rx.el.select(
            rx.el.option("Select category", value=""),
            rx.foreach(
                BookState.category_options,
                lambda o: rx.el.option(o["label"], value=o["value"]),
            ),
            value=BookState.category_id,
            on_change=BookState.select_category,
            class_name="select",
        ),
        _lookup(
            "Author",
            BookState.author_text,
            BookState.set_author_text,
            BookState.author_options,
            BookState.author_id,
            BookState.select_author,
        ),
        _lookup(
            "Publisher",
            BookState.publisher_text,
            BookState.set_publisher_text,
            BookState.publisher_options,
            BookState.publisher_id,
            BookState.select_publisher,
        ),
        rx.upload(
            rx.button("Choose cover", variant="soft", type="button"),
            id=COVER_UPLOAD_ID,
            max_files=1,
            accept={"image/*": []},
        ),
        rx.hstack(
            rx.button(
                "Attach cover",
                type="button",
                on_click=BookState.upload_cover(rx.upload_files(upload_id=COVER_UPLOAD_ID)),
            ),
            rx.text(BookState.cover_filename, class_name="muted"),
        ),
        rx.form(
            labeled_input("ISBN", "isbn", required=True),
            labeled_input("Title", "book_title", required=True),
            labeled_input("Price", "book_price", type="number", required=True),
            labeled_input("Published", "published_date", type="date", required=True),
            labeled_input("Pages", "page_count", required=True),
            labeled_input("Language", "language", required=True),
            rx.text_area(name="description", placeholder="Description"),
            rx.button("Register book", type="submit"),
            on_submit=BookState.submit_create,
        ),
    )


def _edit_form() -> rx.Component:
    detail = BookState.detail
    return rx.form(
        banners(BookState.message),
        rx.text(detail["book_title"].to(str), weight="bold"),
        labeled_input(
            "Price", "book_price", type="number", default_value=detail["book_price"].to(str)
        ),
        rx.text_area(name="description", default_value=detail["description"].to(str)),
        labeled_input("Policy id", "policy_id", type="number"),
        labeled_input(
            "Category id",
            "category_id",
            type="number",
            default_value=detail["category_id"].to(str),
        ),
        option_select(
            "book_status", _EDITABLE_STATUSES, default_value=detail["book_status"].to(str)
        ),
        rx.button("Save", type="submit"),
        on_submit=BookState.submit_update,
    )


def _book_row(row: rx.Var) -> rx.Component:
    return rx.table.row(
        rx.table.cell(row["book_title"]),
        rx.table.cell(row["author_name"]),
        rx.table.cell(row["publisher_name"]),
        rx.table.cell(row["formatted_price"]),
        rx.table.cell(row["book_status"]),
        rx.table.cell(
            rx.hstack(
                rx.button(
                    "Edit", on_click=BookState.open_edit(row["isbn"]), size="1", variant="soft"
                ),
                rx.button(
                    "Hide", on_click=BookState.hide(row["isbn"]), size="1", color_scheme="red"
                ),
            )
        ),
    )


def book_page() -> rx.Component:
    return page_shell(
        "Books",
        rx.form(
            rx.hstack(
                rx.input(name="keyword", placeholder="Title, author, publisher or ISBN"),
                rx.button(rx.icon("search", size=16), "Search", type="submit"),
            ),
            on_submit=BookState.apply_filters,
            reset_on_submit=False,
        ),
        rx.button("New book", on_click=BookState.open_create),
        banners(BookState.message, BookState.notice),
        data_table(
            ["Title", "Author", "Publisher", "Price", "Status", ""],
            BookState.rows,
            _book_row,
        ),
        modal("New book", BookState.create_open, BookState.close_create, _create_form()),
        modal("Edit book", BookState.edit_open, BookState.close_edit, _edit_form()),
        on_mount=BookState.on_mount,
        on_unmount=BookState.on_unmount,
    )
