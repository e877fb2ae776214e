"""
Policy, publisher and stock pages.

Each page is a filter form, the paginated table and the create / edit
modals. All behaviour lives in the matching state class.
"""

import reflex as rx

from bookhub_admin.components.layout import banners, page_shell
from bookhub_admin.components.tables import (
    data_table,
    labeled_input,
    modal,
    option_select,
    pagination,
)
from bookhub_admin.state import (
    ALL_OPTION,
    POLICY_TYPES,
    STOCK_ACTIONS,
    PolicyState,
    PublisherState,
    StockState,
)

_POLICY_TYPE_OPTIONS = [
    {"value": t, "label": t.replace("_", " ").title()} for t in POLICY_TYPES
]
_STOCK_ACTION_OPTIONS = [{"value": a, "label": a} for a in STOCK_ACTIONS]
_ALL = [{"value": ALL_OPTION, "label": "All"}]


def _search_form(on_submit, *filters: rx.Component) -> rx.Component:
    return rx.form(
        rx.hstack(
            rx.input(name="keyword", placeholder="Keyword"),
            *filters,
            rx.button(rx.icon("search", size=16), "Search", type="submit"),
            wrap="wrap",
        ),
        on_submit=on_submit,
        reset_on_submit=False,
        class_name="search-form",
    )


def _row_actions(state, key: rx.Var, remove=None) -> rx.Component:
    buttons = [
        rx.button("Edit", on_click=state.open_edit(key), size="1", variant="soft")
    ]
    if remove is not None:
        buttons.append(
            rx.button("Delete", on_click=remove(key), size="1", color_scheme="red")
        )
    return rx.table.cell(rx.hstack(*buttons))


# Policies


def _policy_fields(detail: rx.Var | None = None) -> list[rx.Component]:
    def default(key: str):
        return {} if detail is None else {"default_value": detail[key].to(str)}

    return [
        labeled_input("Title", "policy_title", required=True, **default("policy_title")),
        labeled_input("Description", "policy_description", **default("policy_description")),
        option_select("policy_type", _POLICY_TYPE_OPTIONS, **default("policy_type")),
        labeled_input(
            "Total price to reach",
            "total_price_achieve",
            type="number",
            **default("total_price_achieve"),
        ),
        labeled_input(
            "Discount %", "discount_percent", type="number", **default("discount_percent")
        ),
        labeled_input("Start", "start_date", type="date", **default("start_date")),
        labeled_input("End", "end_date", type="date", **default("end_date")),
    ]


def _policy_row(row: rx.Var) -> rx.Component:
    return rx.table.row(
        rx.table.cell(row["policy_title"]),
        rx.table.cell(row["policy_type"]),
        rx.table.cell(row["start_date"]),
        rx.table.cell(row["end_date"]),
        _row_actions(PolicyState, row["policy_id"], PolicyState.remove),
    )


def policy_page() -> rx.Component:
    return page_shell(
        "Policies",
        _search_form(
            PolicyState.apply_filters,
            option_select("policy_type", _ALL + _POLICY_TYPE_OPTIONS),
            rx.input(name="start_date", type="date"),
            rx.input(name="end_date", type="date"),
        ),
        rx.button("New policy", on_click=PolicyState.open_create),
        banners(PolicyState.message, PolicyState.notice),
        data_table(["Title", "Type", "Start", "End", ""], PolicyState.rows, _policy_row),
        pagination(PolicyState),
        modal(
            "New policy",
            PolicyState.create_open,
            PolicyState.close_create,
            banners(PolicyState.message),
            rx.form(
                *_policy_fields(),
                rx.button("Save", type="submit"),
                on_submit=PolicyState.submit_create,
            ),
        ),
        modal(
            "Edit policy",
            PolicyState.edit_open,
            PolicyState.close_edit,
            banners(PolicyState.message),
            rx.form(
                *_policy_fields(PolicyState.detail),
                rx.button("Save", type="submit"),
                on_submit=PolicyState.submit_update,
            ),
        ),
        on_mount=PolicyState.on_mount,
        on_unmount=PolicyState.on_unmount,
    )


# Publishers


def _publisher_row(row: rx.Var) -> rx.Component:
    return rx.table.row(
        rx.table.cell(row["publisher_name"]),
        _row_actions(PublisherState, row["publisher_id"], PublisherState.remove),
    )


def publisher_page() -> rx.Component:
    return page_shell(
        "Publishers",
        _search_form(PublisherState.apply_filters),
        rx.button("New publisher", on_click=PublisherState.open_create),
        banners(PublisherState.message, PublisherState.notice),
        data_table(["Name", ""], PublisherState.rows, _publisher_row),
        pagination(PublisherState),
        modal(
            "New publisher",
            PublisherState.create_open,
            PublisherState.close_create,
            banners(PublisherState.message),
            rx.form(
                labeled_input("Name", "publisher_name", required=True),
                rx.button("Save", type="submit"),
                on_submit=PublisherState.submit_create,
            ),
        ),
        modal(
            "Edit publisher",
            PublisherState.edit_open,
            PublisherState.close_edit,
            banners(PublisherState.message),
            rx.form(
                labeled_input(
                    "Name",
                    "publisher_name",
                    default_value=PublisherState.detail["publisher_name"].to(str),
                ),
                rx.button("Save", type="submit"),
                on_submit=PublisherState.submit_update,
            ),
        ),
        on_mount=PublisherState.on_mount,
        on_unmount=PublisherState.on_unmount,
    )


# Stock


def _stock_row(row: rx.Var) -> rx.Component:
    return rx.table.row(
        rx.table.cell(row["book_title"]),
        rx.table.cell(row["book_isbn"]),
        rx.table.cell(row["branch_name"]),
        rx.table.cell(row["amount"]),
        _row_actions(StockState, row["stock_id"]),
    )


def stock_page() -> rx.Component:
    return page_shell(
        "Stock",
        _search_form(
            StockState.apply_filters,
            option_select("action", _ALL + _STOCK_ACTION_OPTIONS),
            rx.el.select(
                rx.el.option("All branches", value=ALL_OPTION),
                rx.foreach(
                    StockState.branch_options,
                    lambda o: rx.el.option(o["label"], value=o["value"]),
                ),
                name="branch_id",
                class_name="select",
            ),
        ),
        banners(StockState.message, StockState.notice),
        data_table(["Book", "ISBN", "Branch", "Amount", ""], StockState.rows, _stock_row),
        pagination(StockState),
        modal(
            "Record stock movement",
            StockState.edit_open,
            StockState.close_edit,
            banners(StockState.message),
            rx.text(StockState.detail["book_title"].to(str), weight="bold"),
            rx.text(StockState.detail["branch_name"].to(str), class_name="muted"),
            rx.form(
                option_select("action", _STOCK_ACTION_OPTIONS),
                labeled_input("Amount", "amount", type="number", min=1, required=True),
                labeled_input("Description", "description"),
                rx.button("Save", type="submit"),
                on_submit=StockState.submit_update,
            ),
        ),
        on_mount=StockState.on_mount,
        on_unmount=StockState.on_unmount,
    )
