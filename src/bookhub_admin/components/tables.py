"""Table, pagination and modal building blocks for the resource pages."""

from typing import Callable

import reflex as rx


def data_table(
    headers: list[str],
    rows: rx.Var,
    render_row: Callable[[rx.Var], rx.Component],
    empty_text: str = "No results.",
) -> rx.Component:
    return rx.box(
        rx.table.root(
            rx.table.header(
                rx.table.row(
                    *[rx.table.column_header_cell(header) for header in headers]
                )
            ),
            rx.table.body(rx.foreach(rows, render_row)),
            width="100%",
        ),
        rx.cond(rows.length() == 0, rx.text(empty_text, class_name="muted")),
        class_name="table-wrapper",
    )


def pagination(state) -> rx.Component:
    """Previous / next controls with the ``current/total`` label."""
    return rx.hstack(
        rx.button(
            rx.icon("chevron-left", size=16),
            on_click=state.previous_page,
            disabled=~state.has_previous,
            variant="soft",
        ),
        rx.text(state.page_label, class_name="page-label"),
        rx.button(
            rx.icon("chevron-right", size=16),
            on_click=state.next_page,
            disabled=~state.has_next,
            variant="soft",
        ),
        justify="center",
        class_name="pagination",
    )


def modal(
    title: str,
    is_open: rx.Var,
    on_close,
    *body: rx.Component,
) -> rx.Component:
    return rx.dialog.root(
        rx.dialog.content(
            rx.dialog.title(title),
            *body,
            rx.button("Cancel", on_click=on_close, variant="soft", color_scheme="gray"),
        ),
        open=is_open,
    )


def labeled_input(label: str, name: str, **props) -> rx.Component:
    return rx.box(
        rx.text(label, as_="label", size="2"),
        rx.input(name=name, **props),
        class_name="form-field",
    )


def option_select(
    name: str,
    options: rx.Var | list[dict],
    placeholder: str = "",
    **props,
) -> rx.Component:
    """Native select over ``{"value", "label"}`` option dicts."""
    if isinstance(options, list):
        items = [rx.el.option(o["label"], value=o["value"]) for o in options]
    else:
        items = [rx.foreach(options, lambda o: rx.el.option(o["label"], value=o["value"]))]
    if placeholder:
        items.insert(0, rx.el.option(placeholder, value=""))
    return rx.el.select(*items, name=name, class_name="select", **props)
