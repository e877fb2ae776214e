"""Collapsible category tree: two partitions, two levels."""

import reflex as rx

from bookhub_admin.components.layout import banners, page_shell
from bookhub_admin.state import CategoryState


def _category_row(row: rx.Var) -> rx.Component:
    marker = rx.cond(
        row["is_branch"],
        rx.cond(row["expanded"], "▼", "▶"),
        "•",
    )
    return rx.hstack(
        rx.text(
            marker,
            on_click=CategoryState.toggle_category(row["category_id"]),
            class_name="tree-marker",
        ),
        rx.text(
            row["name"],
            on_click=CategoryState.select_category(row["category_id"]),
            class_name="tree-label",
        ),
        class_name=rx.cond(row["depth"] == 0, "tree-row", "tree-row child"),
    )


def _partition(partition: rx.Var) -> rx.Component:
    return rx.box(
        rx.hstack(
            rx.text(rx.cond(partition["expanded"], "▼", "▶")),
            rx.text(partition["label"]),
            rx.cond(partition["status"] == "LOADING", rx.spinner(size="1")),
            on_click=CategoryState.select_partition(partition["key"]),
            class_name="tree-partition",
        ),
        rx.cond(
            partition["expanded"],
            rx.box(rx.foreach(CategoryState.visible_rows, _category_row)),
        ),
    )


def category_page() -> rx.Component:
    return page_shell(
        "Categories",
        banners(CategoryState.message),
        rx.foreach(CategoryState.partitions, _partition),
        rx.cond(
            CategoryState.selected_name != "",
            rx.text("Selected: ", CategoryState.selected_name, class_name="muted"),
        ),
        on_mount=CategoryState.on_mount,
        on_unmount=CategoryState.on_unmount,
    )
