"""Branch stock statistics chart."""

import reflex as rx

from bookhub_admin.components.layout import banners, page_shell
from bookhub_admin.state import StatisticsState


def statistics_page() -> rx.Component:
    return page_shell(
        "Stock by branch",
        rx.form(
            rx.hstack(
                rx.input(name="month", type="month", default_value=StatisticsState.month),
                rx.button(rx.icon("search", size=16), "Search", type="submit"),
            ),
            on_submit=StatisticsState.search,
            reset_on_submit=False,
        ),
        banners(StatisticsState.message),
        rx.recharts.bar_chart(
            rx.recharts.cartesian_grid(stroke_dasharray="3 3"),
            rx.recharts.x_axis(data_key="branch_name"),
            rx.recharts.y_axis(),
            rx.recharts.graphing_tooltip(),
            rx.recharts.legend(),
            rx.recharts.bar(data_key="in_amount", name="In", fill="#3b82f6"),
            rx.recharts.bar(data_key="out_amount", name="Out", fill="#22c55e"),
            rx.recharts.bar(data_key="loss_amount", name="Loss", fill="#ef4444"),
            data=StatisticsState.bars,
            height=480,
        ),
        on_mount=StatisticsState.on_mount,
    )
