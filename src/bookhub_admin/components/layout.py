"""
Page shell shared by every back-office page: header, navigation and the
failure / success banners.
"""

import reflex as rx

from bookhub_admin import config
from bookhub_admin.state import SessionState

NAV_ITEMS = [
    ("Books", "/books"),
    ("Categories", "/categories"),
    ("Policies", "/policies"),
    ("Publishers", "/publishers"),
    ("Stock", "/stocks"),
    ("Statistics", "/statistics"),
]


def page_header() -> rx.Component:
    return rx.box(
        rx.link(rx.heading(config.APP_TITLE, size="6", as_="h1"), href="/"),
        rx.cond(
            SessionState.logged_in,
            rx.button(
                rx.icon("log-out", size=16),
                "Log out",
                on_click=SessionState.logout,
                variant="soft",
            ),
        ),
        class_name="page-header",
    )


def nav_bar() -> rx.Component:
    return rx.box(
        *[rx.link(label, href=href, class_name="nav-link") for label, href in NAV_ITEMS],
        class_name="nav-bar",
    )


def banners(message: rx.Var, notice: rx.Var | None = None) -> rx.Component:
    """Failure message and, optionally, the last success message."""
    children = [
        rx.cond(
            message != "",
            rx.callout(message, icon="triangle-alert", color_scheme="red"),
        )
    ]
    if notice is not None:
        children.append(
            rx.cond(
                notice != "",
                rx.callout(notice, icon="check", color_scheme="green"),
            )
        )
    return rx.box(*children, class_name="banners")


def page_shell(title: str, *children: rx.Component, **props) -> rx.Component:
    """
    Build a back-office page.

    Args:
        title: Section heading.
        children: Page body.
        props: Forwarded to the content box (``on_mount``, ``on_unmount``).

    Returns:
        The complete page component.
    """
    return rx.box(
        rx.box(
            page_header(),
            nav_bar(),
            rx.box(
                rx.heading(title, size="4", as_="h2"),
                *children,
                class_name="card page-content",
                **props,
            ),
            class_name="app-container",
        ),
        class_name="app-shell",
    )
