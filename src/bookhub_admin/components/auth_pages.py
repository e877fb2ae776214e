"""
Pages reachable without a session: access-token entry, sign-up, login id
lookup and the password-change email request.
"""

import reflex as rx

from bookhub_admin import config
from bookhub_admin.components.layout import banners
from bookhub_admin.components.tables import labeled_input
from bookhub_admin.state import (
    LoginIdLookupState,
    PasswordChangeEmailState,
    SessionState,
    SignUpState,
)


def _auth_card(title: str, *children: rx.Component, **props) -> rx.Component:
    return rx.box(
        rx.box(
            rx.link(rx.heading(config.APP_TITLE, size="6", as_="h1"), href="/"),
            rx.box(
                rx.heading(title, size="4", as_="h2"),
                *children,
                class_name="card auth-card",
                **props,
            ),
            class_name="app-container narrow",
        ),
        class_name="app-shell",
    )


def _field_messages(fail: rx.Var, ok: rx.Var) -> rx.Component:
    return rx.fragment(
        rx.cond(fail != "", rx.text(fail, class_name="field-error")),
        rx.cond(ok != "", rx.text(ok, class_name="field-ok")),
    )


def _checked_input(label: str, name: str, value: rx.Var, **props) -> rx.Component:
    return rx.box(
        rx.text(label, as_="label", size="2"),
        rx.input(
            value=value,
            on_change=lambda v: SignUpState.set_field(name, v),
            on_blur=SignUpState.check_field(name),
            **props,
        ),
        _field_messages(
            getattr(SignUpState, f"{name}_fail"), getattr(SignUpState, f"{name}_ok")
        ),
        class_name="form-field",
    )


def index_page() -> rx.Component:
    return _auth_card(
        "Welcome",
        rx.cond(
            SessionState.logged_in,
            rx.text("You are signed in. Pick a section above or open the book list."),
            rx.form(
                labeled_input("Access token", "access_token", type="password"),
                rx.button("Continue", type="submit"),
                on_submit=SessionState.use_token,
            ),
        ),
        banners(SessionState.logout_message),
        rx.hstack(
            rx.link("Books", href="/books"),
            rx.link("Sign up", href="/auth/sign-up"),
            rx.link("Forgot password", href="/auth/password-change"),
        ),
    )


def sign_up_page() -> rx.Component:
    return _auth_card(
        "Sign up",
        _checked_input(
            "Login id",
            "login_id",
            SignUpState.login_id,
            placeholder="Starts with a letter, 4 to 13 letters or digits",
        ),
        rx.box(
            rx.text("Password", as_="label", size="2"),
            rx.input(
                type="password",
                value=SignUpState.password,
                on_change=lambda v: SignUpState.set_field("password", v),
                on_blur=SignUpState.check_passwords,
            ),
            rx.text("Confirm password", as_="label", size="2"),
            rx.input(
                type="password",
                value=SignUpState.confirm_password,
                on_change=lambda v: SignUpState.set_field("confirm_password", v),
                on_blur=SignUpState.check_passwords,
            ),
            _field_messages(SignUpState.password_fail, SignUpState.password_ok),
            class_name="form-field",
        ),
        rx.box(
            rx.text("Name", as_="label", size="2"),
            rx.input(
                value=SignUpState.employee_name,
                on_change=lambda v: SignUpState.set_field("name", v),
            ),
            class_name="form-field",
        ),
        _checked_input("Email", "email", SignUpState.email, type="email"),
        _checked_input("Phone number", "phone_number", SignUpState.phone_number, type="tel"),
        rx.box(
            rx.text("Birth date", as_="label", size="2"),
            rx.input(
                type="date",
                value=SignUpState.birth_date,
                on_change=lambda v: SignUpState.set_field("birth_date", v),
            ),
            class_name="form-field",
        ),
        rx.el.select(
            rx.el.option("Select a branch", value=""),
            rx.foreach(
                SignUpState.branch_options,
                lambda o: rx.el.option(o["label"], value=o["value"]),
            ),
            value=SignUpState.branch_id,
            on_change=lambda v: SignUpState.set_field("branch_id", v),
            class_name="select",
        ),
        banners(SignUpState.message),
        rx.button("Sign up", on_click=SignUpState.submit),
        on_mount=SignUpState.on_mount,
        on_unmount=SignUpState.on_unmount,
    )


def login_id_page() -> rx.Component:
    return _auth_card(
        "Find login id",
        rx.cond(
            LoginIdLookupState.message != "",
            rx.text(LoginIdLookupState.message),
            rx.text(
                "Your login id is ",
                rx.text.strong(LoginIdLookupState.found_login_id),
                ".",
            ),
        ),
        rx.link("Back", href="/"),
    )


def password_change_page() -> rx.Component:
    return _auth_card(
        "Change password",
        rx.form(
            labeled_input("Login id", "login_id"),
            labeled_input("Email", "email", type="email"),
            labeled_input("Phone number", "phone_number", type="tel"),
            rx.button("Send email", type="submit"),
            on_submit=PasswordChangeEmailState.submit,
            reset_on_submit=False,
        ),
        rx.cond(
            PasswordChangeEmailState.progress_message != "",
            rx.text(PasswordChangeEmailState.progress_message, class_name="muted"),
        ),
        banners(PasswordChangeEmailState.message),
    )
