"""
Reflex application entry point for the BookHub admin client.

This module initializes the Reflex app and registers one page per
back-office screen.
"""

import reflex as rx

from bookhub_admin import config
from bookhub_admin.components import (
    book_page,
    category_page,
    index_page,
    login_id_page,
    password_change_page,
    policy_page,
    publisher_page,
    sign_up_page,
    statistics_page,
    stock_page,
)
from bookhub_admin.lib import logs
from bookhub_admin.state import LoginIdLookupState

LOG = logs.logger(__file__)

if not config.LOG_HTTP:
    logs.quiet_transport_logs()

LOG.info(
    "BookHub admin - service:%s api:%s page_size:%s",
    config.SERVICE_KIND,
    config.API_BASE_URL,
    config.PAGE_SIZE,
)

_FONT_URL = "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap"

# Create the Reflex app
app = rx.App(
    theme=rx.theme(
        appearance="light",
        has_background=True,
        radius="large",
    ),
    stylesheets=[
        _FONT_URL,
        "/styles.css",
    ],
)

app.add_page(index_page, route="/", title=config.APP_TITLE)
app.add_page(book_page, route="/books", title=f"Books - {config.APP_TITLE}")
app.add_page(category_page, route="/categories", title=f"Categories - {config.APP_TITLE}")
app.add_page(policy_page, route="/policies", title=f"Policies - {config.APP_TITLE}")
app.add_page(publisher_page, route="/publishers", title=f"Publishers - {config.APP_TITLE}")
app.add_page(stock_page, route="/stocks", title=f"Stock - {config.APP_TITLE}")
app.add_page(statistics_page, route="/statistics", title=f"Statistics - {config.APP_TITLE}")
app.add_page(sign_up_page, route="/auth/sign-up", title=f"Sign up - {config.APP_TITLE}")
app.add_page(
    login_id_page,
    route="/auth/login-id",
    title=f"Find login id - {config.APP_TITLE}",
    on_load=LoginIdLookupState.on_load,
)
app.add_page(
    password_change_page,
    route="/auth/password-change",
    title=f"Change password - {config.APP_TITLE}",
)


def main() -> None:
    """Entrypoint used by `bookhub-admin`; equivalent to `reflex run`."""
    import subprocess
    import sys

    subprocess.run(
        [sys.executable, "-m", "reflex", "run", "--frontend-port", str(config.APP_PORT)]
    )


if __name__ == "__main__":
    main()
