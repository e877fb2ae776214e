"""
Environment-driven settings for the BookHub admin client.

Every value is read once at import time. Override through the environment
before starting the app (``reflex run``) or the tests.
"""

import os


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


API_BASE_URL = os.getenv("BOOKHUB_API_BASE_URL", "http://localhost:8080/api/v1").rstrip(
    "/"
)
SERVICE_KIND = os.getenv("BOOKHUB_SERVICE", "http").lower()
LOG_HTTP = _flag("BOOKHUB_LOG_HTTP")

PAGE_SIZE = int(os.getenv("BOOKHUB_PAGE_SIZE", "10"))
LOOKUP_PAGE_SIZE = 10
SEARCH_DEBOUNCE_SECONDS = int(os.getenv("BOOKHUB_SEARCH_DEBOUNCE_MS", "300")) / 1000
REQUEST_TIMEOUT_SECONDS = float(os.getenv("BOOKHUB_REQUEST_TIMEOUT", "10"))
SESSION_IDLE_SECONDS = float(os.getenv("BOOKHUB_SESSION_IDLE_SECONDS", "3600"))

APP_PORT = int(os.getenv("BOOKHUB_APP_PORT", "3000"))
APP_TITLE = "BookHub Admin"
ACCESS_TOKEN_COOKIE = "accessToken"
