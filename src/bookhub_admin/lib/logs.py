"""
Logging utilities for the BookHub admin client.

Provides a logger factory that creates configured Python loggers with
consistent formatting across controllers, services and Reflex states.
"""

import logging
import os
from pathlib import Path

_LOG_LEVEL = os.getenv("BOOKHUB_LOG_LEVEL", os.getenv("LOG_LEVEL", "INFO")).upper()
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_PACKAGE = "bookhub_admin"


def _module_name(path: str) -> str:
    """
    Turn a ``__file__`` path into a dotted module name.

    Paths inside the package keep their package-relative location so that
    ``controllers/crud.py`` logs as ``bookhub_admin.controllers.crud``.
    Anything else falls back to the file stem.
    """
    parts = Path(path).with_suffix("").parts
    if _PACKAGE in parts:
        index = len(parts) - 1 - parts[::-1].index(_PACKAGE)
        return ".".join(parts[index:])
    return Path(path).stem


def logger(name: str) -> logging.Logger:
    """
    Create and configure a logger for the given name.

    Args:
        name: Logger name or __file__ path.

    Returns:
        Configured logging.Logger instance.
    """
    if "/" in name or "\\" in name:
        name = _module_name(name)

    log = logging.getLogger(name)

    if not log.handlers:
        log.setLevel(getattr(logging, _LOG_LEVEL, logging.INFO))
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        log.addHandler(handler)

    return log


def quiet_transport_logs(level: int = logging.WARNING) -> None:
    """Raise the level of the httpx/httpcore loggers, which log every request at INFO."""
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(level)
