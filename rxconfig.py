"""Reflex configuration for the BookHub admin application."""

import os

import reflex as rx

# Get port from environment
APP_PORT = int(os.getenv("BOOKHUB_APP_PORT", "3000"))

config = rx.Config(
    app_name="bookhub_admin",
    # Use the src directory structure
    app_module_import="bookhub_admin.app",
    frontend_port=APP_PORT,
)
