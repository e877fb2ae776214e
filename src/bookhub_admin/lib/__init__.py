"""
Local library modules shared across the BookHub admin client.

Modules:
    logs: Logging utilities
"""

from bookhub_admin.lib import logs

__all__ = ["logs"]
