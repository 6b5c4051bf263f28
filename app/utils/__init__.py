"""
Common utilities package for the notes application.

Authentication helpers live in ``app.utils.auth``; they depend on the
application settings and are imported from there directly so that
``app.config`` can use the logger without a circular import.
"""

from app.utils.logger import cleanup_old_logs, setup_logger

__all__ = [
    "setup_logger",
    "cleanup_old_logs",
]
