"""
Utility helpers used by the migration tool.

This subpackage exposes the error types, structured event reporting and
the pre-flight checks.
"""

from .errors import EVENTS, FileSystemError, MigrationError, SchemaViolation, report_error, report_ok

__all__ = [
    "EVENTS",
    "FileSystemError",
    "MigrationError",
    "SchemaViolation",
    "report_error",
    "report_ok",
]
