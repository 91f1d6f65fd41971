"""
Error types and structured reporting for the Joomla → Hugo migration.

Fatal conditions are raised as subclasses of :class:`MigrationError` and
propagate to the top level without retry.  Informational events (a year or
an article that is already migrated, a page that was written) are not
errors; they are recorded with :func:`report_ok`.

Each report entry is appended to a JSON Lines file under the report
directory (``reports/migration`` unless overridden) so that the information
can be reviewed or parsed after a run:

``report_error``
    Record a fatal error for a year or an article.  An optional exception
    can be supplied and will be serialized to the log.

``report_ok``
    Record a successful (or skipped) step.  Additional key/value information
    can be attached to the entry via the ``extra`` parameter.

The ``EVENTS`` dictionary maps event codes to human readable messages.
Codes not present in the dictionary fall back to the code itself.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional


class MigrationError(Exception):
    """Base class for conditions that abort the whole run."""


class SchemaViolation(MigrationError):
    """A source record is missing a required field or holds an unparseable value."""


class FileSystemError(MigrationError):
    """Creating a directory, writing a file or copying an asset failed."""


EVENTS: Dict[str, str] = {
    "YEAR_SKIPPED": "Year directory already exists, year skipped",
    "ARTICLE_SKIPPED": "Article already exists, not overwritten",
    "ARTICLE_WRITTEN": "Article written",
    "YEAR_INDEX_WRITTEN": "Year index written",
    "SCHEMA_VIOLATION": "Source document violates the expected schema",
    "FILESYSTEM": "Filesystem operation failed",
    "PRE_FLIGHT": "Pre-flight checks failed",
}

DEFAULT_REPORT_DIR = os.path.join("reports", "migration")
ERROR_LOG = "errors.jsonl"
OK_LOG = "success.jsonl"


def _write_jsonl(report_dir: str, filename: str, data: Dict[str, Any]) -> None:
    """Append ``data`` as a JSON object followed by a newline."""
    os.makedirs(report_dir, exist_ok=True)
    with open(os.path.join(report_dir, filename), "a", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False)
        f.write("\n")


def _entry(code: str, subject: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "code": code,
        "message": EVENTS.get(code, code),
        "year": subject.get("year"),
        "article": subject.get("article"),
        "title": subject.get("title"),
    }


def report_error(
    code: str,
    subject: Dict[str, Any],
    exc: Optional[BaseException] = None,
    *,
    report_dir: Optional[str] = None,
) -> None:
    """Log an error event.

    Parameters
    ----------
    code:
        A key identifying the type of error.  If ``code`` is present in
        :data:`EVENTS` its value will be used as the message.
    subject:
        What the error is about.  Only the ``year``, ``article`` and
        ``title`` keys are referenced if present.
    exc:
        Optional exception instance that triggered the error.
    report_dir:
        Directory holding the JSON Lines files.
    """
    entry = _entry(code, subject)
    if exc is not None:
        entry["error"] = str(exc)
    print(f"[ERROR] {entry['message']} - {subject.get('year', '')}")
    _write_jsonl(report_dir or DEFAULT_REPORT_DIR, ERROR_LOG, entry)


def report_ok(
    code: str,
    subject: Dict[str, Any],
    extra: Optional[Dict[str, Any]] = None,
    *,
    report_dir: Optional[str] = None,
) -> None:
    """Log a successful or skipped step; ``extra`` is merged into the entry."""
    entry = _entry(code, subject)
    if extra:
        entry.update(extra)
    _write_jsonl(report_dir or DEFAULT_REPORT_DIR, OK_LOG, entry)
