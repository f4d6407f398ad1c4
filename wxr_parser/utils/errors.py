"""
Exceptions and structured reporting for a parse run.

The exception hierarchy separates fatal, document-level failures
(:class:`MalformedDocumentError`) from failures scoped to a single export
item (:class:`ItemExtractionError` and its subclasses).  Item failures carry
the offending item's ``post_id`` when it is known so the caller can report
them and keep going, or stop at the first one.

Two reporting functions append JSON Lines entries under ``reports/parse``:

``report_error``
    Record an error for an item.  An optional exception can be supplied and
    will be serialized to the log.

``report_ok``
    Record a successful step.  Additional key/value information can be
    attached to the entry via the ``extra`` parameter.

The ``ERRORS`` dictionary maps event codes to human readable messages.
Codes not present in the dictionary fall back to the code itself.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

ERRORS: Dict[str, str] = {
    "MALFORMED_DOCUMENT": "Export is not a WXR document",
    "MISSING_REQUIRED_FIELD": "Item is missing a required field",
    "UNPARSEABLE_DATE": "Item publish date is not a valid RFC 2822 timestamp",
    "ITEM_EXTRACTION": "Item could not be extracted",
    "CONTENT_CONVERSION": "Item body could not be converted",
    "PARSED": "Export parsed successfully",
}

_REPORT_DIR = os.path.join("reports", "parse")


class WxrParseError(Exception):
    """Base class for all errors raised while parsing an export."""

    code = "ITEM_EXTRACTION"


class MalformedDocumentError(WxrParseError):
    """The document is not XML or lacks the ``rss/channel`` structure."""

    code = "MALFORMED_DOCUMENT"


class ItemExtractionError(WxrParseError):
    """A single item could not be turned into a post record."""

    def __init__(self, message: str, *, item_id: Optional[str] = None) -> None:
        self.item_id = item_id
        label = item_id if item_id is not None else "unknown"
        super().__init__(f"Item {label}: {message}")


class MissingRequiredFieldError(ItemExtractionError):
    code = "MISSING_REQUIRED_FIELD"

    def __init__(self, field: str, *, item_id: Optional[str] = None) -> None:
        self.field = field
        super().__init__(f"missing required field '{field}'", item_id=item_id)


class UnparseableDateError(ItemExtractionError):
    code = "UNPARSEABLE_DATE"

    def __init__(self, value: str, *, item_id: Optional[str] = None) -> None:
        self.value = value
        super().__init__(f"unparseable publish date {value!r}", item_id=item_id)


class ContentConversionError(ItemExtractionError):
    code = "CONTENT_CONVERSION"

    def __init__(self, cause: Exception, *, item_id: Optional[str] = None) -> None:
        self.cause = cause
        super().__init__(f"body conversion failed: {cause}", item_id=item_id)


class PreFlightCheckError(WxrParseError):
    """The run cannot start: bad input location or configuration."""


def _write_jsonl(path: str, data: Dict[str, Any]) -> None:
    """Append ``data`` as a JSON object followed by a newline to ``path``."""
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False)
        f.write("\n")


def report_error(
    code: str,
    item: Dict[str, Any],
    exc: Optional[Exception] = None,
    *,
    report_dir: str = _REPORT_DIR,
) -> None:
    """Log an error event for ``item``.

    Parameters
    ----------
    code:
        A key identifying the type of error.  If ``code`` is present in
        :data:`ERRORS` its value will be used as the message.
    item:
        Identifying information for the item.  Only the ``id`` and ``title``
        keys are referenced if present.
    exc:
        Optional exception instance that triggered the error.  The string
        representation of the exception will be included in the log entry.
    report_dir:
        Directory holding ``errors.jsonl``.
    """
    message = ERRORS.get(code, code)
    entry: Dict[str, Any] = {
        "code": code,
        "message": message,
        "id": item.get("id"),
        "title": item.get("title"),
    }
    if exc is not None:
        entry["error"] = str(exc)
    print(f"[ERROR] {message} - {item.get('id') or ''}")
    _write_jsonl(os.path.join(report_dir, "errors.jsonl"), entry)


def report_ok(
    code: str,
    item: Dict[str, Any],
    extra: Optional[Dict[str, Any]] = None,
    *,
    report_dir: str = _REPORT_DIR,
) -> None:
    """Log a successful event.

    Parameters
    ----------
    code:
        A key identifying the type of event.
    item:
        Identifying information for the subject of the event (for a whole
        run, the input location).
    extra:
        Optional dictionary of additional fields to merge into the log entry.
    report_dir:
        Directory holding ``success.jsonl``.
    """
    message = ERRORS.get(code, code)
    entry: Dict[str, Any] = {
        "code": code,
        "message": message,
        "id": item.get("id"),
        "title": item.get("title"),
    }
    if extra:
        entry.update(extra)
    print(f"[OK] {message} - {item.get('id') or ''}")
    _write_jsonl(os.path.join(report_dir, "success.jsonl"), entry)
