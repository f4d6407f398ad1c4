"""
Utility helpers used by the parse tool.

This subpackage exposes the error hierarchy, structured event reporting,
URL helpers and image manifest generation.
"""

from .errors import (
    ERRORS,
    ContentConversionError,
    ItemExtractionError,
    MalformedDocumentError,
    MissingRequiredFieldError,
    PreFlightCheckError,
    UnparseableDateError,
    WxrParseError,
    report_error,
    report_ok,
)
from .manifest import generate_image_manifest_csv
from .urls import get_filename_from_url

__all__ = [
    "ERRORS",
    "ContentConversionError",
    "ItemExtractionError",
    "MalformedDocumentError",
    "MissingRequiredFieldError",
    "PreFlightCheckError",
    "UnparseableDateError",
    "WxrParseError",
    "report_error",
    "report_ok",
    "generate_image_manifest_csv",
    "get_filename_from_url",
]
