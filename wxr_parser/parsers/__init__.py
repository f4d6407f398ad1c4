"""
Parsers and converters used by the pipeline.

This subpackage exposes ``load_document``/``parse_wxr_string`` from
:mod:`wxr_parser.parsers.wxr_loader` and the body conversion helpers from
:mod:`wxr_parser.parsers.translator`.
"""

from .markdown_local import HtmlToMarkdown, convert_html_to_markdown_local
from .translator import get_post_content, init_converter
from .wxr_loader import load_document, parse_wxr_string

__all__ = [
    "HtmlToMarkdown",
    "convert_html_to_markdown_local",
    "get_post_content",
    "init_converter",
    "load_document",
    "parse_wxr_string",
]
