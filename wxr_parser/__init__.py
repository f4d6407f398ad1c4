"""
Top-level package for the WordPress export parser.

This package turns a WordPress eXtended RSS (WXR) export into normalized
post records ready to be rendered as Markdown with front-matter.  Modules
are split into subpackages:

* :mod:`wxr_parser.parsers` – export loading and HTML to Markdown conversion
* :mod:`wxr_parser.extractors` – post extraction and image collection/merging
* :mod:`wxr_parser.models` – typed export items and post records
* :mod:`wxr_parser.utils` – errors, event reporting and the image manifest

Orchestration, configuration and logging live in
:mod:`wxr_parser.parse_tool`.
"""

__version__ = "0.1.0"
