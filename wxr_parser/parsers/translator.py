"""
Post body conversion.

:func:`get_post_content` is the text-conversion step used by the post
extractor.  It receives the item, a converter built once per run by
:func:`init_converter`, and the application configuration.
"""

from __future__ import annotations

import re
from typing import Any, Dict

from wxr_parser.models.wxr_item import WxrItem
from wxr_parser.utils.urls import IMAGE_URL_PATTERN, get_filename_from_url
from .markdown_local import HtmlToMarkdown

__all__ = [
    "init_converter",
    "get_post_content",
]


def init_converter(config: Dict[str, Any]) -> HtmlToMarkdown:
    """Build the converter shared by every post of a run.

    When scraped images are saved, image sources pointing at gif/jpg/png
    files are rewritten to ``images/<filename>`` so that rendered posts
    reference the downloaded copies.
    """
    save_scraped = bool(config.get("parser", {}).get("save_scraped_images"))
    if not save_scraped:
        return HtmlToMarkdown()

    def _local_image(src: str) -> str:
        if IMAGE_URL_PATTERN.search(src):
            return f"images/{get_filename_from_url(src)}"
        return src

    return HtmlToMarkdown(image_src_rewriter=_local_image)


def get_post_content(item: WxrItem, converter: HtmlToMarkdown, config: Dict[str, Any]) -> str:
    content = item.content or ""
    # WordPress stores paragraphs as blank-line separated text
    content = re.sub(r"(\r?\n){2}", "\n<div></div>\n", content)
    return converter.convert(content)
