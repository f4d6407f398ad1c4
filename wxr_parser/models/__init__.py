"""
Typed data models.

:mod:`wxr_parser.models.wxr_item` describes the export document as it is
read from disk; :mod:`wxr_parser.models.post` describes the normalized
records handed to rendering.
"""

from .post import ImageRef, PostFrontmatter, PostMeta, PostRecord
from .wxr_item import WxrCategory, WxrDocument, WxrItem, WxrPostMeta

__all__ = [
    "ImageRef",
    "PostFrontmatter",
    "PostMeta",
    "PostRecord",
    "WxrCategory",
    "WxrDocument",
    "WxrItem",
    "WxrPostMeta",
]
