"""
Extractors for WordPress export documents.

This subpackage turns a loaded export into normalized post records
(:mod:`wxr_parser.extractors.wordpress_extractor`) and discovers and merges
the images that belong to them (:mod:`wxr_parser.extractors.images`).
"""

from .images import (
    collect_attached_images,
    collect_images,
    collect_scraped_images,
    merge_images_into_posts,
)
from .wordpress_extractor import collect_posts, get_items_of_types, parse_post_types

__all__ = [
    "collect_attached_images",
    "collect_images",
    "collect_posts",
    "collect_scraped_images",
    "get_items_of_types",
    "merge_images_into_posts",
    "parse_post_types",
]
