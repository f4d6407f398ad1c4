"""
Generation of the image manifest CSV.

The :func:`generate_image_manifest_csv` helper writes one row per image URL
collected for a post.  Downloading is left to another tool; the manifest
tells it what to fetch and which file is each post's cover image.
"""

from __future__ import annotations

import csv
import os
from typing import Iterable

from wxr_parser.models.post import PostRecord
from wxr_parser.utils.urls import get_filename_from_url


def generate_image_manifest_csv(
    posts: Iterable[PostRecord], *, out_path: str = "reports/parse/image_manifest.csv"
) -> str:
    """Write a CSV listing every image URL attached to ``posts``.

    Parameters
    ----------
    posts:
        Post records after images were merged into them.
    out_path:
        Location of the CSV file to be written.  The parent directory is
        created automatically.

    Returns
    -------
    str
        The path of the generated CSV file.
    """
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["PostID", "Slug", "ImageURL", "Filename", "IsCover"])
        for post in posts:
            cover_url = post.meta.cover_image_url
            for url in post.meta.image_urls:
                filename = get_filename_from_url(url)
                # basenames repeat across upload folders, so match the full URL
                is_cover = cover_url is not None and url == cover_url
                writer.writerow([post.meta.id, post.meta.slug or "", url, filename, "yes" if is_cover else "no"])
    return out_path
