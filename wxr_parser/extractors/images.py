"""
Image discovery and merging.

Images come from two independent sources:

* attachment items of the export (``collect_attached_images``), which know
  their own attachment id and the id of the post they were uploaded to;
* ``<img>`` tags found in the raw body HTML of posts
  (``collect_scraped_images``), which only know the post they appear in.

:func:`merge_images_into_posts` folds both lists into the post records by
post id.  Scraping is best-effort: it is a pattern match over raw markup,
so ``src`` values that are unquoted, single-quoted, built by scripts or
carry a query string after the extension are not found.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List
from urllib.parse import urljoin

from wxr_parser.models.post import ImageRef, PostRecord
from wxr_parser.models.wxr_item import WxrDocument
from wxr_parser.utils.urls import IMAGE_URL_PATTERN, get_filename_from_url
from .wordpress_extractor import get_items_of_types, parse_post_types

IMG_TAG_PATTERN = re.compile(r'<img[^>]*src="(.+?\.(?:gif|jpe?g|png))"[^>]*>', re.IGNORECASE)


def collect_attached_images(document: WxrDocument) -> List[ImageRef]:
    """Return the gif/jpg/jpeg/png attachments of the export, in document order."""
    images = [
        ImageRef(id=attachment.post_id, post_id=attachment.post_parent, url=attachment.attachment_url)
        for attachment in get_items_of_types(document, "attachment")
        # filter to certain image file types
        if attachment.attachment_url and IMAGE_URL_PATTERN.search(attachment.attachment_url)
    ]

    print(f"[INFO] {len(images)} attached images found.")
    return images


def scrape_image_urls(html: str, base_url: str) -> List[str]:
    """Find image ``src`` values in ``html`` and resolve them against ``base_url``.

    Resolution is standard relative URL joining: ``photo.png`` on
    ``https://example.com/post/`` gives ``https://example.com/post/photo.png``,
    while ``/photo.png`` gives ``https://example.com/photo.png``.
    """
    # base the matched image URL relative to the post URL
    return [urljoin(base_url, match.group(1)) for match in IMG_TAG_PATTERN.finditer(html or "")]


def collect_scraped_images(document: WxrDocument, config: Dict[str, Any]) -> List[ImageRef]:
    """Return images referenced from the body of every item of the configured types.

    Statuses are not filtered here; images of excluded posts are dropped
    at merge time because their post is missing.
    """
    types = parse_post_types(config.get("parser", {}).get("post_types"))
    images: List[ImageRef] = []
    for item in get_items_of_types(document, *types):
        for url in scrape_image_urls(item.content or "", item.link or ""):
            images.append(ImageRef(id=None, post_id=item.post_id, url=url))

    print(f"[INFO] {len(images)} images scraped from post body content.")
    return images


def collect_images(document: WxrDocument, config: Dict[str, Any]) -> List[ImageRef]:
    """Collect images from the enabled sources, attached images first."""
    settings = config.get("parser", {})
    images: List[ImageRef] = []
    if settings.get("save_attached_images"):
        images.extend(collect_attached_images(document))
    if settings.get("save_scraped_images"):
        images.extend(collect_scraped_images(document, config))
    return images


def merge_images_into_posts(images: Iterable[ImageRef], posts: Iterable[PostRecord]) -> None:
    """Attach ``images`` to ``posts`` in place.

    Images whose post is unknown are ignored.  An image whose attachment id
    equals the post's cover image id sets ``frontmatter.cover_image`` and
    ``meta.cover_image_url`` (the last such image wins).  Every image URL is appended to
    ``meta.image_urls`` once, in first-seen order.
    """
    posts_lookup: Dict[str, PostRecord] = {post.meta.id: post for post in posts}

    for image in images:
        post = posts_lookup.get(image.post_id) if image.post_id is not None else None
        if post is None:
            continue
        cover_id = post.meta.cover_image_id
        if image.id is not None and cover_id is not None and image.id == cover_id:
            # save cover image filename to frontmatter
            post.frontmatter.cover_image = get_filename_from_url(image.url)
            post.meta.cover_image_url = image.url

        # save (unique) full image URLs for downloading later
        if image.url not in post.meta.image_urls:
            post.meta.image_urls.append(image.url)
