from __future__ import annotations

from datetime import timezone
from email.utils import parsedate_to_datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from wxr_parser.models.post import PostFrontmatter, PostMeta, PostRecord
from wxr_parser.models.wxr_item import WxrDocument, WxrItem
from wxr_parser.parsers.markdown_local import HtmlToMarkdown
from wxr_parser.parsers.translator import get_post_content, init_converter
from wxr_parser.utils.errors import (
    ContentConversionError,
    ItemExtractionError,
    MissingRequiredFieldError,
    UnparseableDateError,
)

EXCLUDED_STATUSES = ("trash", "draft")
COVER_IMAGE_META_KEY = "_thumbnail_id"

Translate = Callable[[WxrItem, Any, Dict[str, Any]], str]


def parse_post_types(value: Optional[str]) -> Tuple[str, ...]:
    """Split a comma-separated post type setting such as ``"post,page"``.

    Whitespace around entries is ignored and empty entries are dropped, so
    an empty string yields an empty tuple.
    """
    if not value:
        return ()
    return tuple(t.strip() for t in value.split(",") if t.strip())


def get_items_of_types(document: WxrDocument, *types: str) -> List[WxrItem]:
    """Return the items whose post type is one of ``types``, in document order."""
    wanted = set(types)
    if not wanted:
        return []
    return [item for item in document.items if item.post_type in wanted]


def _require(item: WxrItem, field: str) -> str:
    value = getattr(item, field)
    if value is None:
        raise MissingRequiredFieldError(field, item_id=item.post_id)
    return value


def get_post_cover_image_id(item: WxrItem) -> Optional[str]:
    return item.meta_value(COVER_IMAGE_META_KEY)


def get_post_date(item: WxrItem) -> str:
    """Parse the RFC 2822 ``pubDate`` and return its UTC calendar date.

    Timestamps without an offset are taken to be UTC.

    :raises MissingRequiredFieldError: if the item has no ``pubDate``.
    :raises UnparseableDateError: if ``pubDate`` is not RFC 2822.
    """
    raw = _require(item, "pub_date")
    try:
        parsed = parsedate_to_datetime(raw)
    except (TypeError, ValueError, IndexError) as e:
        raise UnparseableDateError(raw, item_id=item.post_id) from e
    if parsed is None:
        raise UnparseableDateError(raw, item_id=item.post_id)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).date().isoformat()


def get_categories(item: WxrItem) -> List[str]:
    return [c.value for c in item.categories if c.domain == "category"]


def get_tags(item: WxrItem) -> List[str]:
    # WXR has no separate tag list: tags are <category domain="post_tag">.
    return [c.value for c in item.categories if c.domain == "post_tag"]


def build_post(item: WxrItem, content: str) -> PostRecord:
    """Build the record for ``item`` given its already converted body.

    :raises MissingRequiredFieldError: if ``post_id``, ``pubDate`` or
        ``title`` is absent.
    :raises UnparseableDateError: if ``pubDate`` is malformed.
    """
    post_id = _require(item, "post_id")
    title = _require(item, "title")
    date = get_post_date(item)

    return PostRecord(
        # meta data isn't written to the rendered post
        meta=PostMeta(
            id=post_id,
            slug=item.post_name,
            cover_image_id=get_post_cover_image_id(item),
            image_urls=[],
            type=item.post_type,
        ),
        frontmatter=PostFrontmatter(
            title=title,
            date=date,
            slug=item.post_name,
            link=item.link,
            creator=item.creator,
            description=item.description,
            comment_status=item.comment_status,
            ping_status=item.ping_status,
            is_sticky=item.is_sticky,
            categories=get_categories(item),
            tags=get_tags(item),
        ),
        content=content,
    )


def extract_post(
    item: WxrItem,
    converter: Any,
    config: Dict[str, Any],
    *,
    translate: Translate = get_post_content,
) -> PostRecord:
    """Turn one export item into a :class:`PostRecord`.

    Required fields are checked before the body is converted so a broken
    item never reaches the converter.

    :raises ContentConversionError: if ``translate`` fails for this item.
    """
    post = build_post(item, "")
    try:
        post.content = translate(item, converter, config)
    except ItemExtractionError:
        raise
    except Exception as e:
        raise ContentConversionError(e, item_id=item.post_id) from e
    return post


def collect_posts(
    document: WxrDocument,
    config: Dict[str, Any],
    *,
    converter: Optional[HtmlToMarkdown] = None,
    translate: Translate = get_post_content,
) -> Tuple[List[PostRecord], List[ItemExtractionError]]:
    """Extract post records for the configured post types.

    Items of the types listed in ``config["parser"]["post_types"]`` are
    kept unless their status is ``trash`` or ``draft``.  Output order is
    document order.

    Args:
        document: The loaded export.
        config: The application configuration dictionary.
        converter: Context handed to ``translate`` for every item.  Built
            with :func:`init_converter` when omitted.
        translate: Body conversion callable ``(item, converter, config)``.

    Returns:
        ``(posts, failures)``, where ``failures`` holds one error per item
        that could not be extracted.

    Raises:
        ItemExtractionError: for the first failing item when
            ``config["parser"]["fail_fast"]`` is set.
    """
    settings = config.get("parser", {})
    fail_fast = bool(settings.get("fail_fast"))
    if converter is None:
        converter = init_converter(config)

    types = parse_post_types(settings.get("post_types"))
    items = [
        item for item in get_items_of_types(document, *types)
        if item.status not in EXCLUDED_STATUSES
    ]

    posts: List[PostRecord] = []
    failures: List[ItemExtractionError] = []
    for item in items:
        try:
            posts.append(extract_post(item, converter, config, translate=translate))
        except ItemExtractionError as e:
            if fail_fast:
                raise
            failures.append(e)

    print(f"[INFO] {len(posts)} posts found.")
    return posts, failures
