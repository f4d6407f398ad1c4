"""
Loading of WordPress eXtended RSS (WXR) exports.

The loader is the only place that looks at raw XML.  It reads the export
from a file path or an ``http(s)://`` URL, walks the channel's ``<item>``
elements and turns each one into a typed :class:`WxrItem`.  The rest of the
pipeline only ever sees those models.

Namespaced tags are matched by their local name (``wp:post_id`` becomes
``post_id``, ``dc:creator`` becomes ``creator``), which keeps the loader
working across WXR 1.0, 1.1 and 1.2.  ``content:encoded`` and
``excerpt:encoded`` share a local name and are told apart by namespace.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from wxr_parser.models.wxr_item import WxrCategory, WxrDocument, WxrItem, WxrPostMeta
from wxr_parser.utils.errors import MalformedDocumentError
from wxr_parser.utils.http import fetch_bytes, is_url

# Single-occurrence item tags, by local name, mapped to WxrItem fields.
_SCALAR_TAGS: Dict[str, str] = {
    "post_type": "post_type",
    "status": "status",
    "post_id": "post_id",
    "post_name": "post_name",
    "post_parent": "post_parent",
    "pubDate": "pub_date",
    "link": "link",
    "creator": "creator",
    "title": "title",
    "description": "description",
    "comment_status": "comment_status",
    "ping_status": "ping_status",
    "is_sticky": "is_sticky",
    "attachment_url": "attachment_url",
}


def _split_tag(tag: str) -> tuple[str, str]:
    """Return ``(namespace, local_name)`` for an ElementTree tag."""
    if tag.startswith("{"):
        namespace, _, local = tag[1:].partition("}")
        return namespace, local
    return "", tag


def _local_name(tag: str) -> str:
    return _split_tag(tag)[1]


def _text(element: ET.Element) -> str:
    return element.text or ""


def _child_text(element: ET.Element, name: str) -> Optional[str]:
    for child in element:
        if _local_name(child.tag) == name:
            return _text(child)
    return None


def _parse_item(element: ET.Element) -> WxrItem:
    fields: Dict[str, Any] = {}
    categories: List[WxrCategory] = []
    postmeta: List[WxrPostMeta] = []

    for child in element:
        namespace, name = _split_tag(child.tag)
        if name == "category":
            categories.append(
                WxrCategory(
                    domain=child.get("domain"),
                    nicename=child.get("nicename"),
                    value=_text(child),
                )
            )
        elif name == "postmeta":
            postmeta.append(
                WxrPostMeta(
                    key=_child_text(child, "meta_key"),
                    value=_child_text(child, "meta_value"),
                )
            )
        elif name == "encoded":
            field = "excerpt" if "excerpt" in namespace else "content"
            fields.setdefault(field, _text(child))
        elif name in _SCALAR_TAGS:
            # first occurrence wins
            fields.setdefault(_SCALAR_TAGS[name], _text(child))

    fields["categories"] = categories
    fields["postmeta"] = postmeta
    return WxrItem.model_validate(fields)


def parse_wxr_string(data: Union[str, bytes]) -> WxrDocument:
    """Parse the XML text of an export into a :class:`WxrDocument`.

    :raises MalformedDocumentError: if ``data`` is not XML or has no
        ``rss/channel`` element.
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise MalformedDocumentError(f"Export is not well-formed XML: {e}") from e

    if _local_name(root.tag) != "rss":
        raise MalformedDocumentError(f"Expected an <rss> root element, found <{_local_name(root.tag)}>")

    channel = next((c for c in root if _local_name(c.tag) == "channel"), None)
    if channel is None:
        raise MalformedDocumentError("Export has no <channel> element")

    try:
        items = [_parse_item(c) for c in channel if _local_name(c.tag) == "item"]
    except ValidationError as e:
        raise MalformedDocumentError(f"Export item does not match the WXR schema: {e}") from e

    return WxrDocument(
        title=_child_text(channel, "title"),
        link=_child_text(channel, "link"),
        wxr_version=_child_text(channel, "wxr_version"),
        items=items,
    )


def load_document(location: str, *, timeout: float = 30, session=None) -> WxrDocument:
    """Read an export from a file path or URL and parse it.

    :param location: Path on disk, or an ``http://`` / ``https://`` URL.
    :param timeout: Request timeout in seconds for URL inputs.
    :param session: Optional ``requests`` session for URL inputs.
    :raises FileNotFoundError: if a path does not exist.
    :raises requests.RequestException: if a URL cannot be fetched.
    :raises MalformedDocumentError: if the content is not a WXR document.
    """
    if is_url(location):
        data = fetch_bytes(location, timeout=timeout, session=session)
    else:
        with open(location, "rb") as f:
            data = f.read()
    return parse_wxr_string(data)
