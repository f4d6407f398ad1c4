"""Helpers that build small WXR exports for the tests."""

from xml.sax.saxutils import escape

WXR_HEAD = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
  xmlns:excerpt="http://wordpress.org/export/1.2/excerpt/"
  xmlns:content="http://purl.org/rss/1.0/modules/content/"
  xmlns:wfw="http://wellformedweb.org/CommentAPI/"
  xmlns:dc="http://purl.org/dc/elements/1.1/"
  xmlns:wp="http://wordpress.org/export/1.2/">
<channel>
  <title>Example Blog</title>
  <link>https://example.com</link>
  <wp:wxr_version>1.2</wp:wxr_version>
"""

WXR_TAIL = """
</channel>
</rss>
"""


def item_xml(
    post_id,
    *,
    post_type="post",
    status="publish",
    title="Hello world",
    name=None,
    parent="0",
    pub_date="Wed, 01 Jan 2020 00:00:00 +0000",
    link=None,
    creator="admin",
    content="",
    excerpt="",
    categories=(),
    postmeta=(),
    attachment_url=None,
    omit=(),
):
    """Return the XML of one ``<item>``.

    ``categories`` is a sequence of ``(domain, value)`` pairs, ``postmeta`` a
    sequence of ``(key, value)`` pairs.  Tags named in ``omit`` are left out.
    """
    name = name if name is not None else f"post-{post_id}"
    link = link if link is not None else f"https://example.com/{name}/"
    fields = [
        ("title", f"<title>{escape(title)}</title>"),
        ("link", f"<link>{escape(link)}</link>"),
        ("pubDate", f"<pubDate>{pub_date}</pubDate>"),
        ("creator", f"<dc:creator><![CDATA[{creator}]]></dc:creator>"),
        ("description", "<description></description>"),
        ("content", f"<content:encoded><![CDATA[{content}]]></content:encoded>"),
        ("excerpt", f"<excerpt:encoded><![CDATA[{excerpt}]]></excerpt:encoded>"),
        ("post_id", f"<wp:post_id>{post_id}</wp:post_id>"),
        ("comment_status", "<wp:comment_status><![CDATA[open]]></wp:comment_status>"),
        ("ping_status", "<wp:ping_status><![CDATA[closed]]></wp:ping_status>"),
        ("post_name", f"<wp:post_name><![CDATA[{name}]]></wp:post_name>"),
        ("status", f"<wp:status><![CDATA[{status}]]></wp:status>"),
        ("post_parent", f"<wp:post_parent>{parent}</wp:post_parent>"),
        ("post_type", f"<wp:post_type><![CDATA[{post_type}]]></wp:post_type>"),
        ("is_sticky", "<wp:is_sticky>0</wp:is_sticky>"),
    ]
    if attachment_url is not None:
        fields.append(("attachment_url", f"<wp:attachment_url><![CDATA[{attachment_url}]]></wp:attachment_url>"))
    for domain, value in categories:
        fields.append(
            ("category", f'<category domain="{domain}" nicename="{escape(value.lower())}"><![CDATA[{value}]]></category>')
        )
    for key, value in postmeta:
        fields.append(
            (
                "postmeta",
                "<wp:postmeta>"
                f"<wp:meta_key><![CDATA[{key}]]></wp:meta_key>"
                f"<wp:meta_value><![CDATA[{value}]]></wp:meta_value>"
                "</wp:postmeta>",
            )
        )
    body = "\n    ".join(xml for tag, xml in fields if tag not in omit)
    return f"  <item>\n    {body}\n  </item>\n"


def attachment_xml(post_id, parent, url, **kwargs):
    kwargs.setdefault("status", "inherit")
    return item_xml(post_id, post_type="attachment", parent=parent, attachment_url=url, **kwargs)


def wxr_document(*items):
    return WXR_HEAD + "".join(items) + WXR_TAIL


def make_config(**parser_settings):
    settings = {
        "post_types": "post,page",
        "save_attached_images": True,
        "save_scraped_images": True,
        "fail_fast": False,
    }
    settings.update(parser_settings)
    return {"parser": settings}
