import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest

from wxr_parser.parsers.wxr_loader import load_document, parse_wxr_string
from wxr_parser.utils.errors import MalformedDocumentError
from wxr_samples import attachment_xml, item_xml, wxr_document


def test_item_fields_are_read_by_local_name():
    xml = wxr_document(
        item_xml(
            "7",
            title="  Spaced title  ",
            name="first-post",
            content="<p>Body</p>",
            excerpt="Short",
            categories=[("category", "News"), ("post_tag", "python")],
            postmeta=[("_thumbnail_id", "42"), ("_edit_last", "1")],
        )
    )
    document = parse_wxr_string(xml)

    assert document.title == "Example Blog"
    assert document.wxr_version == "1.2"
    assert len(document.items) == 1
    item = document.items[0]
    assert item.post_id == "7"
    assert item.post_type == "post"
    assert item.status == "publish"
    assert item.post_name == "first-post"
    assert item.title == "Spaced title"
    assert item.pub_date == "Wed, 01 Jan 2020 00:00:00 +0000"
    assert item.creator == "admin"
    assert item.link == "https://example.com/first-post/"
    assert item.comment_status == "open"
    assert item.ping_status == "closed"
    assert item.is_sticky == "0"
    assert item.content == "<p>Body</p>"
    assert item.excerpt == "Short"
    assert [(c.domain, c.value) for c in item.categories] == [("category", "News"), ("post_tag", "python")]
    assert item.meta_value("_thumbnail_id") == "42"
    assert item.meta_value("missing") is None


def test_absent_and_empty_elements_are_distinguished():
    xml = wxr_document(item_xml("1", title="", omit=("link", "post_name")))
    item = parse_wxr_string(xml).items[0]
    assert item.title == ""
    assert item.description == ""
    assert item.link is None
    assert item.post_name is None
    assert item.attachment_url is None


def test_attachment_url_and_parent():
    xml = wxr_document(attachment_xml("42", "7", "https://example.com/uploads/cat.jpg"))
    item = parse_wxr_string(xml).items[0]
    assert item.post_type == "attachment"
    assert item.post_parent == "7"
    assert item.attachment_url == "https://example.com/uploads/cat.jpg"


def test_items_keep_document_order():
    xml = wxr_document(item_xml("3"), item_xml("1"), item_xml("2"))
    assert [i.post_id for i in parse_wxr_string(xml).items] == ["3", "1", "2"]


def test_not_xml_is_malformed():
    with pytest.raises(MalformedDocumentError):
        parse_wxr_string("this is not xml <")


def test_wrong_root_is_malformed():
    with pytest.raises(MalformedDocumentError):
        parse_wxr_string("<feed><channel></channel></feed>")


def test_missing_channel_is_malformed():
    with pytest.raises(MalformedDocumentError):
        parse_wxr_string('<rss version="2.0"></rss>')


def test_channel_without_items_is_empty():
    assert parse_wxr_string("<rss><channel><title>x</title></channel></rss>").items == []


def test_load_document_from_file(tmp_path):
    path = tmp_path / "export.xml"
    path.write_text(wxr_document(item_xml("5")), encoding="utf-8")
    document = load_document(str(path))
    assert [i.post_id for i in document.items] == ["5"]


def test_load_document_from_url_uses_session():
    xml = wxr_document(item_xml("9")).encode("utf-8")
    calls = []

    class FakeResponse:
        status_code = 200
        content = xml

        def raise_for_status(self):
            return None

    class FakeSession:
        def get(self, url, timeout):
            calls.append((url, timeout))
            return FakeResponse()

    document = load_document("https://example.com/export.xml", timeout=5, session=FakeSession())
    assert calls == [("https://example.com/export.xml", 5)]
    assert document.items[0].post_id == "9"
