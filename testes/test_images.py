import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest
pytest.importorskip("bs4")

from wxr_parser.extractors.images import (
    collect_attached_images,
    collect_images,
    collect_scraped_images,
    merge_images_into_posts,
    scrape_image_urls,
)
from wxr_parser.extractors.wordpress_extractor import collect_posts
from wxr_parser.models.post import ImageRef, PostFrontmatter, PostMeta, PostRecord
from wxr_parser.parsers.wxr_loader import parse_wxr_string
from wxr_samples import attachment_xml, item_xml, make_config, wxr_document


def make_post(post_id, cover_image_id=None):
    return PostRecord(
        meta=PostMeta(id=post_id, slug=f"post-{post_id}", cover_image_id=cover_image_id),
        frontmatter=PostFrontmatter(title="T", date="2020-01-01"),
    )


def test_attached_images_keep_only_image_extensions():
    document = parse_wxr_string(
        wxr_document(
            attachment_xml("11", "1", "https://example.com/uploads/a.jpg"),
            attachment_xml("12", "1", "https://example.com/uploads/b.PNG"),
            attachment_xml("13", "2", "https://example.com/uploads/c.pdf"),
            attachment_xml("14", "2", "https://example.com/uploads/d.jpeg"),
            attachment_xml("15", "3", "https://example.com/uploads/e.Gif"),
            attachment_xml("16", "3", "https://example.com/uploads/f.webp"),
            item_xml("1"),
        )
    )
    images = collect_attached_images(document)
    assert [(i.id, i.post_id, i.url) for i in images] == [
        ("11", "1", "https://example.com/uploads/a.jpg"),
        ("12", "1", "https://example.com/uploads/b.PNG"),
        ("14", "2", "https://example.com/uploads/d.jpeg"),
        ("15", "3", "https://example.com/uploads/e.Gif"),
    ]


def test_scraped_image_is_resolved_against_post_link():
    html = '<p><img src="/photo.png"></p><img class="x" SRC="pics/b.JPG" alt="b"/>'
    assert scrape_image_urls(html, "https://example.com/post/") == [
        "https://example.com/photo.png",
        "https://example.com/post/pics/b.JPG",
    ]


def test_bare_relative_src_resolves_inside_post_directory():
    assert scrape_image_urls('<img src="photo.png">', "https://example.com/post/") == [
        "https://example.com/post/photo.png",
    ]
    assert scrape_image_urls('<img src="photo.png">', "https://example.com/post") == [
        "https://example.com/photo.png",
    ]


def test_scraping_tolerates_attributes_around_src():
    html = (
        '<IMG width="300" src="https://cdn.example.com/x.gif" class="aligncenter" />'
        '<img src="https://cdn.example.com/skip.svg">'
        '<img alt="n" src="https://cdn.example.com/y.jpeg?w=300">'
    )
    assert scrape_image_urls(html, "https://example.com/p/") == ["https://cdn.example.com/x.gif"]


def test_collect_scraped_images_uses_configured_types_and_no_id():
    document = parse_wxr_string(
        wxr_document(
            item_xml("1", link="https://example.com/post/", content='<img src="photo.png">'),
            item_xml("2", post_type="page", status="draft", content='<img src="https://example.com/d.jpg">'),
            item_xml("3", post_type="recipe", content='<img src="https://example.com/r.jpg">'),
        )
    )
    images = collect_scraped_images(document, make_config())
    assert images == [
        ImageRef(id=None, post_id="1", url="https://example.com/post/photo.png"),
        ImageRef(id=None, post_id="2", url="https://example.com/d.jpg"),
    ]


def test_collect_images_orders_attached_before_scraped_and_honors_flags():
    document = parse_wxr_string(
        wxr_document(
            item_xml("1", content='<img src="https://example.com/s.png">'),
            attachment_xml("5", "1", "https://example.com/a.png"),
        )
    )
    both = collect_images(document, make_config())
    assert [i.url for i in both] == ["https://example.com/a.png", "https://example.com/s.png"]

    attached_only = collect_images(document, make_config(save_scraped_images=False))
    assert [i.url for i in attached_only] == ["https://example.com/a.png"]

    scraped_only = collect_images(document, make_config(save_attached_images=False))
    assert [i.url for i in scraped_only] == ["https://example.com/s.png"]

    assert collect_images(document, make_config(save_attached_images=False, save_scraped_images=False)) == []


def test_merge_dedupes_urls_in_first_seen_order():
    post = make_post("1")
    images = [
        ImageRef(id="5", post_id="1", url="https://example.com/a.png"),
        ImageRef(id="6", post_id="1", url="https://example.com/b.png"),
        ImageRef(id=None, post_id="1", url="https://example.com/a.png"),
        ImageRef(id=None, post_id="1", url="https://example.com/c.png"),
    ]
    merge_images_into_posts(images, [post])
    assert post.meta.image_urls == [
        "https://example.com/a.png",
        "https://example.com/b.png",
        "https://example.com/c.png",
    ]
    assert post.frontmatter.cover_image is None


def test_merge_drops_orphans():
    post = make_post("1")
    merge_images_into_posts(
        [
            ImageRef(id="5", post_id="99", url="https://example.com/a.png"),
            ImageRef(id="6", post_id=None, url="https://example.com/b.png"),
        ],
        [post],
    )
    assert post.meta.image_urls == []


def test_cover_image_from_matching_attachment():
    post = make_post("1", cover_image_id="42")
    other = make_post("2")
    merge_images_into_posts(
        [
            ImageRef(id="41", post_id="1", url="https://example.com/uploads/other.jpg"),
            ImageRef(id="42", post_id="1", url="https://example.com/uploads/My%20Cover.jpg"),
            ImageRef(id=None, post_id="1", url="https://example.com/uploads/inline.png"),
            ImageRef(id="42", post_id="2", url="https://example.com/uploads/not-mine.jpg"),
        ],
        [post, other],
    )
    assert post.frontmatter.cover_image == "My Cover.jpg"
    assert other.frontmatter.cover_image is None


def test_scraped_images_never_become_cover_even_without_cover_id():
    post = make_post("1")
    merge_images_into_posts([ImageRef(id=None, post_id="1", url="https://example.com/x.png")], [post])
    assert post.frontmatter.cover_image is None
    assert post.meta.image_urls == ["https://example.com/x.png"]


def test_last_cover_match_wins():
    post = make_post("1", cover_image_id="42")
    merge_images_into_posts(
        [
            ImageRef(id="42", post_id="1", url="https://example.com/first.jpg"),
            ImageRef(id="42", post_id="1", url="https://example.com/second.jpg"),
        ],
        [post],
    )
    assert post.frontmatter.cover_image == "second.jpg"


def test_thumbnail_attachment_and_body_image_pipeline():
    document = parse_wxr_string(
        wxr_document(
            item_xml(
                "7",
                link="https://example.com/2020/hello/",
                postmeta=[("_thumbnail_id", "42")],
                content='<p>Look: <img src="https://example.com/uploads/cover.jpg" /></p>',
            ),
            attachment_xml("42", "7", "https://example.com/uploads/cover.jpg"),
            item_xml("8", status="draft", content='<img src="https://example.com/uploads/d.png">'),
        )
    )
    config = make_config()
    posts, _ = collect_posts(document, config)
    merge_images_into_posts(collect_images(document, config), posts)

    assert [p.meta.id for p in posts] == ["7"]
    post = posts[0]
    assert post.frontmatter.cover_image == "cover.jpg"
    assert post.meta.image_urls == ["https://example.com/uploads/cover.jpg"]
    assert post.content == "Look: ![](images/cover.jpg)"
