"""
High-level orchestration of a WordPress export parse.

This module defines a :class:`WxrParseTool` class that ties together the
loader, extractors and utilities into a complete pipeline: load the export,
extract post records, collect attached and scraped images, merge the images
into the posts, and report what happened.

Configuration is supplied via a JSON file path or directly as a
dictionary.  The ``parser`` section holds ``post_types``,
``save_attached_images``, ``save_scraped_images`` and ``fail_fast``; the
``output`` section holds the locations of the JSON dump, the image manifest
and the log file; the ``http`` section holds the timeout used for exports
given as URLs.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Optional

from wxr_parser.extractors.images import collect_images, merge_images_into_posts
from wxr_parser.extractors.wordpress_extractor import collect_posts
from wxr_parser.models.post import PostRecord
from wxr_parser.parsers.wxr_loader import load_document
from wxr_parser.utils.errors import ItemExtractionError, report_error, report_ok
from wxr_parser.utils.manifest import generate_image_manifest_csv


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class WxrParseTool:
    """
    Encapsulates the state and behavior required to turn a WordPress
    export into post records.  This class is responsible for reading
    configuration, running the pipeline and recording failures using the
    :mod:`wxr_parser.utils.errors` module.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, *, config_file: Optional[str] = None) -> None:
        if config_file and os.path.exists(config_file):
            with open(config_file, "r", encoding="utf-8") as f:
                config = json.load(f)
        elif config is None:
            # Default configuration
            config = {}

        # Ensure essential keys exist to prevent KeyErrors
        config.setdefault("parser", {})
        config["parser"].setdefault("post_types", os.getenv("WXR_POST_TYPES", "post,page"))
        config["parser"].setdefault("save_attached_images", _env_flag("WXR_SAVE_ATTACHED_IMAGES", True))
        config["parser"].setdefault("save_scraped_images", _env_flag("WXR_SAVE_SCRAPED_IMAGES", True))
        config["parser"].setdefault("fail_fast", _env_flag("WXR_FAIL_FAST", False))

        config.setdefault("output", {})
        config["output"].setdefault("report_dir", os.path.join("reports", "parse"))
        report_dir = config["output"]["report_dir"]
        config["output"].setdefault("posts_json", os.path.join(report_dir, "posts.json"))
        config["output"].setdefault("image_manifest", os.path.join(report_dir, "image_manifest.csv"))
        config["output"].setdefault("log_file", os.path.join(report_dir, "parse.log"))

        config.setdefault("http", {})
        config["http"].setdefault("timeout", 30)

        self.config = config
        self.failures: List[ItemExtractionError] = []

    def log_message(self, message: str, level: str = "INFO") -> None:
        print(f"[{level}] {message}")
        # Append to log file
        log_file = self.config["output"]["log_file"]
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(f"{level}: {message}\n")

    def parse_file(self, location: str, *, session=None) -> List[PostRecord]:
        """
        Run the whole pipeline over the export at ``location`` (a path or
        an http(s) URL) and return the post records in document order.

        Items that cannot be extracted are reported and kept in
        :attr:`failures`; with ``parser.fail_fast`` enabled the first one is
        raised instead.  Document-level errors always propagate.

        :param location: Path or URL of the WXR export.
        :param session: Optional ``requests`` session for URL inputs.
        :return: The list of post records with images merged in.
        """
        self.log_message(f"Parsing {location}...")
        document = load_document(location, timeout=self.config["http"]["timeout"], session=session)
        self.log_message(f"Loaded {len(document.items)} items from export.", level="DEBUG")

        posts, failures = collect_posts(document, self.config)
        self.failures = failures
        report_dir = self.config["output"]["report_dir"]
        for failure in failures:
            report_error(failure.code, {"id": failure.item_id}, failure, report_dir=report_dir)
            self.log_message(str(failure), level="WARNING")

        images = collect_images(document, self.config)
        merge_images_into_posts(images, posts)

        report_ok(
            "PARSED",
            {"id": location, "title": document.title},
            {"posts": len(posts), "images": len(images), "failures": len(failures)},
            report_dir=report_dir,
        )
        self.log_message(f"{len(posts)} posts ready, {len(failures)} items skipped.")
        return posts

    def write_outputs(self, posts: List[PostRecord]) -> Dict[str, str]:
        """Write the JSON dump of ``posts`` and the image manifest CSV."""
        posts_json = self.config["output"]["posts_json"]
        os.makedirs(os.path.dirname(posts_json) or ".", exist_ok=True)
        with open(posts_json, "w", encoding="utf-8") as f:
            json.dump([post.to_dict() for post in posts], f, ensure_ascii=False, indent=2)
        self.log_message(f"Posts written to {posts_json}")

        manifest = generate_image_manifest_csv(posts, out_path=self.config["output"]["image_manifest"])
        self.log_message(f"Image manifest written to {manifest}")
        return {"posts_json": posts_json, "image_manifest": manifest}
