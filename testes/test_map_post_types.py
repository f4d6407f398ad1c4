import csv
import os
import sys
from pathlib import Path

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SCRIPTS_DIR = os.path.join(PROJECT_ROOT, "scripts")
for path in (PROJECT_ROOT, SCRIPTS_DIR):
    if path not in sys.path:
        sys.path.insert(0, path)

from map_post_types import count_post_types, write_counts_csv
from wxr_parser.parsers.wxr_loader import parse_wxr_string
from wxr_samples import attachment_xml, item_xml, wxr_document


def test_counts_by_type_and_status(tmp_path):
    document = parse_wxr_string(
        wxr_document(
            item_xml("1"),
            item_xml("2"),
            item_xml("3", status="draft"),
            item_xml("4", post_type="page"),
            attachment_xml("5", "1", "https://example.com/a.png"),
        )
    )
    counts = count_post_types(document)
    assert counts[("post", "publish")] == 2
    assert counts[("post", "draft")] == 1
    assert counts[("page", "publish")] == 1
    assert counts[("attachment", "inherit")] == 1

    out = Path(tmp_path) / "counts.csv"
    write_counts_csv(counts, out)
    with out.open(encoding="utf-8", newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["post_type", "status", "count"]
    assert rows[1] == ["post", "publish", "2"]
    assert len(rows) == 5
