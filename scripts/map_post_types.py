#!/usr/bin/env python3
"""
Count the items of a WordPress export by (post type, status) and write the
summary to a CSV file, so the ``post_types`` setting can be chosen before a
parse.

Usage:
  python scripts/map_post_types.py \\
    --input docs/export.xml \\
    --output data/post_types_counts.csv
"""

from __future__ import annotations

import argparse
import csv
import sys
from collections import Counter
from pathlib import Path
from typing import Tuple

# Allow importing wxr_parser when run as a script
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from wxr_parser.models.wxr_item import WxrDocument  # noqa: E402
from wxr_parser.parsers.wxr_loader import load_document  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Count export items by post type and status."
    )
    parser.add_argument(
        "--input",
        required=True,
        help="Path or URL of the WXR export",
    )
    parser.add_argument(
        "--output",
        default="data/post_types_counts.csv",
        help="Output CSV with (post_type,status,count)",
    )
    return parser.parse_args()


def count_post_types(document: WxrDocument) -> Counter[Tuple[str, str]]:
    """Count items per ``(post_type, status)``; missing values count as empty strings."""
    counter: Counter[Tuple[str, str]] = Counter()
    for item in document.items:
        counter[(item.post_type or "", item.status or "")] += 1
    return counter


def write_counts_csv(counter: Counter, out_path: Path) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["post_type", "status", "count"])
        for (post_type, status), count in sorted(counter.items(), key=lambda x: (-x[1], x[0])):
            writer.writerow([post_type, status, count])


def main() -> None:
    args = parse_args()
    out_path = Path(args.output)

    document = load_document(args.input)
    counts = count_post_types(document)
    write_counts_csv(counts, out_path)

    print(f"Item kinds: {len(counts)}")
    print(f"Total items: {sum(counts.values())}")
    print(f"File written: {out_path}")


if __name__ == "__main__":
    main()
