"""
Entry point for the WordPress export parser.
"""

import argparse

from wxr_parser.parse_tool import WxrParseTool
from wxr_parser.utils.errors import PreFlightCheckError, WxrParseError
from wxr_parser.utils.pre_flight_checks import run_pre_flight_checks

CONFIG_FILE = "config/parser_config.json"


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Parse a WordPress export (WXR) into post records with their images.",
    )
    parser.add_argument("input", help="Path or http(s) URL of the WXR export file")
    parser.add_argument("--config", default=CONFIG_FILE, help="JSON configuration file")
    parser.add_argument("--post-types", help="Comma-separated post types to include (e.g. post,page)")
    parser.add_argument(
        "--no-attached-images",
        action="store_true",
        help="Do not collect images from attachment items",
    )
    parser.add_argument(
        "--no-scraped-images",
        action="store_true",
        help="Do not collect images found in post body HTML",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop at the first item that cannot be extracted",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """
    Main function to run the WordPress export parser.
    """
    args = parse_args(argv)
    tool = WxrParseTool(config_file=args.config)

    settings = tool.config["parser"]
    if args.post_types is not None:
        settings["post_types"] = args.post_types
    if args.no_attached_images:
        settings["save_attached_images"] = False
    if args.no_scraped_images:
        settings["save_scraped_images"] = False
    if args.fail_fast:
        settings["fail_fast"] = True

    tool.log_message("Starting WordPress export parse.")
    tool.log_message(f"Post types: {settings['post_types']}", level="DEBUG")

    try:
        run_pre_flight_checks(tool.config, args.input)
    except PreFlightCheckError as e:
        tool.log_message(str(e), level="ERROR")
        return 2

    try:
        posts = tool.parse_file(args.input)
    except WxrParseError as e:
        tool.log_message(f"Parse aborted: {e}", level="ERROR")
        return 1

    if not posts:
        tool.log_message("No posts found in the export.", level="WARNING")

    tool.write_outputs(posts)
    tool.log_message("Parse finished.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
