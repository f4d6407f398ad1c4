import os

import requests

from wxr_parser.utils.errors import PreFlightCheckError
from wxr_parser.utils.http import is_url


def run_pre_flight_checks(config: dict, input_location: str, *, session=None):
    """
    Verifies that the input export and the parser configuration are usable.

    Args:
        config: The application configuration dictionary.
        input_location: Path or http(s) URL of the WXR export.
        session: Optional ``requests`` session used for the URL check.

    Raises:
        PreFlightCheckError: If any check fails.
    """
    print("[INFO] Running pre-flight checks...")

    post_types = config.get("parser", {}).get("post_types") or ""
    if not any(t.strip() for t in post_types.split(",")):
        raise PreFlightCheckError("No post types configured ('parser.post_types' is empty).")

    if not input_location:
        raise PreFlightCheckError("No input export given.")

    if is_url(input_location):
        timeout = config.get("http", {}).get("timeout", 30)
        http = session or requests
        try:
            response = http.head(input_location, timeout=timeout, allow_redirects=True)
            response.raise_for_status()
        except requests.HTTPError as e:
            raise PreFlightCheckError(f"Export URL returned an error: {e}")
        except requests.RequestException as e:
            raise PreFlightCheckError(f"Network error while checking export URL: {e}")
    else:
        if not os.path.isfile(input_location):
            raise PreFlightCheckError(f"Export file not found: {input_location}")
        if not os.access(input_location, os.R_OK):
            raise PreFlightCheckError(f"Export file is not readable: {input_location}")

    print("[INFO] Pre-flight checks passed successfully.")
