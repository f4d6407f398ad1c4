from __future__ import annotations

import re
from urllib.parse import unquote, urlparse

# Image files that are collected for download: gif, jpg, jpeg, png.
IMAGE_URL_PATTERN = re.compile(r"\.(?:gif|jpe?g|png)$", re.IGNORECASE)


def get_filename_from_url(url: str) -> str:
    """Return the percent-decoded last path segment of ``url``.

    Query strings and fragments are ignored, so
    ``https://ex.com/a/My%20Photo.jpg?w=300`` gives ``My Photo.jpg``.
    """
    path = urlparse(url or "").path
    return unquote(path.rstrip("/").split("/")[-1]) if path else ""
