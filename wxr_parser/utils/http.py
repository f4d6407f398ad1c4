"""
HTTP helpers for reading exports published at a URL.

A generic retry wrapper handles transient network errors and server-side
rate limiting responses (429 or 5xx).
"""

from __future__ import annotations

import time
from typing import Callable

import requests

RETRY_STATUSES = (429, 500, 502, 503, 504)


def with_retries(
    fn: Callable[[], requests.Response],
    *,
    max_attempts: int = 4,
    base_delay: float = 0.7,
    sleep_fn: Callable[[float], None] = time.sleep,
) -> requests.Response:
    """
    Execute a function returning a ``requests.Response``, retrying on
    transient HTTP errors.  Retries are attempted on status codes 429
    (too many requests) and 5xx server errors.  Backoff is exponential.

    :param fn: A zero-argument callable that performs the HTTP request.
    :param max_attempts: Maximum number of attempts before giving up.
    :param base_delay: Base delay in seconds for exponential backoff.
    :param sleep_fn: Called with the number of seconds to wait.
    :return: The successful ``requests.Response``.
    :raises requests.HTTPError: if all attempts fail.
    """
    attempt = 0
    while True:
        try:
            resp = fn()
            resp.raise_for_status()
            return resp
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status not in RETRY_STATUSES or attempt >= max_attempts - 1:
                raise
            # Use Retry-After header if provided, otherwise exponential backoff
            retry_after = e.response.headers.get("Retry-After")
            if retry_after and retry_after.isdigit():
                wait = float(retry_after)
            else:
                wait = base_delay * (2 ** attempt)
            sleep_fn(wait)
            attempt += 1
        except requests.RequestException:
            if attempt >= max_attempts - 1:
                raise
            sleep_fn(base_delay * (2 ** attempt))
            attempt += 1


def is_url(location: str) -> bool:
    return location.lower().startswith(("http://", "https://"))


def fetch_bytes(url: str, *, timeout: float = 30, session: requests.Session | None = None) -> bytes:
    """Download ``url`` and return the raw body."""
    http = session or requests

    def do_request() -> requests.Response:
        return http.get(url, timeout=timeout)

    return with_retries(do_request).content
