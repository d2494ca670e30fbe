"""Transport-independent bookkeeping for remote content.

`RemoteResource` holds what a HEAD request taught us about a URL and
validates each answer to a Range request. The requests and httpx adapters
only move bytes; every decision about those bytes is made here.
"""

import re
from typing import Mapping, Optional

from .base import RangeNotSupportedError, RANGE_FALLBACK_MAX, check_bounds

# first request plus one continuation of a short 206
MAX_RANGE_REQUESTS = 2

_CONTENT_RANGE_RE = re.compile(r"^bytes ([0-9]+)-([0-9]+)/([0-9]+|\*)$")


def range_headers(start: int, end: int) -> dict:
    return {'Range': f'bytes={start}-{end}'}


def parse_content_range(value: Optional[str]) -> Optional[tuple]:
    """Return (start, end) from a `bytes start-end/total` header, or None."""
    m = _CONTENT_RANGE_RE.match((value or '').strip())
    if m is None:
        return None
    return int(m.group(1)), int(m.group(2))


class RemoteResource:
    """State shared by the sync and async HTTP content adapters."""

    def __init__(self, url: str):
        self.url = url
        self.bytes_fetched = 0
        self.requests_made = 0
        self.content_length: Optional[int] = None
        self.accept_ranges = False
        self._full_content: Optional[bytes] = None

    def learn(self, status_code: int, headers: Mapping[str, str]) -> None:
        """Record size and range support from a HEAD answer."""
        if status_code >= 400:
            raise IOError(f"HEAD {self.url} failed with status {status_code}")
        content_length = headers.get('content-length')
        if content_length:
            self.content_length = int(content_length)
        self.accept_ranges = headers.get('accept-ranges', '').lower() == 'bytes'

    def known_length(self) -> int:
        if self.content_length is None:
            raise IOError(f"Server did not report a Content-Length for {self.url}")
        return self.content_length

    def cached_slice(self, start: int, end: int) -> Optional[bytes]:
        """Check bounds; return the slice if no request is needed, else None.

        Raises RangeNotSupportedError when the server ignores ranges and the
        resource is too large to download whole.
        """
        check_bounds(start, end, self.known_length())
        if self._full_content is not None:
            return self._full_content[start:end + 1]
        if not self.accept_ranges and self.content_length >= RANGE_FALLBACK_MAX:
            raise RangeNotSupportedError(f"{self.url} doesn't support ranges and is too large")
        return None

    def accept_full(self, status_code: int, body: bytes, start: int, end: int) -> bytes:
        """Keep a whole-resource answer and return bytes `start`..`end` of it."""
        if status_code >= 400:
            raise IOError(f"GET {self.url} failed with status {status_code}")
        if self.known_length() >= RANGE_FALLBACK_MAX:
            raise RangeNotSupportedError(f"{self.url} doesn't support ranges and is too large")
        if len(body) != self.content_length:
            raise IOError(f"GET {self.url} returned {len(body)} bytes, expected {self.content_length}")
        self._full_content = body
        self.bytes_fetched += len(body)
        return body[start:end + 1]

    def accept_part(self, status_code: int, headers: Mapping[str, str], body: bytes,
                    start: int, end: int) -> bytes:
        """Validate the answer to `Range: bytes=start-end` and return its bytes.

        A 206 may be shorter than asked but must begin at `start`.
        """
        if status_code == 200:
            # server ignored the Range header and sent everything
            return self.accept_full(status_code, body, start, end)
        if status_code != 206:
            raise IOError(f"Range request to {self.url} failed with status {status_code}")

        returned = parse_content_range(headers.get('content-range'))
        if returned is None or returned[0] != start:
            raise IOError(f"Range request to {self.url} for bytes {start}-{end} "
                          f"answered with Content-Range {headers.get('content-range')!r}")
        if not body or len(body) > end - start + 1 or len(body) != returned[1] - returned[0] + 1:
            raise IOError(f"Range request to {self.url} for bytes {start}-{end} "
                          f"returned {len(body)} bytes")
        self.bytes_fetched += len(body)
        return body

    def check_complete(self, data: bytes, start: int, end: int) -> bytes:
        if len(data) != end - start + 1:
            raise IOError(f"Got {len(data)} of {end - start + 1} bytes for {start}-{end} "
                          f"from {self.url} after {MAX_RANGE_REQUESTS} requests")
        return data
