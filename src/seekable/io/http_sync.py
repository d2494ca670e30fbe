"""Synchronous remote content using requests."""

import requests

from .remote import MAX_RANGE_REQUESTS, RemoteResource, range_headers


# Module-level session for connection pooling
_session = None


def _get_session():
    """Get or create the global requests session."""
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


class HTTPContent(RemoteResource):
    """Content of a remote HTTP resource, sliced with Range requests."""

    def __init__(self, url: str, session: requests.Session = None):
        super().__init__(url)
        self._session = session or _get_session()
        response = self._send('HEAD', timeout=30)
        self.learn(response.status_code, response.headers)

    def _send(self, method: str, headers=None, timeout=60) -> requests.Response:
        self.requests_made += 1
        try:
            return self._session.request(method, self.url, headers=headers, timeout=timeout)
        except requests.RequestException as e:
            raise IOError(f"{method} {self.url} failed: {e}") from e

    def length(self) -> int:
        return self.known_length()

    def slice(self, start: int, end: int) -> bytes:
        cached = self.cached_slice(start, end)
        if cached is not None:
            return cached

        if not self.accept_ranges:
            response = self._send('GET')
            return self.accept_full(response.status_code, response.content, start, end)

        data = b''
        for _ in range(MAX_RANGE_REQUESTS):
            offset = start + len(data)
            response = self._send('GET', headers=range_headers(offset, end), timeout=30)
            data += self.accept_part(response.status_code, response.headers, response.content, offset, end)
            if len(data) == end - start + 1:
                break
        return self.check_complete(data, start, end)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # Session is shared, don't close it here
        pass


def open_http_content(url: str) -> HTTPContent:
    """Create synchronous remote content."""
    return HTTPContent(url)
