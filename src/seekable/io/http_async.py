"""Asynchronous remote content using httpx."""

import httpx
from typing import Optional

from .remote import MAX_RANGE_REQUESTS, RemoteResource, range_headers


# Global async client
_client: Optional[httpx.AsyncClient] = None


def _get_client() -> httpx.AsyncClient:
    """Get or create the global httpx AsyncClient."""
    global _client
    if _client is None:
        _client = httpx.AsyncClient(timeout=60.0)
    return _client


class HTTPAsyncContent(RemoteResource):
    """Asynchronous content of a remote HTTP resource.

    The HEAD request is sent on first use, or by `open_http_content_async`.
    """

    def __init__(self, url: str, client: Optional[httpx.AsyncClient] = None):
        super().__init__(url)
        self._client = client
        self._initialized = False

    async def _send(self, method: str, headers=None) -> httpx.Response:
        self.requests_made += 1
        client = self._client or _get_client()
        try:
            return await client.request(method, self.url, headers=headers)
        except httpx.HTTPError as e:
            raise IOError(f"{method} {self.url} failed: {e}") from e

    async def _ensure_initialized(self):
        if self._initialized:
            return
        response = await self._send('HEAD')
        self.learn(response.status_code, response.headers)
        self._initialized = True

    async def length(self) -> int:
        await self._ensure_initialized()
        return self.known_length()

    async def slice(self, start: int, end: int) -> bytes:
        await self._ensure_initialized()
        cached = self.cached_slice(start, end)
        if cached is not None:
            return cached

        if not self.accept_ranges:
            response = await self._send('GET')
            return self.accept_full(response.status_code, response.content, start, end)

        data = b''
        for _ in range(MAX_RANGE_REQUESTS):
            offset = start + len(data)
            response = await self._send('GET', headers=range_headers(offset, end))
            data += self.accept_part(response.status_code, response.headers, response.content, offset, end)
            if len(data) == end - start + 1:
                break
        return self.check_complete(data, start, end)

    async def __aenter__(self):
        await self._ensure_initialized()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        # Client is shared, don't close it here
        pass


async def open_http_content_async(url: str) -> HTTPAsyncContent:
    """Create asynchronous remote content."""
    content = HTTPAsyncContent(url)
    await content._ensure_initialized()
    return content


async def close_global_client():
    """Close the global httpx client. Call this at application shutdown."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
