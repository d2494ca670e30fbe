"""Content layer for seekable - byte sources of known length."""

# Re-export these for import convenience
from .base import ContentAdapter, AsyncContentAdapter, RangeNotSupportedError
from .local import BufferContent, FileContent, AsyncLocalContent, open_file_content, open_file_content_async
from .http_sync import open_http_content
from .http_async import open_http_content_async


def _is_url(source) -> bool:
    return isinstance(source, str) and source.startswith(('http://', 'https://'))


def open_content(source):
    """Factory function to create the appropriate ContentAdapter for a source."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return BufferContent(source)

    if hasattr(source, 'read'):  # BinaryIO
        return open_file_content(source)

    if _is_url(source):
        return open_http_content(source)
    return open_file_content(source)


async def open_content_async(source):
    """Factory function to create the appropriate AsyncContentAdapter for a source."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return AsyncLocalContent(BufferContent(source))

    if hasattr(source, 'read'):  # BinaryIO
        return await open_file_content_async(source)

    if _is_url(source):
        return await open_http_content_async(source)
    return await open_file_content_async(source)


__all__ = [
    "ContentAdapter", "AsyncContentAdapter", "RangeNotSupportedError",
    "BufferContent", "FileContent", "AsyncLocalContent",
    "open_content", "open_content_async",
]
