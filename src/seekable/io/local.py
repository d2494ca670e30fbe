"""In-memory and local file content, using mmap for files."""

import asyncio
import io
import mmap
from pathlib import Path
from typing import BinaryIO, Union

from .base import check_bounds


class BufferContent:
    """Content held in memory."""

    def __init__(self, data: Union[bytes, bytearray, memoryview, str]):
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data = bytes(data)

    def length(self) -> int:
        return len(self._data)

    def slice(self, start: int, end: int) -> bytes:
        check_bounds(start, end, len(self._data))
        return self._data[start:end + 1]


class FileContent:
    """Synchronous local file content using mmap.

    The file is mapped when the object is created, so one instance can be
    shared by request threads without further setup.
    """

    def __init__(self, source: Union[Path, str, BinaryIO]):
        self._file = None
        self._mmap = None
        self._data = None  # For in-memory sources and empty files
        self._should_close_file = False
        self._closed = False

        if hasattr(source, 'read'):
            # BinaryIO object
            self._file = source
            if isinstance(source, io.BytesIO):
                # For BytesIO, read all data upfront
                current_pos = source.tell()
                source.seek(0)
                self._data = source.read()
                source.seek(current_pos)
                return
        else:
            # Path or str
            self._file = open(source, 'rb')
            self._should_close_file = True

        try:
            self._map()
        except OSError:
            self.close()
            raise

    def _map(self):
        if not self._file.seekable():
            raise IOError("File is not seekable, cannot use mmap")
        self._file.seek(0, 2)  # Seek to end
        if self._file.tell() == 0:
            # mmap refuses empty files
            self._data = b''
            return
        try:
            self._mmap = mmap.mmap(self._file.fileno(), 0, access=mmap.ACCESS_READ)
        except (io.UnsupportedOperation, OSError):
            # Fallback for files that don't support fileno()
            self._file.seek(0)
            self._data = self._file.read()

    def _source(self):
        if self._closed:
            raise IOError("Content is closed")
        return self._mmap if self._mmap is not None else self._data

    def length(self) -> int:
        return len(self._source())

    def slice(self, start: int, end: int) -> bytes:
        source = self._source()
        check_bounds(start, end, len(source))
        return bytes(source[start:end + 1])

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close mmap and file if we opened it."""
        self._closed = True
        if self._mmap is not None:
            self._mmap.close()
            self._mmap = None
        if self._should_close_file and self._file is not None:
            self._file.close()
            self._file = None


class AsyncLocalContent:
    """Asynchronous wrapper running a sync adapter in a worker thread."""

    def __init__(self, sync_content):
        self._sync_content = sync_content

    async def length(self) -> int:
        return await asyncio.to_thread(self._sync_content.length)

    async def slice(self, start: int, end: int) -> bytes:
        return await asyncio.to_thread(self._sync_content.slice, start, end)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        close = getattr(self._sync_content, 'close', None)
        if close is not None:
            await asyncio.to_thread(close)


def open_file_content(source: Union[Path, str, BinaryIO]) -> FileContent:
    """Create synchronous local file content."""
    return FileContent(source)


async def open_file_content_async(source: Union[Path, str, BinaryIO]) -> AsyncLocalContent:
    """Create asynchronous local file content."""
    return AsyncLocalContent(FileContent(source))
