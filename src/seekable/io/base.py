"""Base protocols and shared types for the content layer."""

from typing import Protocol, runtime_checkable


class RangeNotSupportedError(IOError):
    """Raised when a remote server rejects Range and its size > RANGE_FALLBACK_MAX."""


RANGE_FALLBACK_MAX = 10 * 1024 * 1024  # 10 MB


@runtime_checkable
class ContentAdapter(Protocol):
    """Protocol for synchronous content sources."""

    def length(self) -> int:
        """Total size in bytes; stable for the duration of one request."""
        ...

    def slice(self, start: int, end: int) -> bytes:
        """Return bytes `start`..`end` inclusive, `0 <= start <= end < length()`.
        On failure → raise IOError.
        """
        ...


@runtime_checkable
class AsyncContentAdapter(Protocol):
    """Protocol for asynchronous content sources."""

    async def length(self) -> int:
        ...

    async def slice(self, start: int, end: int) -> bytes:
        """Return bytes `start`..`end` inclusive.
        On failure → raise IOError.
        """
        ...


def check_bounds(start: int, end: int, total: int) -> None:
    """Raise IOError unless `0 <= start <= end < total`."""
    if start < 0:
        raise IOError("Start offset cannot be negative")
    if end < start:
        raise IOError(f"End offset {end} is before start offset {start}")
    if end >= total:
        raise IOError(f"Not enough data: requested bytes {start}-{end}, "
                      f"but content only has {total} bytes")
