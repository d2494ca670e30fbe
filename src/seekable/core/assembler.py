"""Turn a range outcome into status, headers and body."""

from __future__ import annotations
import logging
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from werkzeug.http import http_date

from .model import (
    ContentDescriptor, ResolvedRange, RangeRequestOutcome, SeekableConfig, SeekableResponse,
    NoRange, Satisfied, Unsatisfiable, Malformed, Unsupported,
    ContentAccessError, UnsupportedRangeError,
)
from .resolver import classify

logger = logging.getLogger(__name__)

ConfigLike = Union[SeekableConfig, Mapping[str, Any], None]
Timestamp = Union[datetime, int, float, None]


def _shape(outcome: RangeRequestOutcome, desc: ContentDescriptor,
           now: Timestamp) -> Tuple[int, Dict[str, str], Optional[ResolvedRange]]:
    """Return (status, headers, body range) for an outcome."""
    headers = {"Accept-Ranges": "bytes", "Date": http_date(now)}

    if isinstance(outcome, NoRange):
        headers["Content-Length"] = str(desc.total)
        if desc.mime_type:
            headers["Content-Type"] = desc.mime_type
        body = ResolvedRange(0, desc.total - 1) if desc.total else None
        return 200, headers, body

    if isinstance(outcome, Satisfied):
        (r,) = outcome.ranges
        headers["Content-Length"] = str(r.length)
        headers["Content-Range"] = f"bytes {r.start}-{r.end}/{desc.total}"
        if desc.mime_type:
            headers["Content-Type"] = desc.mime_type
        return 206, headers, r

    if isinstance(outcome, Unsatisfiable):
        headers["Content-Length"] = "0"
        headers["Content-Range"] = f"bytes */{desc.total}"
        return 416, headers, None

    if isinstance(outcome, Malformed):
        headers["Content-Length"] = "0"
        return 400, headers, None

    if isinstance(outcome, Unsupported):
        logger.warning("Rejecting multi-range request (%d ranges)", outcome.count)
        raise UnsupportedRangeError(outcome.count)

    raise TypeError(f"Unknown range outcome: {outcome!r}")


def _read_length(content) -> int:
    try:
        return content.length()
    except OSError as e:
        raise ContentAccessError(f"Cannot determine content length: {e}") from e


def _checked(data: bytes, r: ResolvedRange) -> bytes:
    if len(data) != r.length:
        raise ContentAccessError(f"Content returned {len(data)} bytes for {r.start}-{r.end}, expected {r.length}")
    return data


def _read_slice(content, r: ResolvedRange) -> bytes:
    try:
        data = content.slice(r.start, r.end)
    except OSError as e:
        raise ContentAccessError(f"Cannot read bytes {r.start}-{r.end}: {e}") from e
    return _checked(data, r)


def assemble(outcome: RangeRequestOutcome, content, config: ConfigLike = None, *,
             head: bool = False, total: int | None = None, now: Timestamp = None) -> SeekableResponse:
    """Build the response for `outcome` over a ContentAdapter.

    `total` is the length already observed for this request; when omitted
    it is read from `content` once. With `head=True` the headers are the
    same but the body is left empty and `content.slice` is never called.
    Raises UnsupportedRangeError and ContentAccessError for the host to handle.
    """
    cfg = SeekableConfig.from_mapping(config)
    if total is None and not isinstance(outcome, Unsupported):
        total = _read_length(content)
    status, headers, body_range = _shape(outcome, ContentDescriptor(total, cfg.type), now)
    if head or body_range is None:
        return SeekableResponse(status, headers, b"")
    return SeekableResponse(status, headers, _read_slice(content, body_range))


def respond(content, range_header: Optional[str], config: ConfigLike = None, *,
            head: bool = False, now: Timestamp = None) -> SeekableResponse:
    """Serve `content` for a request carrying `range_header` (None if absent)."""
    total = _read_length(content)
    outcome = classify(range_header, total)
    return assemble(outcome, content, config, head=head, total=total, now=now)


async def _read_length_async(content) -> int:
    try:
        return await content.length()
    except OSError as e:
        raise ContentAccessError(f"Cannot determine content length: {e}") from e


async def _read_slice_async(content, r: ResolvedRange) -> bytes:
    try:
        data = await content.slice(r.start, r.end)
    except OSError as e:
        raise ContentAccessError(f"Cannot read bytes {r.start}-{r.end}: {e}") from e
    return _checked(data, r)


async def assemble_async(outcome: RangeRequestOutcome, content, config: ConfigLike = None, *,
                         head: bool = False, total: int | None = None,
                         now: Timestamp = None) -> SeekableResponse:
    """Same as `assemble` over an AsyncContentAdapter."""
    cfg = SeekableConfig.from_mapping(config)
    if total is None and not isinstance(outcome, Unsupported):
        total = await _read_length_async(content)
    status, headers, body_range = _shape(outcome, ContentDescriptor(total, cfg.type), now)
    if head or body_range is None:
        return SeekableResponse(status, headers, b"")
    return SeekableResponse(status, headers, await _read_slice_async(content, body_range))


async def respond_async(content, range_header: Optional[str], config: ConfigLike = None, *,
                        head: bool = False, now: Timestamp = None) -> SeekableResponse:
    total = await _read_length_async(content)
    outcome = classify(range_header, total)
    return await assemble_async(outcome, content, config, head=head, total=total, now=now)
