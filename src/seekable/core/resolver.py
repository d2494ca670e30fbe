"""Resolve parsed range specs against a content length."""

from __future__ import annotations
import logging
from typing import Optional, Sequence

from .model import (
    ByteRangeSpec, ResolvedRange, RangeRequestOutcome,
    NoRange, Satisfied, Unsatisfiable, Malformed, Unsupported,
    MalformedRangeError, UnsatisfiableRangeError,
)
from .parser import parse_range_header

logger = logging.getLogger(__name__)


def resolve_spec(spec: ByteRangeSpec, total: int) -> ResolvedRange:
    """Turn one spec into an inclusive [start, end] within [0, total).

    `end` is clamped to the last byte and a suffix `start` to 0. Raises
    UnsatisfiableRangeError when nothing of the content is covered.
    """
    if spec.first is None and spec.last is None:
        raise MalformedRangeError("Range spec has neither first nor last byte")

    if spec.first is None:
        # suffix form: the last `spec.last` bytes
        if total == 0 or spec.last == 0:
            raise UnsatisfiableRangeError(f"Empty suffix range -{spec.last} of {total} bytes")
        return ResolvedRange(max(0, total - spec.last), total - 1)

    start = spec.first
    end = total - 1 if spec.last is None else min(spec.last, total - 1)
    if start >= total or start > end:
        raise UnsatisfiableRangeError(
            f"Range {spec.first}-{'' if spec.last is None else spec.last} "
            f"not satisfiable for {total} bytes"
        )
    return ResolvedRange(start, end)


def resolve(specs: Sequence[ByteRangeSpec], total: int) -> RangeRequestOutcome:
    """Classify a parsed Range header for content of `total` bytes."""
    if not specs:
        return Malformed()
    if len(specs) > 1:
        return Unsupported(count=len(specs))
    try:
        resolved = resolve_spec(specs[0], total)
    except UnsatisfiableRangeError as e:
        logger.debug("%s", e)
        return Unsatisfiable()
    except MalformedRangeError:
        return Malformed()
    return Satisfied((resolved,))


def classify(header: Optional[str], total: int) -> RangeRequestOutcome:
    """Parse and resolve a raw header value; `None` means no Range header."""
    if header is None:
        return NoRange()
    try:
        specs = parse_range_header(header)
    except MalformedRangeError as e:
        logger.debug("Malformed Range header %r: %s", header, e)
        return Malformed()
    outcome = resolve(specs, total)
    logger.debug("Range %r over %d bytes -> %r", header, total, outcome)
    return outcome
