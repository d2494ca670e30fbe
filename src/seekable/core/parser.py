"""Syntactic parsing of `Range: bytes=...` headers."""

from __future__ import annotations
import re
from typing import List

from .model import ByteRangeSpec, MalformedRangeError

UNIT_PREFIX = "bytes="

_SPEC_RE = re.compile(r"^([0-9]*)-([0-9]*)$")


def parse_range_spec(text: str) -> ByteRangeSpec:
    """Parse one `first-last`, `first-` or `-last` element."""
    m = _SPEC_RE.match(text.strip())
    if m is None:
        raise MalformedRangeError(f"Invalid range spec: {text!r}")
    first_str, last_str = m.groups()
    if not first_str and not last_str:
        raise MalformedRangeError("Range spec has neither first nor last byte")
    return ByteRangeSpec(
        first=int(first_str) if first_str else None,
        last=int(last_str) if last_str else None,
    )


def parse_range_header(header: str) -> List[ByteRangeSpec]:
    """Return the range specs of `header` in the order given.

    Does not look at the content length; a well-formed but unsatisfiable
    range parses fine. Raises MalformedRangeError otherwise.
    """
    if not header.startswith(UNIT_PREFIX):
        raise MalformedRangeError(f"Range header must start with {UNIT_PREFIX!r}")
    body = header[len(UNIT_PREFIX):]
    if not body.strip():
        raise MalformedRangeError("Range header names no ranges")
    return [parse_range_spec(part) for part in body.split(",")]
