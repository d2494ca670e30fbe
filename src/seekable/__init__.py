"""seekable - Range-aware delivery of a fixed content blob."""

from .core.model import (                                             # re-export
    ByteRangeSpec, ResolvedRange, ContentDescriptor, RangeRequestOutcome,
    NoRange, Satisfied, Unsatisfiable, Malformed, Unsupported,
    SeekableConfig, SeekableResponse,
    SeekableError, MalformedRangeError, UnsatisfiableRangeError,
    UnsupportedRangeError, ContentAccessError,
)
from .core.parser import parse_range_header
from .core.resolver import resolve, resolve_spec, classify
from .core.assembler import assemble, assemble_async, respond, respond_async
from .io import open_content, open_content_async


__all__ = [
    "ByteRangeSpec", "ResolvedRange", "ContentDescriptor", "RangeRequestOutcome",
    "NoRange", "Satisfied", "Unsatisfiable", "Malformed", "Unsupported",
    "SeekableConfig", "SeekableResponse",
    "SeekableError", "MalformedRangeError", "UnsatisfiableRangeError",
    "UnsupportedRangeError", "ContentAccessError",
    "parse_range_header", "resolve", "resolve_spec", "classify",
    "assemble", "assemble_async", "respond", "respond_async",
    "open_content", "open_content_async",
]
