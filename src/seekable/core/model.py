from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union


@dataclass(frozen=True, slots=True)
class ByteRangeSpec:
    """One `first-last` element of a Range header, unvalidated."""
    first: int | None
    last: int | None


@dataclass(frozen=True, slots=True)
class ResolvedRange:
    start: int                 # inclusive
    end: int                   # inclusive

    @property
    def length(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True, slots=True)
class ContentDescriptor:
    total: int
    mime_type: str | None = None


# --- outcomes: exactly one per request ---

@dataclass(frozen=True, slots=True)
class NoRange:
    pass


@dataclass(frozen=True, slots=True)
class Satisfied:
    ranges: Tuple[ResolvedRange, ...]

    def __post_init__(self):
        if len(self.ranges) != 1:
            raise ValueError(f"Satisfied holds exactly one range, got {len(self.ranges)}")


@dataclass(frozen=True, slots=True)
class Unsatisfiable:
    pass


@dataclass(frozen=True, slots=True)
class Malformed:
    pass


@dataclass(frozen=True, slots=True)
class Unsupported:
    count: int                 # number of specs in the header


RangeRequestOutcome = Union[NoRange, Satisfied, Unsatisfiable, Malformed, Unsupported]


@dataclass(slots=True)
class SeekableConfig:
    type: str | None = None

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> "SeekableConfig":
        """Build a config from an open-ended mapping, ignoring unknown keys."""
        if options is None:
            return cls()
        if isinstance(options, SeekableConfig):
            return options
        return cls(type=options.get("type"))


@dataclass(slots=True)
class SeekableResponse:
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""


class SeekableError(RuntimeError):
    """Base class for range delivery errors."""
    pass


class MalformedRangeError(SeekableError):
    """Raised when a Range header cannot be parsed."""
    pass


class UnsatisfiableRangeError(SeekableError):
    """Raised when a range spec lies outside the content."""
    pass


class UnsupportedRangeError(SeekableError):
    """Raised for multi-range requests, which are not served."""

    def __init__(self, count: int):
        super().__init__(f"Multiple ranges are not supported ({count} requested)")
        self.count = count


class ContentAccessError(SeekableError):
    """Raised when the content adapter cannot produce its length or a slice."""
    pass
