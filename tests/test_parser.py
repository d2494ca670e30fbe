"""Tests for Range header parsing."""

import pytest

from seekable.core.model import ByteRangeSpec, MalformedRangeError
from seekable.core.parser import parse_range_header, parse_range_spec


class TestParseRangeHeader:
    """Test parsing of whole header values."""

    def test_closed_range(self):
        """Test first-last form."""
        assert parse_range_header("bytes=0-4") == [ByteRangeSpec(0, 4)]

    def test_open_ended_range(self):
        """Test first- form."""
        assert parse_range_header("bytes=27-") == [ByteRangeSpec(27, None)]

    def test_suffix_range(self):
        """Test -last form."""
        assert parse_range_header("bytes=-1") == [ByteRangeSpec(None, 1)]

    def test_order_is_preserved(self):
        """Test multiple specs keep their order."""
        specs = parse_range_header("bytes=10-14, 0-4,-3")
        assert specs == [ByteRangeSpec(10, 14), ByteRangeSpec(0, 4), ByteRangeSpec(None, 3)]

    def test_unsatisfiable_range_still_parses(self):
        """Test that parsing ignores content length."""
        assert parse_range_header("bytes=3-1") == [ByteRangeSpec(3, 1)]
        assert parse_range_header("bytes=50-") == [ByteRangeSpec(50, None)]
        assert parse_range_header("bytes=-0") == [ByteRangeSpec(None, 0)]

    @pytest.mark.parametrize("header", [
        "hello",
        "",
        "bytes",
        "items=0-4",
        "bytes 0-4",
        "bytes=",
        "bytes=   ",
        "bytes=-",
        "bytes=0-4,",
        "bytes=0-4,,5-6",
        "bytes=a-b",
        "bytes=+1-2",
        "bytes=1--2",
        "bytes=0-4-5",
        "bytes=1.5-2",
    ])
    def test_malformed(self, header):
        """Test headers that are not range requests at all."""
        with pytest.raises(MalformedRangeError):
            parse_range_header(header)


class TestParseRangeSpec:
    """Test parsing of a single spec."""

    def test_whitespace_is_tolerated(self):
        """Test surrounding whitespace is stripped."""
        assert parse_range_spec("  5-9 ") == ByteRangeSpec(5, 9)

    def test_leading_zeros(self):
        """Test digits with leading zeros."""
        assert parse_range_spec("007-010") == ByteRangeSpec(7, 10)

    def test_both_absent(self):
        """Test a spec without either endpoint."""
        with pytest.raises(MalformedRangeError):
            parse_range_spec("-")
