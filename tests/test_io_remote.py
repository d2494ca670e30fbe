"""Tests for remote range bookkeeping."""

import pytest

from seekable.io.base import RangeNotSupportedError, RANGE_FALLBACK_MAX
from seekable.io.remote import RemoteResource, parse_content_range, range_headers


def _resource(length=1000, accept_ranges="bytes") -> RemoteResource:
    resource = RemoteResource("http://example.test/blob")
    resource.learn(200, {"content-length": str(length), "accept-ranges": accept_ranges})
    return resource


class TestContentRange:
    """Test Content-Range parsing."""

    def test_parse(self):
        """Test well-formed values."""
        assert parse_content_range("bytes 0-9/1000") == (0, 9)
        assert parse_content_range("bytes 10-19/*") == (10, 19)

    @pytest.mark.parametrize("value", [None, "", "bytes */1000", "items 0-9/10", "bytes 0-/10"])
    def test_unparseable(self, value):
        """Test values that name no range."""
        assert parse_content_range(value) is None

    def test_range_headers(self):
        """Test the request header for a range."""
        assert range_headers(5, 9) == {"Range": "bytes=5-9"}


class TestRemoteResource:
    """Test validation of upstream answers."""

    def test_learn(self):
        """Test size and range support from HEAD."""
        resource = _resource()
        assert resource.known_length() == 1000
        assert resource.accept_ranges is True

    def test_learn_failure(self):
        """Test an error status on HEAD."""
        with pytest.raises(IOError, match="404"):
            RemoteResource("http://example.test/blob").learn(404, {})

    def test_missing_length(self):
        """Test a HEAD without Content-Length."""
        resource = RemoteResource("http://example.test/blob")
        resource.learn(200, {})
        with pytest.raises(IOError):
            resource.known_length()

    def test_accept_part(self):
        """Test a correct 206 answer."""
        resource = _resource()
        data = resource.accept_part(206, {"content-range": "bytes 10-14/1000"}, b"abcde", 10, 14)
        assert data == b"abcde"
        assert resource.bytes_fetched == 5

    def test_short_part_is_returned(self):
        """Test a short 206 that starts in the right place."""
        resource = _resource()
        assert resource.accept_part(206, {"content-range": "bytes 10-11/1000"}, b"ab", 10, 14) == b"ab"

    @pytest.mark.parametrize("headers, body", [
        ({"content-range": "bytes 0-4/1000"}, b"abcde"),      # wrong start
        ({}, b"abcde"),                                       # no Content-Range
        ({"content-range": "bytes 10-14/1000"}, b"abc"),      # body shorter than its header
        ({"content-range": "bytes 10-19/1000"}, b"a" * 10),   # longer than asked
        ({"content-range": "bytes 10-14/1000"}, b""),         # empty
    ])
    def test_bad_part(self, headers, body):
        """Test 206 answers that do not match the request."""
        with pytest.raises(IOError):
            _resource().accept_part(206, headers, body, 10, 14)

    def test_error_status(self):
        """Test a non-206 failure."""
        with pytest.raises(IOError, match="503"):
            _resource().accept_part(503, {}, b"", 10, 14)

    def test_full_answer_to_range(self):
        """Test a 200 answer to a Range request is kept whole."""
        resource = _resource(length=10)
        assert resource.accept_part(200, {}, b"0123456789", 2, 4) == b"234"
        assert resource.cached_slice(5, 9) == b"56789"

    def test_full_answer_of_wrong_size(self):
        """Test a whole-resource answer must match the HEAD size."""
        with pytest.raises(IOError):
            _resource(length=10).accept_full(200, b"01234", 0, 4)

    def test_too_large_without_ranges(self):
        """Test a big resource on a server without range support."""
        resource = _resource(length=RANGE_FALLBACK_MAX, accept_ranges="none")
        with pytest.raises(RangeNotSupportedError):
            resource.cached_slice(0, 9)

    def test_check_complete(self):
        """Test an incomplete fill is reported."""
        with pytest.raises(IOError, match="Got 2 of 5 bytes"):
            _resource().check_complete(b"ab", 10, 14)
