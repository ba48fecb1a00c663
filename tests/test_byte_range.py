"""Unit tests for HTTP Range parsing and ranged file reads."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from crowdwatch.errors import RangeNotSatisfiable
from crowdwatch.utils.byte_range import iter_file_range, parse_range


class TestParseRange:
    @pytest.mark.parametrize("header,expected", [
        ("bytes=0-99", (0, 99)),
        ("bytes=100-", (100, 999)),
        ("bytes=-100", (900, 999)),
        ("bytes=990-5000", (990, 999)),     # end clamped to the file
        ("bytes=-5000", (0, 999)),
        (" bytes=5-5 ", (5, 5)),
    ])
    def test_valid(self, header, expected):
        assert parse_range(header, 1000) == expected

    @pytest.mark.parametrize("header", [
        "bytes=1000-",
        "bytes=50-10",
        "bytes=-0",
        "bytes=-",
        "items=0-10",
        "bytes=0-10,20-30",
    ])
    def test_unsatisfiable(self, header):
        with pytest.raises(RangeNotSatisfiable):
            parse_range(header, 1000)


class TestIterFileRange:
    def test_reads_inclusive_slice(self, tmp_path):
        path = tmp_path / "clip.mp4"
        path.write_bytes(bytes(range(256)))
        data = b"".join(iter_file_range(str(path), 10, 19, chunk_size=3))
        assert data == bytes(range(10, 20))

    def test_stops_at_end_of_file(self, tmp_path):
        path = tmp_path / "clip.mp4"
        path.write_bytes(b"abc")
        assert b"".join(iter_file_range(str(path), 1, 10)) == b"bc"
