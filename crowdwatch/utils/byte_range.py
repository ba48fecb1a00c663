# crowdwatch/utils/byte_range.py
"""
Helpers for serving uploaded videos with HTTP Range requests,
so the dashboard's <video> element can seek.
Only single ranges are supported ("bytes=start-end", "bytes=start-", "bytes=-suffix").
"""

import re
from typing import Iterator
from crowdwatch.errors import RangeNotSatisfiable

RANGE_PATTERN = re.compile(r"bytes=(\d*)-(\d*)")
CHUNK_SIZE = 64 * 1024


def parse_range(header: str, file_size: int) -> tuple[int, int]:
    """Return inclusive (start, end) byte offsets for a Range header."""
    match = RANGE_PATTERN.fullmatch(header.strip())
    if not match or match.group(1) == match.group(2) == "":
        raise RangeNotSatisfiable(f"Malformed range: {header!r}")

    first, last = match.groups()
    if first == "":
        # Suffix range: the last N bytes
        length = int(last)
        if length == 0:
            raise RangeNotSatisfiable(f"Empty suffix range: {header!r}")
        start, end = max(0, file_size - length), file_size - 1
    else:
        start = int(first)
        end = min(int(last), file_size - 1) if last else file_size - 1

    if start >= file_size or start > end:
        raise RangeNotSatisfiable(f"Range {header!r} not satisfiable for {file_size} bytes")
    return start, end


def iter_file_range(path: str, start: int, end: int, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    """Yield the bytes of path from start to end inclusive."""
    remaining = end - start + 1
    with open(path, "rb") as f:
        f.seek(start)
        while remaining > 0:
            chunk = f.read(min(chunk_size, remaining))
            if not chunk:
                break
            remaining -= len(chunk)
            yield chunk
