"""Tests for archivectl.uploaders.common."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Callable

import pytest

from archivectl.core.exceptions import SourceReadError
from archivectl.uploaders.common import Part, PartReader, read_parts
from archivectl.uploaders.constants import MIB


class ShortReadStream(io.BytesIO):
    """BytesIO that never returns more than a few bytes per read."""

    def read(self, size: int = -1) -> bytes:  # type: ignore[override]
        if size is None or size < 0 or size > 7:
            size = 7
        return super().read(size)


class FailingStream(io.BytesIO):
    """BytesIO that raises after the first read."""

    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.reads = 0

    def read(self, size: int = -1) -> bytes:  # type: ignore[override]
        self.reads += 1
        if self.reads > 1:
            raise OSError("device not ready")
        return super().read(size)


# =============================================================================
# Part Tests
# =============================================================================


class TestPart:
    """Tests for Part."""

    def test_range(self):
        part = Part(index=1, offset=1048576, payload=b"x" * 100)

        assert part.length == 100
        assert part.end == 1048675
        assert part.content_range == "bytes 1048576-1048675/*"


# =============================================================================
# PartReader Tests
# =============================================================================


class TestPartReader:
    """Tests for PartReader."""

    @pytest.mark.parametrize(
        "size,part_size",
        [(1, 4), (4, 4), (5, 4), (17, 4), (100, 33), (99, 33)],
    )
    def test_part_count_and_lengths(self, size: int, part_size: int):
        data = bytes(i % 256 for i in range(size))

        parts = list(PartReader(io.BytesIO(data), part_size))

        assert len(parts) == -(-size // part_size)
        assert all(p.length == part_size for p in parts[:-1])
        assert 0 < parts[-1].length <= part_size
        assert sum(p.length for p in parts) == size
        assert b"".join(p.payload for p in parts) == data

    def test_offsets_and_indexes(self):
        parts = list(PartReader(io.BytesIO(b"abcdefghij"), 4))

        assert [p.index for p in parts] == [0, 1, 2]
        assert [p.offset for p in parts] == [0, 4, 8]
        assert [p.payload for p in parts] == [b"abcd", b"efgh", b"ij"]

    def test_empty_source_yields_nothing(self):
        assert list(PartReader(io.BytesIO(b""), 4)) == []

    def test_restartable(self):
        reader = PartReader(io.BytesIO(b"abcdefghij"), 3)

        first = list(reader)
        second = list(reader)

        assert first == second
        assert len(first) == 4

    def test_short_reads_are_filled(self):
        data = bytes(range(100))

        parts = list(PartReader(ShortReadStream(data), 32))

        assert [p.length for p in parts] == [32, 32, 32, 4]
        assert b"".join(p.payload for p in parts) == data

    def test_read_error_raises_source_read_error(self):
        reader = PartReader(FailingStream(b"abcdefgh"), 4, name="broken.bin")

        with pytest.raises(SourceReadError) as exc_info:
            list(reader)

        assert exc_info.value.path == "broken.bin"
        assert exc_info.value.offset == 4
        assert isinstance(exc_info.value.cause, OSError)

    def test_invalid_part_size(self):
        with pytest.raises(ValueError):
            PartReader(io.BytesIO(b"abc"), 0)


# =============================================================================
# read_parts Tests
# =============================================================================


class TestReadParts:
    """Tests for read_parts."""

    def test_reads_file(self, make_file: Callable[..., Path]):
        path = make_file(2_500_000)

        parts = read_parts(path, MIB)

        assert [p.length for p in parts] == [1048576, 1048576, 402848]
        assert [p.offset for p in parts] == [0, 1048576, 2097152]
        assert b"".join(p.payload for p in parts) == path.read_bytes()

    def test_exact_multiple(self, make_file: Callable[..., Path]):
        path = make_file(2 * MIB)

        parts = read_parts(path, MIB)

        assert [p.length for p in parts] == [MIB, MIB]

    def test_missing_file(self, temp_dir: Path):
        with pytest.raises(SourceReadError) as exc_info:
            read_parts(temp_dir / "missing.bin", MIB)

        assert exc_info.value.offset == 0
