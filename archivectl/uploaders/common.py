"""Common utilities for uploader modules."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from archivectl.core.exceptions import SourceReadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Part:
    """A contiguous byte range of the source file, uploaded as one unit."""

    index: int
    offset: int
    payload: bytes

    @property
    def length(self) -> int:
        return len(self.payload)

    @property
    def end(self) -> int:
        """Inclusive offset of the last byte."""
        return self.offset + self.length - 1

    @property
    def content_range(self) -> str:
        return f"bytes {self.offset}-{self.end}/*"


class PartReader:
    """Split a seekable binary source into fixed-size parts.

    Each iteration starts again from the beginning of the source. Every part
    holds exactly ``part_size`` bytes except the last one, which may be
    shorter. A zero-byte read ends the sequence; an empty source yields no
    parts.
    """

    def __init__(self, source: BinaryIO, part_size: int, *, name: str = "<source>") -> None:
        if part_size <= 0:
            raise ValueError(f"Part size must be positive: {part_size}")
        self.source = source
        self.part_size = part_size
        self.name = name

    def __iter__(self) -> Iterator[Part]:
        try:
            self.source.seek(0)
        except OSError as e:
            raise SourceReadError(self.name, 0, e) from e

        index = 0
        offset = 0
        while True:
            payload = self._read_exact(offset)
            if not payload:
                break
            yield Part(index=index, offset=offset, payload=payload)
            index += 1
            offset += len(payload)

    def _read_exact(self, offset: int) -> bytes:
        """Read up to part_size bytes, looping over short reads."""
        chunks: list[bytes] = []
        remaining = self.part_size
        while remaining > 0:
            try:
                chunk = self.source.read(remaining)
            except OSError as e:
                raise SourceReadError(self.name, offset, e) from e
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)


def read_parts(path: Path, part_size: int) -> list[Part]:
    """Read a whole file into parts.

    Args:
        path: Source file.
        part_size: Bytes per part.

    Returns:
        Parts in file order.

    Raises:
        SourceReadError: If the file cannot be opened or read.
    """
    try:
        fh = path.open("rb")
    except OSError as e:
        raise SourceReadError(str(path), 0, e) from e

    with fh:
        parts = list(PartReader(fh, part_size, name=str(path)))

    logger.debug("Read %d parts from %s (part size %d)", len(parts), path, part_size)
    return parts
