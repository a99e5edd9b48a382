"""SHA-256 tree hashes for multipart archive uploads.

A tree hash is computed by hashing every 1 MiB chunk of the data with
SHA-256 and then repeatedly hashing adjacent pairs of digests until a single
digest remains. Part checksums and the whole-archive checksum use the same
combination rule, so the archive checksum can be built from the part
checksums alone as long as every part (except the last) is a power-of-two
number of MiB.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable, Sequence
from pathlib import Path

from archivectl.uploaders.common import PartReader
from archivectl.uploaders.constants import TREE_HASH_CHUNK_SIZE

# Checksum of an empty sequence: SHA-256 of zero bytes. Must stay stable.
EMPTY_TREE_HASH = hashlib.sha256(b"").digest()


def combine_tree_hashes(digests: Sequence[bytes]) -> bytes:
    """Reduce an ordered list of digests to a single tree hash.

    Consecutive digests are paired left to right and each pair is hashed into
    a new digest. An unpaired trailing digest is carried to the next round
    unchanged.

    Args:
        digests: Digests in ascending offset order.

    Returns:
        The combined digest. A single digest is returned as is; an empty list
        yields EMPTY_TREE_HASH.
    """
    if not digests:
        return EMPTY_TREE_HASH

    level = list(digests)
    while len(level) > 1:
        next_level: list[bytes] = []
        for i in range(0, len(level) - 1, 2):
            next_level.append(hashlib.sha256(level[i] + level[i + 1]).digest())
        if len(level) % 2:
            next_level.append(level[-1])
        level = next_level

    return level[0]


def chunk_hashes(data: bytes, chunk_size: int = TREE_HASH_CHUNK_SIZE) -> list[bytes]:
    """SHA-256 digests of each fixed-size chunk of data."""
    view = memoryview(data)
    return [
        hashlib.sha256(view[start : start + chunk_size]).digest()
        for start in range(0, len(data), chunk_size)
    ]


def tree_hash(data: bytes, chunk_size: int = TREE_HASH_CHUNK_SIZE) -> bytes:
    """Compute the tree hash of a part payload."""
    return combine_tree_hashes(chunk_hashes(data, chunk_size))


def file_tree_hash(path: Path, chunk_size: int = TREE_HASH_CHUNK_SIZE) -> tuple[bytes, int]:
    """Compute the tree hash of a whole file without loading it at once.

    Args:
        path: File to hash.
        chunk_size: Leaf size.

    Returns:
        Tuple of (digest, size in bytes).
    """
    digests: list[bytes] = []
    size = 0
    with path.open("rb") as fh:
        for part in PartReader(fh, chunk_size, name=str(path)):
            digests.append(hashlib.sha256(part.payload).digest())
            size += part.length
    return combine_tree_hashes(digests), size


def to_hex(digest: bytes) -> str:
    """Render a digest the way the remote store expects it."""
    return digest.hex()


def ordered_checksums(entries: Iterable[tuple[int, bytes]]) -> list[bytes]:
    """Sort (offset, digest) pairs by offset and return the digests."""
    return [digest for _, digest in sorted(entries, key=lambda item: item[0])]
