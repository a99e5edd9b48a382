"""Multipart upload building blocks for archivectl.

This module provides:
- Part reader (fixed-size parts from a seekable source)
- SHA-256 tree hash computation and aggregation
- Parallel part uploader (bounded thread pool)

These are internal implementation details. Use `ArchiveUploadService` from
`archivectl.services.archives` as the public API.
"""

from archivectl.uploaders.common import Part, PartReader, read_parts
from archivectl.uploaders.constants import (
    DEFAULT_CLIENT_LIFE,
    DEFAULT_PART_SIZE,
    DEFAULT_UPLOAD_WORKERS,
    MIB,
    TREE_HASH_CHUNK_SIZE,
)
from archivectl.uploaders.parallel import (
    PartResult,
    UploadBatchOutcome,
    UploadTask,
    run_upload_tasks,
)
from archivectl.uploaders.treehash import (
    EMPTY_TREE_HASH,
    combine_tree_hashes,
    file_tree_hash,
    tree_hash,
)

__all__ = [
    # Constants
    "DEFAULT_CLIENT_LIFE",
    "DEFAULT_PART_SIZE",
    "DEFAULT_UPLOAD_WORKERS",
    "MIB",
    "TREE_HASH_CHUNK_SIZE",
    # Part reader
    "Part",
    "PartReader",
    "read_parts",
    # Tree hash
    "EMPTY_TREE_HASH",
    "combine_tree_hashes",
    "file_tree_hash",
    "tree_hash",
    # Parallel uploader
    "PartResult",
    "UploadBatchOutcome",
    "UploadTask",
    "run_upload_tasks",
]
