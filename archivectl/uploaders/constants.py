"""Shared constants for uploader modules.

These defaults are conservative for broad compatibility. For large archives
on fast links, consider a bigger part size and more workers in the profile
(e.g., part_size: 67108864, upload_workers: 8).
"""

# =============================================================================
# Sizes
# =============================================================================

MIB = 1024 * 1024

# Tree hash leaf size; fixed by the remote protocol
TREE_HASH_CHUNK_SIZE = MIB

# Part size bounds: a power-of-two number of MiB between 1 MiB and 4 GiB
MIN_PART_SIZE = MIB
MAX_PART_SIZE = 4096 * MIB

# =============================================================================
# Upload Defaults (conservative)
# =============================================================================

DEFAULT_PART_SIZE = MIB

# Parallel workers for part uploads
DEFAULT_UPLOAD_WORKERS = 4
MAX_UPLOAD_WORKERS = 64

# Client acquisitions before the connection is recycled
DEFAULT_CLIENT_LIFE = 60

# botocore retry attempts per request (transport level)
DEFAULT_MAX_RETRIES = 3

# Timeouts in seconds
DEFAULT_CONNECT_TIMEOUT = 60
DEFAULT_READ_TIMEOUT = 300
