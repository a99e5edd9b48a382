"""archivectl - A CLI for multipart archive uploads to Glacier vaults.

This package uploads large files as single archives:
- Split the file into fixed-size parts
- Upload parts in parallel with per-part SHA-256 tree hashes
- Combine part hashes into the archive tree hash and complete the upload
"""

__version__ = "0.1.0"

from archivectl.core.client import GlacierClient
from archivectl.core.config import Config, Profile
from archivectl.core.connection import ConnectionProvider, create_provider
from archivectl.core.exceptions import (
    ArchiveCtlError,
    ConfigurationError,
    ConnectionError,
    ConsistencyError,
    FinalizationError,
    NetworkError,
    PartUploadError,
    RemoteStoreError,
    SessionInitiationError,
    SourceReadError,
    ValidationError,
)
from archivectl.services.archives import ArchiveUploadService

__all__ = [
    "__version__",
    "GlacierClient",
    "ConnectionProvider",
    "create_provider",
    "ArchiveUploadService",
    "Config",
    "Profile",
    "ArchiveCtlError",
    "ConfigurationError",
    "ConnectionError",
    "ConsistencyError",
    "FinalizationError",
    "NetworkError",
    "PartUploadError",
    "RemoteStoreError",
    "SessionInitiationError",
    "SourceReadError",
    "ValidationError",
]
