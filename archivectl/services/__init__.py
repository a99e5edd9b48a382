"""Service layer for archivectl operations.

Provides service classes that drive multipart uploads against the remote store.
"""

from __future__ import annotations

from .archives import ArchiveUploadService
from .base import BaseService

__all__ = [
    "BaseService",
    "ArchiveUploadService",
]
