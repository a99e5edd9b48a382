"""Data models for archivectl.

Provides Pydantic models for remote store payloads, upload session state,
and operation progress tracking.
"""

from __future__ import annotations

from .archive import ArchiveCreated, MultipartUpload, SessionState, UploadSession
from .base import BaseModel
from .progress import (
    OperationPhase,
    OperationResult,
    Progress,
    UploadProgress,
    UploadSummary,
)

__all__ = [
    # Base
    "BaseModel",
    # Archive
    "MultipartUpload",
    "ArchiveCreated",
    "SessionState",
    "UploadSession",
    # Progress
    "OperationPhase",
    "Progress",
    "UploadProgress",
    "OperationResult",
    "UploadSummary",
]
