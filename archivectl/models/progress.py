"""Progress models for tracking upload status.

Provides dataclasses for upload progress callbacks and operation summaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class OperationPhase(Enum):
    """Operation phases for progress tracking."""

    PREPARING = "preparing"
    READING = "reading"
    UPLOADING = "uploading"
    AGGREGATING = "aggregating"
    COMPLETING = "completing"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass
class Progress:
    """Base progress information."""

    phase: OperationPhase
    current: int = 0
    total: int = 0
    message: str = ""
    success: bool = True
    errors: List[str] = field(default_factory=list)


@dataclass
class UploadProgress(Progress):
    """Upload-specific progress."""

    part_index: Optional[int] = None
    offset: int = 0
    bytes_sent: int = 0
    total_bytes: int = 0


@dataclass
class OperationResult:
    """Generic operation result."""

    success: bool
    total: int
    succeeded: int
    failed: int
    duration: float
    errors: List[str] = field(default_factory=list)


@dataclass
class UploadSummary(OperationResult):
    """Archive upload summary."""

    vault_name: str = ""
    upload_id: str = ""
    archive_id: str = ""
    checksum: str = ""
    archive_size: int = 0
    part_size: int = 0
    location: str = ""

    @property
    def total_size_mb(self) -> float:
        return self.archive_size / (1024 * 1024)

    @property
    def throughput_mbps(self) -> float:
        """Calculate upload throughput in MB/s."""
        if self.duration == 0:
            return 0.0
        return self.total_size_mb / self.duration

    def to_dict(self) -> dict[str, object]:
        """Flatten for output."""
        return {
            "vault_name": self.vault_name,
            "archive_id": self.archive_id,
            "upload_id": self.upload_id,
            "checksum": self.checksum,
            "archive_size": self.archive_size,
            "part_size": self.part_size,
            "parts": self.total,
            "duration": round(self.duration, 2),
            "throughput_mbps": round(self.throughput_mbps, 2),
            "location": self.location,
        }
