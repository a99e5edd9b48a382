"""Models for multipart archive upload sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import Field

from archivectl.core.exceptions import InvalidStateError

from .base import BaseModel

if TYPE_CHECKING:
    from archivectl.uploaders.parallel import PartResult


# =============================================================================
# Remote Store Payloads
# =============================================================================


class MultipartUpload(BaseModel):
    """Response to a multipart upload initiation."""

    upload_id: str = Field(..., description="Session handle")
    location: str | None = Field(None, description="Relative URI of the session")


class ArchiveCreated(BaseModel):
    """Response to a completed multipart upload."""

    archive_id: str = Field(..., description="Archive ID in the vault")
    checksum: str | None = Field(None, description="Tree hash computed by the store")
    location: str | None = Field(None, description="Relative URI of the archive")


# =============================================================================
# Session State
# =============================================================================


class SessionState(Enum):
    """Lifecycle of one multipart upload session."""

    IDLE = "idle"
    SESSION_INITIATED = "session_initiated"
    PARTS_UPLOADING = "parts_uploading"
    CHECKSUM_AGGREGATED = "checksum_aggregated"
    SESSION_COMPLETED = "session_completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.SESSION_COMPLETED, SessionState.FAILED)


ALLOWED_TRANSITIONS: dict[SessionState, set[SessionState]] = {
    SessionState.IDLE: {SessionState.SESSION_INITIATED, SessionState.FAILED},
    SessionState.SESSION_INITIATED: {SessionState.PARTS_UPLOADING, SessionState.FAILED},
    SessionState.PARTS_UPLOADING: {SessionState.CHECKSUM_AGGREGATED, SessionState.FAILED},
    SessionState.CHECKSUM_AGGREGATED: {SessionState.SESSION_COMPLETED, SessionState.FAILED},
    SessionState.SESSION_COMPLETED: set(),
    SessionState.FAILED: set(),
}


@dataclass
class UploadSession:
    """State of one multipart upload, owned by the orchestrator."""

    vault_name: str
    description: str
    source: Path
    source_size: int
    part_size: int
    upload_id: str | None = None
    state: SessionState = SessionState.IDLE
    results: list[PartResult] = field(default_factory=list)
    checksum: bytes | None = None
    archive: ArchiveCreated | None = None
    error: str = ""

    def transition(self, target: SessionState) -> None:
        """Move to the target state.

        Raises:
            InvalidStateError: If the transition is not allowed.
        """
        if target not in ALLOWED_TRANSITIONS[self.state]:
            raise InvalidStateError(self.state.value, target.value)
        self.state = target

    def fail(self, error: Exception) -> None:
        """Move to FAILED unless already terminal."""
        self.error = str(error)
        if not self.state.is_terminal:
            self.state = SessionState.FAILED

    @property
    def archive_size(self) -> int:
        return sum(r.length for r in self.results)
