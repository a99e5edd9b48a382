"""Archive upload service.

Drives one multipart upload session end to end:

    IDLE -> SESSION_INITIATED -> PARTS_UPLOADING -> CHECKSUM_AGGREGATED
         -> SESSION_COMPLETED

Any step may end in FAILED. The service never retries a failed session and
never aborts an orphaned remote session; it raises and leaves that decision
to the caller.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from archivectl.core.exceptions import (
    ArchiveCtlError,
    ConsistencyError,
    FinalizationError,
    PartUploadError,
    SessionInitiationError,
    SourceReadError,
)
from archivectl.core.logging import get_audit_logger, log_context
from archivectl.core.validation import validate_part_size, validate_workers
from archivectl.models.archive import SessionState, UploadSession
from archivectl.models.progress import OperationPhase, UploadProgress, UploadSummary
from archivectl.uploaders.common import read_parts
from archivectl.uploaders.constants import DEFAULT_PART_SIZE, DEFAULT_UPLOAD_WORKERS
from archivectl.uploaders.parallel import UploadTask, run_upload_tasks
from archivectl.uploaders.treehash import combine_tree_hashes, ordered_checksums, to_hex

from .base import BaseService

if TYPE_CHECKING:
    from archivectl.core.connection import ConnectionProvider

logger = logging.getLogger(__name__)


class ArchiveUploadService(BaseService):
    """Service for multipart archive uploads."""

    def __init__(
        self,
        provider: "ConnectionProvider",
        *,
        part_size: int = DEFAULT_PART_SIZE,
        workers: int = DEFAULT_UPLOAD_WORKERS,
    ) -> None:
        super().__init__(provider)
        self.part_size = validate_part_size(part_size)
        self.workers = validate_workers(workers)
        self.session: Optional[UploadSession] = None

    def upload_archive(
        self,
        source: Path,
        *,
        vault_name: str,
        description: str,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None,
    ) -> UploadSummary:
        """Upload a file as one archive.

        The connection provider is closed on every exit path.

        Args:
            source: File to upload.
            vault_name: Target vault (must already exist).
            description: Archive description.
            progress_callback: Optional callback for progress updates.

        Returns:
            UploadSummary for the completed archive.

        Raises:
            SourceReadError: If the source cannot be read.
            SessionInitiationError: If the store refuses to start a session.
            ConsistencyError: If the parts do not add up to the file size.
            PartUploadError: If any part failed; complete is not called.
            FinalizationError: If the store rejects the completed session.
        """
        report = self._reporter(progress_callback)
        start_time = time.time()
        audit = get_audit_logger()

        try:
            source_size = source.stat().st_size
        except OSError as e:
            self.provider.close()
            raise SourceReadError(str(source), 0, e) from e

        session = UploadSession(
            vault_name=vault_name,
            description=description,
            source=source,
            source_size=source_size,
            part_size=self.part_size,
        )
        self.session = session

        try:
            with log_context(
                "archive upload",
                logger,
                vault=vault_name,
                file=source,
                size=source_size,
            ):
                self._initiate(session, report)
                self._upload_parts(session, report)
                self._aggregate(session, report)
                self._complete(session, report)
        except ArchiveCtlError as e:
            session.fail(e)
            report(
                UploadProgress(
                    phase=OperationPhase.ERROR,
                    message=str(e),
                    success=False,
                    errors=[str(e)],
                )
            )
            audit.log_operation(
                "upload",
                vault=vault_name,
                upload_id=session.upload_id,
                success=False,
                details={"error": str(e), "state": session.state.value},
            )
            raise
        except Exception as e:
            session.fail(e)
            raise
        finally:
            self.provider.close()

        assert session.archive is not None
        assert session.upload_id is not None
        summary = UploadSummary(
            success=True,
            total=len(session.results),
            succeeded=len(session.results),
            failed=0,
            duration=time.time() - start_time,
            vault_name=vault_name,
            upload_id=session.upload_id,
            archive_id=session.archive.archive_id,
            checksum=to_hex(session.checksum or b""),
            archive_size=session.archive_size,
            part_size=self.part_size,
            location=session.archive.location or "",
        )
        audit.log_operation(
            "upload",
            vault=vault_name,
            upload_id=session.upload_id,
            archive_id=summary.archive_id,
            success=True,
            details={"size": summary.archive_size, "checksum": summary.checksum},
        )
        report(
            UploadProgress(
                phase=OperationPhase.COMPLETE,
                current=summary.total,
                total=summary.total,
                bytes_sent=summary.archive_size,
                total_bytes=summary.archive_size,
                message="Upload complete!",
            )
        )
        return summary

    # =========================================================================
    # Transitions
    # =========================================================================

    def _initiate(self, session: UploadSession, report: Callable[[UploadProgress], None]) -> None:
        """IDLE -> SESSION_INITIATED."""
        report(UploadProgress(phase=OperationPhase.PREPARING, message="Starting multipart upload..."))
        try:
            upload = self._call(
                "initiate_multipart_upload",
                session.vault_name,
                session.description,
                session.part_size,
            )
        except ArchiveCtlError as e:
            raise SessionInitiationError(session.vault_name, e) from e

        session.upload_id = upload.upload_id
        session.transition(SessionState.SESSION_INITIATED)
        logger.info("Initiated multipart upload %s", upload.upload_id)

    def _upload_parts(
        self,
        session: UploadSession,
        report: Callable[[UploadProgress], None],
    ) -> None:
        """SESSION_INITIATED -> PARTS_UPLOADING, then run every part."""
        assert session.upload_id is not None
        session.transition(SessionState.PARTS_UPLOADING)

        report(UploadProgress(phase=OperationPhase.READING, message=f"Reading {session.source}..."))
        parts = read_parts(session.source, session.part_size)

        total_length = sum(p.length for p in parts)
        if total_length != session.source_size:
            raise ConsistencyError(session.source_size, total_length, len(parts))

        tasks = [
            UploadTask(
                upload_id=session.upload_id,
                vault_name=session.vault_name,
                part=part,
                provider=self.provider,
            )
            for part in parts
        ]
        logger.info("Uploading %d parts with %d workers", len(tasks), self.workers)
        report(
            UploadProgress(
                phase=OperationPhase.UPLOADING,
                total=len(tasks),
                total_bytes=total_length,
                message="Starting uploads...",
            )
        )

        outcome = run_upload_tasks(tasks, workers=self.workers, progress_callback=report)
        session.results = outcome.results

        if not outcome.success:
            raise PartUploadError(
                succeeded=outcome.succeeded,
                failed=outcome.failed,
                errors=outcome.errors,
                upload_id=session.upload_id,
            )

    def _aggregate(self, session: UploadSession, report: Callable[[UploadProgress], None]) -> None:
        """PARTS_UPLOADING -> CHECKSUM_AGGREGATED."""
        report(UploadProgress(phase=OperationPhase.AGGREGATING, message="Computing tree hash..."))
        session.checksum = combine_tree_hashes(
            ordered_checksums((r.offset, r.checksum) for r in session.results)
        )
        session.transition(SessionState.CHECKSUM_AGGREGATED)
        logger.info("Archive tree hash: %s", to_hex(session.checksum))

    def _complete(self, session: UploadSession, report: Callable[[UploadProgress], None]) -> None:
        """CHECKSUM_AGGREGATED -> SESSION_COMPLETED."""
        assert session.upload_id is not None
        assert session.checksum is not None
        report(UploadProgress(phase=OperationPhase.COMPLETING, message="Completing upload..."))
        try:
            session.archive = self._call(
                "complete_multipart_upload",
                session.vault_name,
                session.upload_id,
                to_hex(session.checksum),
                session.archive_size,
            )
        except ArchiveCtlError as e:
            raise FinalizationError(session.upload_id, e) from e

        session.transition(SessionState.SESSION_COMPLETED)
        logger.info("Upload finished: archive %s", session.archive.archive_id)
