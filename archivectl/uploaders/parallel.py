"""Parallel part uploader for multipart archive uploads.

Each part becomes an UploadTask. Tasks run on a fixed-size thread pool; the
pool waits for every task before reporting, so a failing part never
abandons other parts mid-transmission.

This is an internal implementation detail. Use `ArchiveUploadService` from
`archivectl.services.archives` as the public API.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from archivectl.models.progress import OperationPhase, UploadProgress
from archivectl.uploaders.common import Part
from archivectl.uploaders.constants import DEFAULT_UPLOAD_WORKERS
from archivectl.uploaders.treehash import to_hex, tree_hash

if TYPE_CHECKING:
    from archivectl.core.connection import ConnectionProvider

logger = logging.getLogger(__name__)


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class PartResult:
    """Result of a single part upload."""

    index: int
    offset: int
    length: int
    checksum: bytes
    success: bool
    duration: float
    acknowledged: str = ""
    error: str = ""

    @property
    def checksum_hex(self) -> str:
        return to_hex(self.checksum)


@dataclass
class UploadBatchOutcome:
    """All part results of one pool run, in ascending offset order."""

    results: list[PartResult] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return len(self.results) - self.succeeded

    @property
    def success(self) -> bool:
        return self.failed == 0

    @property
    def errors(self) -> list[str]:
        return [
            f"Part {r.index} (offset {r.offset}, {r.length} bytes): {r.error}"
            for r in self.results
            if not r.success
        ]


# =============================================================================
# Upload Task
# =============================================================================


class UploadTask:
    """Upload of one part within a multipart session."""

    def __init__(
        self,
        *,
        upload_id: str,
        vault_name: str,
        part: Part,
        provider: ConnectionProvider,
    ) -> None:
        self.upload_id = upload_id
        self.vault_name = vault_name
        self.part = part
        self.provider = provider

    def run(self) -> PartResult:
        """Checksum and transmit the part.

        Failures are returned as a PartResult with success=False; they are
        never reported as success.
        """
        part = self.part
        start_time = time.time()
        checksum = tree_hash(part.payload)

        try:
            with self.provider.lease() as client:
                acknowledged = client.upload_part(
                    self.vault_name,
                    self.upload_id,
                    part.offset,
                    part.payload,
                    to_hex(checksum),
                )
            if acknowledged and acknowledged != to_hex(checksum):
                error = f"Checksum mismatch: sent {to_hex(checksum)}, store computed {acknowledged}"
                success = False
            else:
                error = ""
                success = True
        except Exception as e:
            acknowledged = ""
            error = str(e) or type(e).__name__
            success = False

        if success:
            logger.debug(
                "Uploaded part %d (%s) in %.2fs",
                part.index,
                part.content_range,
                time.time() - start_time,
            )
        else:
            logger.error(
                "Part %d failed (offset %d, length %d): %s",
                part.index,
                part.offset,
                part.length,
                error,
            )

        return PartResult(
            index=part.index,
            offset=part.offset,
            length=part.length,
            checksum=checksum,
            success=success,
            duration=time.time() - start_time,
            acknowledged=acknowledged,
            error=error,
        )


# =============================================================================
# Worker Pool
# =============================================================================


def run_upload_tasks(
    tasks: Sequence[UploadTask],
    *,
    workers: int = DEFAULT_UPLOAD_WORKERS,
    progress_callback: Callable[[UploadProgress], None] | None = None,
) -> UploadBatchOutcome:
    """Run upload tasks on a bounded thread pool and wait for all of them.

    Every task is attempted exactly once. There is no cancellation: when a
    task fails, the others still run to completion before the outcome is
    returned.

    Args:
        tasks: Tasks to run, one per part.
        workers: Maximum concurrent uploads.
        progress_callback: Optional callback invoked after each task.

    Returns:
        UploadBatchOutcome with results sorted by offset.
    """
    outcome = UploadBatchOutcome()
    if not tasks:
        return outcome

    total_bytes = sum(t.part.length for t in tasks)
    bytes_sent = 0
    pool_size = max(1, min(workers, len(tasks)))
    results: list[PartResult] = []

    with ThreadPoolExecutor(max_workers=pool_size, thread_name_prefix="upload") as executor:
        futures: dict[Future[PartResult], UploadTask] = {
            executor.submit(task.run): task for task in tasks
        }

        for future in as_completed(futures):
            result = future.result()
            results.append(result)
            if result.success:
                bytes_sent += result.length

            if progress_callback:
                progress_callback(
                    UploadProgress(
                        phase=OperationPhase.UPLOADING,
                        current=len(results),
                        total=len(tasks),
                        part_index=result.index,
                        offset=result.offset,
                        bytes_sent=bytes_sent,
                        total_bytes=total_bytes,
                        success=result.success,
                        message=f"Uploaded {len(results)}/{len(tasks)} parts",
                    )
                )

    outcome.results = sorted(results, key=lambda r: r.offset)
    if not outcome.success:
        logger.warning("Upload finished with %d failed parts", outcome.failed)
    return outcome
