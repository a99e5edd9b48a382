"""Logging utilities for archivectl.

Library modules log through ``logging.getLogger(__name__)``; only the CLI
configures handlers. Each archive upload writes a timed start/finish pair
through ``log_context`` and one JSON audit record.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Generator, Optional

# =============================================================================
# Constants
# =============================================================================

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
AUDIT_LOGGER_NAME = "archivectl.audit"

# AWS SDK and transport loggers are chatty at INFO/DEBUG
NOISY_LOGGERS = ("boto3", "botocore", "urllib3", "s3transfer")


# =============================================================================
# Logger Setup
# =============================================================================


def setup_logging(
    level: int = logging.INFO,
    *,
    quiet: bool = False,
    verbose: bool = False,
) -> None:
    """Configure the root logger on stderr.

    Args:
        level: Base logging level.
        quiet: If True, only show errors.
        verbose: If True, show debug messages from archivectl.
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)


# =============================================================================
# Log Context
# =============================================================================


class LogContext:
    """Time one operation and log its start, completion or failure.

    Context fields are rendered as ``key=value`` pairs on the start line and
    repeated on the failure line so a failed upload can be identified from a
    single log record.
    """

    def __init__(
        self,
        operation: str,
        logger: Optional[logging.Logger] = None,
        **context: Any,
    ):
        self.operation = operation
        self.logger = logger or get_logger(__name__)
        self.context = context
        self.started: Optional[float] = None
        self.duration: float = 0.0

    @property
    def fields(self) -> str:
        return ", ".join(f"{k}={v}" for k, v in self.context.items())

    def __enter__(self) -> "LogContext":
        self.started = time.monotonic()
        self.logger.info("Starting %s (%s)", self.operation, self.fields)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.started is not None:
            self.duration = time.monotonic() - self.started

        if exc_type is None:
            self.logger.info("%s completed in %.2fs", self.operation, self.duration)
        else:
            self.logger.error(
                "%s failed after %.2fs (%s): %s",
                self.operation,
                self.duration,
                self.fields,
                exc_val,
            )


@contextmanager
def log_context(
    operation: str,
    logger: Optional[logging.Logger] = None,
    **context: Any,
) -> Generator[LogContext, None, None]:
    """Wrap a block in a LogContext.

    Exceptions raised inside the block are logged and re-raised.
    """
    with LogContext(operation, logger, **context) as ctx:
        yield ctx


# =============================================================================
# Audit Logger
# =============================================================================


class AuditLogger:
    """Writes one JSON record per archive operation to ``archivectl.audit``."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(AUDIT_LOGGER_NAME)

    def log_operation(
        self,
        operation: str,
        *,
        vault: Optional[str] = None,
        upload_id: Optional[str] = None,
        archive_id: Optional[str] = None,
        success: bool = True,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """Log an auditable operation.

        Failures are written at WARNING.

        Args:
            operation: Name of the operation.
            vault: Vault name.
            upload_id: Multipart upload ID, if a session was started.
            archive_id: Archive ID assigned by the store.
            success: Whether the operation succeeded.
            details: Additional fields (size, checksum, error).
        """
        record: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "operation": operation,
            "success": success,
            "vault": vault,
            "upload_id": upload_id,
            "archive_id": archive_id,
        }
        record = {k: v for k, v in record.items() if v is not None}
        if details:
            record["details"] = details

        level = logging.INFO if success else logging.WARNING
        self.logger.log(level, "AUDIT: %s", json.dumps(record, default=str))


def get_audit_logger() -> AuditLogger:
    """Get the audit logger instance."""
    return AuditLogger()
