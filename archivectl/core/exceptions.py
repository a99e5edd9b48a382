"""Exception hierarchy for archivectl.

Provides typed exceptions for different failure modes with clear error messages.
"""

from __future__ import annotations

from typing import Any


class ArchiveCtlError(Exception):
    """Base exception for all archivectl errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(ArchiveCtlError):
    """Error in configuration (missing, invalid, or malformed)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class ProfileNotFoundError(ConfigurationError):
    """Requested profile does not exist."""

    def __init__(self, profile: str):
        super().__init__(f"Profile not found: {profile}", field="profile", value=profile)
        self.profile = profile


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(ArchiveCtlError):
    """Input validation failed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class PathValidationError(ValidationError):
    """Path validation failed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid path: {path} - {reason}", field="path", value=path)
        self.path = path
        self.reason = reason


# =============================================================================
# Source Errors
# =============================================================================


class SourceReadError(ArchiveCtlError):
    """Reading the source file failed."""

    def __init__(self, path: str, offset: int, cause: Exception | None = None):
        msg = f"Failed to read {path} at offset {offset}"
        if cause:
            msg = f"{msg}: {cause}"
        super().__init__(msg, {"path": path, "offset": offset})
        self.path = path
        self.offset = offset
        self.cause = cause


class ConsistencyError(ArchiveCtlError):
    """Parts read from the source do not add up to the source size."""

    def __init__(self, expected_size: int, actual_size: int, part_count: int):
        super().__init__(
            f"File size is {expected_size} but sum of parts is {actual_size}",
            {"parts": part_count},
        )
        self.expected_size = expected_size
        self.actual_size = actual_size
        self.part_count = part_count


# =============================================================================
# Connection Errors
# =============================================================================


class ConnectionError(ArchiveCtlError):
    """Base class for connection-related errors."""

    def __init__(self, message: str, endpoint: str | None = None):
        details = {"endpoint": endpoint} if endpoint else {}
        super().__init__(message, details)
        self.endpoint = endpoint


class NetworkError(ConnectionError):
    """Network-level error (DNS, TCP, TLS, timeouts)."""

    def __init__(self, endpoint: str | None, cause: str | None = None):
        msg = f"Network error connecting to {endpoint or 'remote store'}"
        if cause:
            msg = f"{msg}: {cause}"
        super().__init__(msg, endpoint)
        self.cause = cause


# =============================================================================
# Remote Store Errors
# =============================================================================


class RemoteStoreError(ArchiveCtlError):
    """The remote store rejected a request."""

    def __init__(
        self,
        operation: str,
        message: str,
        code: str | None = None,
        status: int | None = None,
    ):
        details: dict[str, Any] = {"operation": operation}
        if code:
            details["code"] = code
        if status is not None:
            details["status"] = status
        super().__init__(message, details)
        self.operation = operation
        self.code = code
        self.status = status


class SessionInitiationError(RemoteStoreError):
    """Starting the multipart session failed; no parts were sent."""

    def __init__(self, vault_name: str, cause: Exception):
        code = getattr(cause, "code", None)
        status = getattr(cause, "status", None)
        super().__init__(
            "initiate",
            f"Could not start multipart upload in vault {vault_name}: {cause}",
            code=code,
            status=status,
        )
        self.vault_name = vault_name
        self.cause = cause


class FinalizationError(RemoteStoreError):
    """The remote store refused to complete the multipart session."""

    def __init__(self, upload_id: str, cause: Exception):
        code = getattr(cause, "code", None)
        status = getattr(cause, "status", None)
        super().__init__(
            "complete",
            f"Could not complete multipart upload {upload_id}: {cause}",
            code=code,
            status=status,
        )
        self.upload_id = upload_id
        self.cause = cause


# =============================================================================
# Operation Errors
# =============================================================================


class OperationError(ArchiveCtlError):
    """Error during an operation."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        full_details = {"operation": operation}
        if details:
            full_details.update(details)
        super().__init__(message, full_details)
        self.operation = operation


class PartUploadError(OperationError):
    """One or more parts failed to upload."""

    def __init__(
        self,
        succeeded: int,
        failed: int,
        errors: list[str],
        upload_id: str | None = None,
    ):
        details: dict[str, Any] = {"succeeded": succeeded, "failed": failed}
        if upload_id:
            details["upload_id"] = upload_id
        super().__init__(
            "upload",
            f"Some uploads have failed: {succeeded} succeeded, {failed} failed",
            details,
        )
        self.succeeded = succeeded
        self.failed = failed
        self.errors = errors
        self.upload_id = upload_id


class InvalidStateError(OperationError):
    """Illegal upload session state transition."""

    def __init__(self, current: str, target: str):
        super().__init__(
            "transition",
            f"Cannot move upload session from {current} to {target}",
        )
        self.current = current
        self.target = target
