"""Glacier client for multipart archive uploads.

Wraps a boto3 Glacier client and translates botocore failures into the
archivectl exception hierarchy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    NoCredentialsError,
    ProfileNotFound,
)

from archivectl.core.exceptions import (
    ConfigurationError,
    NetworkError,
    RemoteStoreError,
)
from archivectl.core.validation import validate_endpoint
from archivectl.models.archive import ArchiveCreated, MultipartUpload
from archivectl.uploaders.constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_RETRIES,
    DEFAULT_READ_TIMEOUT,
)

logger = logging.getLogger(__name__)

# Glacier uses "-" for the account that owns the credentials
DEFAULT_ACCOUNT_ID = "-"


# =============================================================================
# GlacierClient
# =============================================================================


@dataclass
class GlacierClient:
    """Multipart upload operations against one Glacier endpoint."""

    endpoint: str
    region: str
    aws_profile: str | None = None
    max_retries: int = DEFAULT_MAX_RETRIES
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT
    read_timeout: int = DEFAULT_READ_TIMEOUT
    account_id: str = DEFAULT_ACCOUNT_ID
    boto_client: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Normalize the endpoint and build the boto3 client."""
        self.endpoint = validate_endpoint(self.endpoint)
        if self.boto_client is None:
            self.boto_client = self._build_client()

    # =========================================================================
    # Client Management
    # =========================================================================

    def _build_client(self) -> Any:
        """Create a boto3 Glacier client.

        boto3 clients are thread-safe; sessions are not, so every client gets
        its own session.
        """
        try:
            session = boto3.session.Session(profile_name=self.aws_profile)
        except ProfileNotFound as e:
            raise ConfigurationError(
                f"AWS profile not found: {self.aws_profile}",
                field="aws_profile",
                value=self.aws_profile,
            ) from e

        config = BotoConfig(
            region_name=self.region,
            retries={"max_attempts": self.max_retries, "mode": "standard"},
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
        )
        logger.debug("Creating Glacier client for %s (%s)", self.endpoint, self.region)
        return session.client(
            "glacier",
            endpoint_url=self.endpoint,
            region_name=self.region,
            config=config,
        )

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        if self.boto_client is not None:
            close = getattr(self.boto_client, "close", None)
            if close is not None:
                close()
            self.boto_client = None

    def __enter__(self) -> GlacierClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # =========================================================================
    # Requests
    # =========================================================================

    def _call(self, operation: str, **params: Any) -> dict[str, Any]:
        """Invoke a Glacier operation and translate failures.

        Raises:
            RemoteStoreError: If the store rejects the request.
            NetworkError: On transport failures.
            ConfigurationError: If no credentials are available.
        """
        if self.boto_client is None:
            raise NetworkError(self.endpoint, "client is closed")

        method = getattr(self.boto_client, operation)
        try:
            return method(accountId=self.account_id, **params)
        except ClientError as e:
            error = e.response.get("Error", {})
            status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
            raise RemoteStoreError(
                operation,
                error.get("Message") or str(e),
                code=error.get("Code"),
                status=status,
            ) from e
        except NoCredentialsError as e:
            raise ConfigurationError(
                "No AWS credentials found. Configure a profile or set AWS_* variables."
            ) from e
        except BotoCoreError as e:
            raise NetworkError(self.endpoint, str(e)) from e

    def initiate_multipart_upload(
        self,
        vault_name: str,
        description: str,
        part_size: int,
    ) -> MultipartUpload:
        """Start a multipart upload session.

        Args:
            vault_name: Target vault; must already exist.
            description: Archive description stored with the archive.
            part_size: Bytes per part (all parts but the last).

        Returns:
            The new session handle.
        """
        resp = self._call(
            "initiate_multipart_upload",
            vaultName=vault_name,
            archiveDescription=description,
            partSize=str(part_size),
        )
        return MultipartUpload.model_validate(resp)

    def upload_part(
        self,
        vault_name: str,
        upload_id: str,
        offset: int,
        payload: bytes,
        checksum: str,
    ) -> str:
        """Upload one part.

        Re-sending the same byte range overwrites the earlier copy.

        Args:
            vault_name: Target vault.
            upload_id: Session handle.
            offset: Byte offset of the part in the archive.
            payload: Part bytes.
            checksum: Hex tree hash of the payload.

        Returns:
            The checksum acknowledged by the store.
        """
        end = offset + len(payload) - 1
        resp = self._call(
            "upload_multipart_part",
            vaultName=vault_name,
            uploadId=upload_id,
            checksum=checksum,
            range=f"bytes {offset}-{end}/*",
            body=payload,
        )
        return str(resp.get("checksum", ""))

    def complete_multipart_upload(
        self,
        vault_name: str,
        upload_id: str,
        checksum: str,
        archive_size: int,
    ) -> ArchiveCreated:
        """Finish a multipart upload.

        The store verifies the tree hash and size independently and rejects
        the session on mismatch.
        """
        resp = self._call(
            "complete_multipart_upload",
            vaultName=vault_name,
            uploadId=upload_id,
            archiveSize=str(archive_size),
            checksum=checksum,
        )
        return ArchiveCreated.model_validate(resp)
