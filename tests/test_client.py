"""Tests for archivectl.core.client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import (
    ClientError,
    EndpointConnectionError,
    NoCredentialsError,
    ProfileNotFound,
)

from archivectl.core.client import GlacierClient
from archivectl.core.exceptions import ConfigurationError, NetworkError, RemoteStoreError
from archivectl.models.archive import ArchiveCreated, MultipartUpload


def _client(boto_client: MagicMock | None = None) -> GlacierClient:
    return GlacierClient(
        endpoint="glacier.eu-central-1.amazonaws.com",
        region="eu-central-1",
        boto_client=boto_client or MagicMock(),
    )


def _client_error(code: str, message: str, status: int) -> ClientError:
    return ClientError(
        {
            "Error": {"Code": code, "Message": message},
            "ResponseMetadata": {"HTTPStatusCode": status},
        },
        "InitiateMultipartUpload",
    )


# =============================================================================
# Construction Tests
# =============================================================================


class TestGlacierClientInit:
    """Tests for GlacierClient construction."""

    def test_endpoint_normalized(self):
        client = _client()

        assert client.endpoint == "https://glacier.eu-central-1.amazonaws.com"

    def test_builds_boto_client(self):
        with patch("archivectl.core.client.boto3.session.Session") as mock_session:
            client = GlacierClient(
                endpoint="https://glacier.test/",
                region="eu-central-1",
                aws_profile="backup",
                max_retries=5,
            )

        mock_session.assert_called_once_with(profile_name="backup")
        args, kwargs = mock_session.return_value.client.call_args
        assert args == ("glacier",)
        assert kwargs["endpoint_url"] == "https://glacier.test"
        assert kwargs["region_name"] == "eu-central-1"
        assert kwargs["config"].retries == {"max_attempts": 5, "mode": "standard"}
        assert client.boto_client is mock_session.return_value.client.return_value

    def test_unknown_aws_profile(self):
        with patch(
            "archivectl.core.client.boto3.session.Session",
            side_effect=ProfileNotFound(profile="missing"),
        ):
            with pytest.raises(ConfigurationError):
                GlacierClient(endpoint="glacier.test", region="eu-central-1", aws_profile="missing")

    def test_close(self):
        boto = MagicMock()
        client = _client(boto)

        with client:
            pass

        boto.close.assert_called_once()
        assert client.boto_client is None

    def test_call_after_close(self):
        client = _client()
        client.close()

        with pytest.raises(NetworkError):
            client.upload_part("vault", "u1", 0, b"data", "ab")


# =============================================================================
# Operation Tests
# =============================================================================


class TestGlacierOperations:
    """Tests for the multipart operations."""

    def test_initiate(self):
        boto = MagicMock()
        boto.initiate_multipart_upload.return_value = {
            "location": "/-/vaults/vault/multipart-uploads/u1",
            "uploadId": "u1",
        }

        result = _client(boto).initiate_multipart_upload("vault", "backup", 1048576)

        assert isinstance(result, MultipartUpload)
        assert result.upload_id == "u1"
        boto.initiate_multipart_upload.assert_called_once_with(
            accountId="-",
            vaultName="vault",
            archiveDescription="backup",
            partSize="1048576",
        )

    def test_upload_part_range(self):
        boto = MagicMock()
        boto.upload_multipart_part.return_value = {"checksum": "abc"}

        ack = _client(boto).upload_part("vault", "u1", 1048576, b"x" * 402848, "abc")

        assert ack == "abc"
        boto.upload_multipart_part.assert_called_once_with(
            accountId="-",
            vaultName="vault",
            uploadId="u1",
            checksum="abc",
            range="bytes 1048576-1451423/*",
            body=b"x" * 402848,
        )

    def test_complete(self):
        boto = MagicMock()
        boto.complete_multipart_upload.return_value = {
            "archiveId": "a1",
            "checksum": "abc",
            "location": "/-/vaults/vault/archives/a1",
        }

        result = _client(boto).complete_multipart_upload("vault", "u1", "abc", 2500000)

        assert isinstance(result, ArchiveCreated)
        assert result.archive_id == "a1"
        boto.complete_multipart_upload.assert_called_once_with(
            accountId="-",
            vaultName="vault",
            uploadId="u1",
            archiveSize="2500000",
            checksum="abc",
        )


# =============================================================================
# Error Translation Tests
# =============================================================================


class TestErrorTranslation:
    """Tests for botocore error mapping."""

    def test_client_error(self):
        boto = MagicMock()
        boto.initiate_multipart_upload.side_effect = _client_error(
            "ResourceNotFoundException", "Vault not found", 404
        )

        with pytest.raises(RemoteStoreError) as exc_info:
            _client(boto).initiate_multipart_upload("vault", "backup", 1048576)

        assert exc_info.value.code == "ResourceNotFoundException"
        assert exc_info.value.status == 404
        assert exc_info.value.message == "Vault not found"

    def test_transport_error(self):
        boto = MagicMock()
        boto.upload_multipart_part.side_effect = EndpointConnectionError(
            endpoint_url="https://glacier.test"
        )

        with pytest.raises(NetworkError):
            _client(boto).upload_part("vault", "u1", 0, b"data", "ab")

    def test_missing_credentials(self):
        boto = MagicMock()
        boto.complete_multipart_upload.side_effect = NoCredentialsError()

        with pytest.raises(ConfigurationError):
            _client(boto).complete_multipart_upload("vault", "u1", "ab", 4)
