"""Pytest configuration and fixtures for archivectl tests."""

from __future__ import annotations

import tempfile
import threading
import time
from pathlib import Path
from typing import Any, Callable, Generator, Optional

import pytest

from archivectl.core.connection import ConnectionProvider
from archivectl.core.exceptions import NetworkError, RemoteStoreError
from archivectl.models.archive import ArchiveCreated, MultipartUpload


class FakeGlacierClient:
    """In-memory stand-in for GlacierClient.

    Behaviour of upload_part can be tuned per offset: ``fail_offsets`` raise a
    NetworkError, ``delays`` sleep before answering.
    """

    def __init__(
        self,
        *,
        upload_id: str = "upload-123",
        archive_id: str = "archive-456",
        fail_offsets: Optional[set[int]] = None,
        delays: Optional[dict[int, float]] = None,
        initiate_error: Optional[Exception] = None,
        complete_error: Optional[Exception] = None,
        on_initiate: Optional[Callable[[], None]] = None,
    ) -> None:
        self.upload_id = upload_id
        self.archive_id = archive_id
        self.fail_offsets = fail_offsets or set()
        self.delays = delays or {}
        self.initiate_error = initiate_error
        self.complete_error = complete_error
        self.on_initiate = on_initiate
        self.lock = threading.Lock()
        self.initiate_calls: list[dict[str, Any]] = []
        self.parts: dict[int, bytes] = {}
        self.part_checksums: dict[int, str] = {}
        self.finished_at: dict[int, float] = {}
        self.complete_calls: list[dict[str, Any]] = []
        self.closed = False

    def initiate_multipart_upload(
        self, vault_name: str, description: str, part_size: int
    ) -> MultipartUpload:
        self.initiate_calls.append(
            {"vault_name": vault_name, "description": description, "part_size": part_size}
        )
        if self.on_initiate:
            self.on_initiate()
        if self.initiate_error:
            raise self.initiate_error
        return MultipartUpload.model_validate(
            {"uploadId": self.upload_id, "location": f"/-/vaults/{vault_name}/multipart-uploads/x"}
        )

    def upload_part(
        self, vault_name: str, upload_id: str, offset: int, payload: bytes, checksum: str
    ) -> str:
        delay = self.delays.get(offset, 0)
        if delay:
            time.sleep(delay)
        with self.lock:
            self.finished_at[offset] = time.monotonic()
            if offset in self.fail_offsets:
                raise NetworkError("https://glacier.test", "connection reset")
            self.parts[offset] = payload
            self.part_checksums[offset] = checksum
        return checksum

    def complete_multipart_upload(
        self, vault_name: str, upload_id: str, checksum: str, archive_size: int
    ) -> ArchiveCreated:
        self.complete_calls.append(
            {
                "vault_name": vault_name,
                "upload_id": upload_id,
                "checksum": checksum,
                "archive_size": archive_size,
            }
        )
        if self.complete_error:
            raise self.complete_error
        return ArchiveCreated.model_validate(
            {
                "archiveId": self.archive_id,
                "checksum": checksum,
                "location": f"/-/vaults/{vault_name}/archives/{self.archive_id}",
            }
        )

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_file(temp_dir: Path) -> Callable[[int, str], Path]:
    """Factory writing a file of deterministic bytes."""

    def _make(size: int, name: str = "archive.bin") -> Path:
        path = temp_dir / name
        pattern = bytes(range(251))
        data = (pattern * (size // len(pattern) + 1))[:size]
        path.write_bytes(data)
        return path

    return _make


@pytest.fixture
def fake_client() -> FakeGlacierClient:
    """A fake client with default behaviour."""
    return FakeGlacierClient()


def provider_for(client: Any, client_life: int = 1000) -> ConnectionProvider:
    """Provider that always hands out the given client."""
    return ConnectionProvider(lambda: client, client_life=client_life)


@pytest.fixture
def remote_error() -> RemoteStoreError:
    return RemoteStoreError(
        "complete_multipart_upload",
        "The tree hash does not match",
        code="InvalidParameterValueException",
        status=400,
    )


@pytest.fixture
def sample_config_yaml() -> str:
    """Sample config YAML content."""
    return """
default_profile: test
output_format: table

profiles:
  test:
    aws_profile: backup
    part_size: 4194304
    upload_workers: 8
    client_life: 30

  production:
    part_size: 67108864
    upload_workers: 16
"""
