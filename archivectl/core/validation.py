"""Input validation for archivectl."""

from __future__ import annotations

import os
import re
from pathlib import Path
from urllib.parse import urlparse

from archivectl.core.exceptions import PathValidationError, ValidationError
from archivectl.uploaders.constants import MAX_PART_SIZE, MAX_UPLOAD_WORKERS, MIB, MIN_PART_SIZE

VAULT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{1,255}$")
REGION_PATTERN = re.compile(r"^[a-z]{2}(-[a-z]+)+-\d+$")


def validate_endpoint(endpoint: str) -> str:
    """Validate and normalize a service endpoint.

    Bare host names such as ``glacier.eu-central-1.amazonaws.com`` get an
    https scheme.

    Returns:
        Endpoint URL without a trailing slash.
    """
    endpoint = (endpoint or "").strip()
    if not endpoint:
        raise ValidationError("Service endpoint is required", field="service_endpoint")

    if "://" not in endpoint:
        endpoint = f"https://{endpoint}"

    parsed = urlparse(endpoint)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(
            f"Invalid service endpoint: {endpoint}",
            field="service_endpoint",
            value=endpoint,
        )
    return endpoint.rstrip("/")


def validate_region(region: str) -> str:
    """Validate a signing region like ``eu-central-1``."""
    region = (region or "").strip()
    if not REGION_PATTERN.match(region):
        raise ValidationError(f"Invalid signing region: {region}", field="signing_region", value=region)
    return region


def validate_vault_name(name: str) -> str:
    """Validate a vault name (1-255 letters, digits, '_', '-', '.')."""
    name = (name or "").strip()
    if not VAULT_NAME_PATTERN.match(name):
        raise ValidationError(f"Invalid vault name: {name}", field="vault_name", value=name)
    return name


def validate_part_size(part_size: int) -> int:
    """Validate a part size.

    Must be 1 MiB multiplied by a power of two, at most 4 GiB, so part tree
    hashes combine into the whole-archive tree hash.
    """
    if not isinstance(part_size, int) or isinstance(part_size, bool):
        raise ValidationError("Part size must be an integer", field="part_size", value=part_size)
    if part_size < MIN_PART_SIZE or part_size > MAX_PART_SIZE:
        raise ValidationError(
            f"Part size must be between {MIN_PART_SIZE} and {MAX_PART_SIZE} bytes",
            field="part_size",
            value=part_size,
        )
    mib = part_size // MIB
    if part_size % MIB or mib & (mib - 1):
        raise ValidationError(
            "Part size must be a power-of-two number of MiB",
            field="part_size",
            value=part_size,
        )
    return part_size


def validate_workers(workers: int, max_workers: int = MAX_UPLOAD_WORKERS) -> int:
    """Validate a worker count."""
    if not isinstance(workers, int) or workers < 1 or workers > max_workers:
        raise ValidationError(
            f"Workers must be between 1 and {max_workers}",
            field="workers",
            value=workers,
        )
    return workers


def validate_positive(value: int, field: str) -> int:
    """Validate a positive integer setting."""
    if not isinstance(value, int) or value < 1:
        raise ValidationError(f"{field} must be a positive integer", field=field, value=value)
    return value


def validate_source_file(path: str | Path) -> Path:
    """Validate that the source is an existing, readable regular file."""
    p = Path(path).expanduser()
    if not p.exists():
        raise PathValidationError(str(path), "does not exist")
    if not p.is_file():
        raise PathValidationError(str(path), "not a regular file")
    if not os.access(p, os.R_OK):
        raise PathValidationError(str(path), "not readable")
    return p
