"""Core modules for archivectl."""

from archivectl.core.exceptions import (
    ArchiveCtlError,
    ConfigurationError,
    ConnectionError,
    ConsistencyError,
    FinalizationError,
    NetworkError,
    OperationError,
    PartUploadError,
    RemoteStoreError,
    SessionInitiationError,
    SourceReadError,
    ValidationError,
)
from archivectl.core.logging import LogContext, get_audit_logger, get_logger, setup_logging
from archivectl.core.output import (
    OutputFormat,
    console,
    format_size,
    print_error,
    print_json,
    print_output,
    print_success,
)
from archivectl.core.validation import (
    validate_endpoint,
    validate_part_size,
    validate_region,
    validate_source_file,
    validate_vault_name,
    validate_workers,
)
from archivectl.core.config import CONFIG_DIR, CONFIG_FILE, Config, Profile
from archivectl.core.client import GlacierClient
from archivectl.core.connection import ConnectionProvider, create_provider

__all__ = [
    # Exceptions
    "ArchiveCtlError",
    "ConfigurationError",
    "ConnectionError",
    "ConsistencyError",
    "FinalizationError",
    "NetworkError",
    "OperationError",
    "PartUploadError",
    "RemoteStoreError",
    "SessionInitiationError",
    "SourceReadError",
    "ValidationError",
    # Validation
    "validate_endpoint",
    "validate_part_size",
    "validate_region",
    "validate_source_file",
    "validate_vault_name",
    "validate_workers",
    # Config
    "Config",
    "Profile",
    "CONFIG_DIR",
    "CONFIG_FILE",
    # Client
    "GlacierClient",
    "ConnectionProvider",
    "create_provider",
    # Output
    "OutputFormat",
    "print_output",
    "print_json",
    "print_error",
    "print_success",
    "console",
    "format_size",
    # Logging
    "get_logger",
    "get_audit_logger",
    "setup_logging",
    "LogContext",
]
