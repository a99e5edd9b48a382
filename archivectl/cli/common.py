"""Common CLI utilities, decorators, and helpers."""

from __future__ import annotations

import sys
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

import click

from archivectl.core.config import Config, Profile
from archivectl.core.exceptions import (
    ArchiveCtlError,
    NetworkError,
    PartUploadError,
    RemoteStoreError,
)
from archivectl.core.output import OutputFormat, print_error

F = TypeVar("F", bound=Callable[..., Any])


# =============================================================================
# Exit Codes
# =============================================================================


class ExitCode:
    """Standard exit codes."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    NETWORK_ERROR = 3
    REMOTE_ERROR = 4
    USER_CANCELLED = 5


# =============================================================================
# Context Object
# =============================================================================


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.config: Optional[Config] = None
        self.profile_name: Optional[str] = None
        self.output_format: OutputFormat = OutputFormat.TABLE
        self.quiet: bool = False
        self.verbose: bool = False

    def get_profile(self) -> Profile:
        """Resolve the active profile.

        Raises:
            ConfigurationError: If the config file is invalid.
            ProfileNotFoundError: If the selected profile does not exist.
        """
        if self.config is None:
            self.config = Config.load()
        return self.config.get_profile(self.profile_name)


pass_context = click.make_pass_decorator(Context, ensure=True)


# =============================================================================
# Error Handling
# =============================================================================


def handle_errors(f: F) -> F:
    """Handle common errors and convert to CLI exit codes."""

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        """Capture errors and exit with consistent messaging."""
        try:
            return f(*args, **kwargs)
        except PartUploadError as e:
            print_error(str(e))
            for error in e.errors:
                print_error(error)
            sys.exit(ExitCode.GENERAL_ERROR)
        except NetworkError as e:
            print_error(str(e))
            sys.exit(ExitCode.NETWORK_ERROR)
        except RemoteStoreError as e:
            print_error(str(e))
            sys.exit(ExitCode.REMOTE_ERROR)
        except ArchiveCtlError as e:
            print_error(str(e))
            sys.exit(ExitCode.GENERAL_ERROR)
        except click.ClickException:
            raise
        except KeyboardInterrupt:
            print_error("Interrupted")
            sys.exit(ExitCode.USER_CANCELLED)
        except Exception as e:
            print_error(f"Unexpected error: {e}")
            sys.exit(ExitCode.GENERAL_ERROR)

    return wrapper  # type: ignore
