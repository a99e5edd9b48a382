"""Base service with common methods for archivectl services."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Optional

from archivectl.models.progress import UploadProgress

if TYPE_CHECKING:
    from archivectl.core.connection import ConnectionProvider


class BaseService:
    """Base service class with common functionality."""

    def __init__(self, provider: "ConnectionProvider") -> None:
        """Initialize service with a connection provider.

        Args:
            provider: ConnectionProvider handing out Glacier clients
        """
        self.provider = provider

    def _call(self, method: str, *args: Any, **kwargs: Any) -> Any:
        """Run one remote operation on a leased client.

        Args:
            method: GlacierClient method name
            *args: Positional arguments for the method
            **kwargs: Keyword arguments for the method

        Returns:
            The method's return value
        """
        with self.provider.lease() as client:
            return getattr(client, method)(*args, **kwargs)

    @staticmethod
    def _reporter(
        callback: Optional[Callable[[UploadProgress], None]],
    ) -> Callable[[UploadProgress], None]:
        """Wrap an optional progress callback into a callable."""

        def report(progress: UploadProgress) -> None:
            if callback:
                callback(progress)

        return report
