"""Shared Glacier connection with periodic recycling.

Upload workers never hold the raw connection; they lease a client from the
provider for the duration of one request. Every ``client_life``-th
acquisition replaces the current client. A replaced client is closed once
its last lease is released, so recycling never closes a connection that an
in-flight upload is still using.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from archivectl.core.client import GlacierClient
from archivectl.uploaders.constants import DEFAULT_CLIENT_LIFE

logger = logging.getLogger(__name__)


class _Slot:
    """A client plus its lease bookkeeping."""

    def __init__(self, client: Any) -> None:
        self.client = client
        self.leases = 0
        self.retired = False


class ConnectionProvider:
    """Hands out a live client and recycles it after a bounded number of uses."""

    def __init__(
        self,
        factory: Callable[[], Any],
        client_life: int = DEFAULT_CLIENT_LIFE,
    ) -> None:
        if client_life < 1:
            raise ValueError(f"client_life must be positive: {client_life}")
        self._factory = factory
        self._client_life = client_life
        self._lock = threading.Lock()
        self._current: _Slot | None = None
        self._slots: dict[int, _Slot] = {}
        self._uses = 0
        self.clients_created = 0

    def acquire(self) -> Any:
        """Lease the current client, replacing it when its life is used up.

        Every call must be paired with release().
        """
        with self._lock:
            if self._current is None:
                self._current = self._new_slot()

            self._uses += 1
            if self._uses % self._client_life == 0:
                logger.debug("Recycling client after %d uses", self._uses)
                self._retire(self._current)
                self._current = self._new_slot()

            self._current.leases += 1
            return self._current.client

    def release(self, client: Any) -> None:
        """Return a leased client."""
        with self._lock:
            slot = self._slots.get(id(client))
            if slot is None or slot.leases == 0:
                raise ValueError("Client was not leased from this provider")
            slot.leases -= 1
            if slot.retired and slot.leases == 0:
                self._dispose(slot)

    @contextmanager
    def lease(self) -> Iterator[Any]:
        """Context manager around acquire()/release()."""
        client = self.acquire()
        try:
            yield client
        finally:
            self.release(client)

    def close(self) -> None:
        """Retire every client; idle ones are closed immediately.

        The provider stays usable: the next acquire() creates a new client.
        """
        with self._lock:
            for slot in list(self._slots.values()):
                self._retire(slot)
            self._current = None

    def __enter__(self) -> ConnectionProvider:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # Helpers below run with the lock held.

    def _new_slot(self) -> _Slot:
        slot = _Slot(self._factory())
        self._slots[id(slot.client)] = slot
        self.clients_created += 1
        return slot

    def _retire(self, slot: _Slot) -> None:
        slot.retired = True
        if slot.leases == 0:
            self._dispose(slot)

    def _dispose(self, slot: _Slot) -> None:
        self._slots.pop(id(slot.client), None)
        try:
            slot.client.close()
        except Exception as e:
            logger.warning("Failed to close client: %s", e)


def create_provider(
    *,
    endpoint: str,
    region: str,
    aws_profile: str | None = None,
    client_life: int = DEFAULT_CLIENT_LIFE,
    **client_options: Any,
) -> ConnectionProvider:
    """Build a provider whose clients talk to one Glacier endpoint.

    Args:
        endpoint: Service endpoint (host name or URL).
        region: Signing region.
        aws_profile: Optional AWS named profile for credentials.
        client_life: Acquisitions per client before recycling.
        **client_options: Extra GlacierClient settings (timeouts, retries).

    Returns:
        ConnectionProvider creating GlacierClient instances on demand.
    """

    def factory() -> GlacierClient:
        return GlacierClient(
            endpoint=endpoint,
            region=region,
            aws_profile=aws_profile,
            **client_options,
        )

    return ConnectionProvider(factory, client_life=client_life)
