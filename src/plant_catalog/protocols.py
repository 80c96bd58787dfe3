"""Protocols for dependency injection in the catalog loader."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class FetcherProtocol(Protocol):
    """Protocol for transports that fetch raw resource bytes."""

    def fetch(self, path: str) -> bytes:
        """Return the bytes stored at a path relative to the data source."""
        ...
