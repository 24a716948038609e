"""
MenuRelay Backend — Abstract Menu Store Interface
==================================================

What:  Narrow contract for the single, overwrite-only menu document slot.
How:   Concrete implementations bind a fixed bucket + object name and
       implement write/read/signed_write_url.
Who:   Called by MenuService.

The slot has no versioning and no compare-and-swap: concurrent writers race
and the last write wins.

Implementations:
    - GcsMenuStore: Google Cloud Storage (default)
    - InMemoryMenuStore (tests/conftest.py): in-memory fake with call counters
"""

from abc import ABC, abstractmethod


class MenuStore(ABC):
    """Abstract single-object store. All failures surface as StorageError."""

    @abstractmethod
    async def write(self, data: bytes) -> None:
        """
        Overwrite the menu document with `data`.

        Raises:
            StorageError: the write failed.
        """
        ...

    @abstractmethod
    async def read(self) -> bytes:
        """
        Return the full content of the current menu document.

        Raises:
            MenuUnavailableError: the object is absent or could not be read.
        """
        ...

    @abstractmethod
    async def signed_write_url(self, content_type: str, ttl_seconds: int) -> str:
        """
        Issue a URL that allows one PUT of `content_type` to the menu slot.

        Raises:
            StorageError: signing failed.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        ...

    async def close(self) -> None:
        """Release transport resources. Called once at shutdown."""
        return None
