"""Abstract base class for link store implementations."""

from abc import ABC, abstractmethod
from typing import Optional, List

from .models import Link


class UniqueViolation(Exception):
    """Raised by a store when an insert collides with an existing short code."""

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"Short code already exists: {short_code}")


class LinkStoreBase(ABC):
    """Abstract base class for link store operations.

    Implementations are the single authority for short code uniqueness and
    must make each operation atomic. Failures other than a uniqueness
    violation are raised as ``StoreUnavailable``.
    """

    @abstractmethod
    async def insert(self, short_code: str, target_url: str) -> Link:
        """Insert a new link with zero clicks.

        Args:
            short_code: The short code to use
            target_url: The URL to redirect to

        Returns:
            The stored link, including the store-assigned created_at

        Raises:
            UniqueViolation: If short_code already exists
        """
        pass

    @abstractmethod
    async def select_by_code(self, short_code: str) -> Optional[Link]:
        """Get the link for a short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def select_all(self, search_term: Optional[str] = None) -> List[Link]:
        """List links, newest first.

        Args:
            search_term: Optional case-insensitive substring of short_code

        Returns:
            Links ordered by created_at descending
        """
        pass

    @abstractmethod
    async def delete_by_code(self, short_code: str) -> int:
        """Delete the link for a short code.

        Args:
            short_code: The short code to delete

        Returns:
            Number of rows removed (0 or 1)
        """
        pass

    @abstractmethod
    async def increment_clicks_and_fetch_target(self, short_code: str) -> Optional[str]:
        """Atomically record a click and return the target URL.

        Increments total_clicks by one and sets last_clicked_at to now in a
        single indivisible operation.

        Args:
            short_code: The short code that was visited

        Returns:
            The target URL, or None if the short code does not exist
        """
        pass

    @abstractmethod
    async def ping(self) -> None:
        """Check that the store responds.

        Raises:
            StoreUnavailable: If the store cannot be reached
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close store connections."""
        pass
