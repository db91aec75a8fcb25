"""In-memory link store for local development and tests."""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .base import LinkStoreBase, UniqueViolation
from .models import Link


class InMemoryLinkStore(LinkStoreBase):
    """Link store backed by a dictionary.

    No method awaits between reading and writing its state, so every
    operation is atomic with respect to other tasks on the event loop.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._links: Dict[str, Link] = {}

    async def insert(self, short_code: str, target_url: str) -> Link:
        if short_code in self._links:
            raise UniqueViolation(short_code)

        link = Link(
            short_code=short_code,
            target_url=target_url,
            created_at=datetime.now(timezone.utc),
        )
        self._links[short_code] = link
        return link

    async def select_by_code(self, short_code: str) -> Optional[Link]:
        return self._links.get(short_code)

    async def select_all(self, search_term: Optional[str] = None) -> List[Link]:
        links = list(self._links.values())
        if search_term:
            needle = search_term.lower()
            links = [link for link in links if needle in link.short_code.lower()]
        # Insertion order breaks created_at ties, newest first
        links.reverse()
        return sorted(links, key=lambda link: link.created_at, reverse=True)

    async def delete_by_code(self, short_code: str) -> int:
        if self._links.pop(short_code, None) is None:
            return 0
        return 1

    async def increment_clicks_and_fetch_target(self, short_code: str) -> Optional[str]:
        link = self._links.get(short_code)
        if link is None:
            return None

        self._links[short_code] = replace(
            link,
            total_clicks=link.total_clicks + 1,
            last_clicked_at=datetime.now(timezone.utc),
        )
        return link.target_url

    async def ping(self) -> None:
        return None

    async def close(self) -> None:
        self.logger.debug(f"Discarding {len(self._links)} in-memory links")
        self._links.clear()
