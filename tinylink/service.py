"""Link registry: short code allocation and click tracking."""

import logging
from typing import Optional, List

from .shortcode import ShortCodeGenerator
from .database.base import LinkStoreBase, UniqueViolation
from .database.models import Link
from .common.validators import is_valid_short_code, is_valid_url
from .errors import (
    CodeAlreadyInUse,
    CodeSpaceExhausted,
    InvalidCodeFormat,
    InvalidTargetURL,
    NotFound,
    StoreUnavailable,
)


class LinkRegistry:
    """Orchestrates link creation, lookup, deletion and click tracking.

    The registry holds no shared mutable state and takes no locks; the store
    is the only authority for uniqueness and click counts.
    """

    def __init__(
        self,
        store: LinkStoreBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_generation_attempts: int = 5,
    ):
        """Initialize link registry.

        Args:
            store: Link store instance
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_generation_attempts: Attempts with fresh generated codes
                before giving up with CodeSpaceExhausted
        """
        if max_generation_attempts < 1:
            raise ValueError("max_generation_attempts must be at least 1")

        self.store = store
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_generation_attempts = max_generation_attempts

    async def create(
        self,
        target_url: str,
        custom_code: Optional[str] = None,
    ) -> Link:
        """Create a new link.

        A custom code that collides fails immediately. A generated code that
        collides is replaced by a fresh one, up to max_generation_attempts.

        Args:
            target_url: The URL to redirect to
            custom_code: Optional custom short code

        Returns:
            The created link as stored

        Raises:
            InvalidTargetURL: If the target URL fails validation
            InvalidCodeFormat: If the short code is not 6-8 alphanumerics
            CodeAlreadyInUse: If the custom code already exists
            CodeSpaceExhausted: If every generated code collided
        """
        is_valid, error = is_valid_url(target_url)
        if not is_valid:
            raise InvalidTargetURL(f"Invalid URL: {error}")

        generated = not custom_code
        attempts = self.max_generation_attempts if generated else 1

        for attempt in range(1, attempts + 1):
            short_code = self.generator.generate() if generated else custom_code

            if not is_valid_short_code(short_code):
                raise InvalidCodeFormat(short_code)

            try:
                link = await self.store.insert(short_code, target_url)
            except UniqueViolation:
                if not generated:
                    raise CodeAlreadyInUse(short_code)
                self.logger.debug(
                    f"Generated code {short_code} collided (attempt {attempt}/{attempts})"
                )
                continue

            self.logger.info(f"Created link: {link.short_code} -> {link.target_url}")
            return link

        self.logger.error(f"Short code generation exhausted after {attempts} attempts")
        raise CodeSpaceExhausted(attempts)

    async def get(self, short_code: str) -> Link:
        """Get the link for a short code.

        Raises:
            NotFound: If no link exists for the code
        """
        if not is_valid_short_code(short_code):
            raise NotFound(short_code)
        link = await self.store.select_by_code(short_code)
        if link is None:
            raise NotFound(short_code)
        return link

    async def list(self, search_term: Optional[str] = None) -> List[Link]:
        """List links, newest first.

        Args:
            search_term: Optional case-insensitive substring of the short code

        Returns:
            Links ordered by creation time, newest first
        """
        # Codes are alphanumeric, so a term with a NUL byte matches nothing
        if search_term and "\x00" in search_term:
            return []
        return await self.store.select_all(search_term or None)

    async def delete(self, short_code: str) -> None:
        """Delete the link for a short code.

        Raises:
            NotFound: If no link exists for the code
        """
        if not is_valid_short_code(short_code):
            raise NotFound(short_code)
        if await self.store.delete_by_code(short_code) == 0:
            raise NotFound(short_code)

        self.logger.info(f"Deleted link: {short_code}")

    async def track_click(self, short_code: str) -> str:
        """Record a visit and return the URL to redirect to.

        Raises:
            NotFound: If no link exists for the code
        """
        if not is_valid_short_code(short_code):
            raise NotFound(short_code)
        target_url = await self.store.increment_clicks_and_fetch_target(short_code)
        if target_url is None:
            self.logger.warning(f"Short code not found: {short_code}")
            raise NotFound(short_code)

        self.logger.debug(f"Tracked click: {short_code} -> {target_url}")
        return target_url

    async def health_check(self) -> bool:
        """Check that the store responds.

        Returns:
            True if the store answered a ping
        """
        try:
            await self.store.ping()
        except StoreUnavailable as e:
            self.logger.error(f"Health check failed: {e}")
            return False
        return True

    async def close(self) -> None:
        """Close store connections."""
        await self.store.close()
