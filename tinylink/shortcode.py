"""Short code generation utilities."""

import random
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate random short codes for links."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_uppercase + string.ascii_lowercase + string.digits

    DEFAULT_LENGTH = 7

    def __init__(
        self,
        default_length: int = DEFAULT_LENGTH,
        rng: Optional[random.Random] = None,
    ):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
            rng: Optional random source (a fresh random.Random if not given)
        """
        self.default_length = default_length
        self.rng = rng or random.Random()

    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Characters are drawn uniformly, with replacement, from the base62
        alphabet. Not suitable for secrets: uniqueness is enforced by the
        store, not by the generator.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(self.rng.choices(self.BASE62_CHARS, k=length))
