"""Validation utilities for short codes and target URLs."""

import re
from urllib.parse import urlparse
from typing import Tuple

SHORT_CODE_MIN_LENGTH = 6
SHORT_CODE_MAX_LENGTH = 8
MAX_URL_LENGTH = 2048

_SHORT_CODE_RE = re.compile(
    rf"[A-Za-z0-9]{{{SHORT_CODE_MIN_LENGTH},{SHORT_CODE_MAX_LENGTH}}}"
)


def is_valid_short_code(short_code: str) -> bool:
    """Check a short code against the 6-8 alphanumeric format.

    Args:
        short_code: The short code to validate

    Returns:
        True if the whole string matches [A-Za-z0-9]{6,8}
    """
    if not isinstance(short_code, str):
        return False
    return _SHORT_CODE_RE.fullmatch(short_code) is not None


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a target URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL format: {e}"

    if result.scheme not in ("http", "https"):
        return False, "URL must use http or https protocol"

    if not result.netloc:
        return False, "URL must have a valid domain"

    return True, ""
