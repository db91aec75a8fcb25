"""Short URL building from request headers and configuration."""

from typing import Mapping, Optional


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup."""
    for key, value in headers.items():
        if key.lower() == name and value:
            return value.strip()
    return None


def build_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Build the public base URL of the service.

    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host (set by a reverse proxy)
    2. Request scheme + host
    3. Fallback base URL from config

    Returns:
        Base URL without trailing slash (e.g., https://example.com)
    """
    proto = _header(headers, "x-forwarded-proto")
    host = _header(headers, "x-forwarded-host")
    if proto and host:
        return f"{proto}://{host}"

    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return fallback_base_url.rstrip("/")


def forwarded_path_prefix(headers: Mapping[str, str]) -> str:
    """Path prefix from X-Forwarded-Prefix, normalized to '/prefix' or ''."""
    prefix = (_header(headers, "x-forwarded-prefix") or "").strip("/")
    return f"/{prefix}" if prefix else ""


def build_short_url(
    short_code: str,
    base_url: str,
    path_prefix: str = "",
) -> str:
    """Build the complete short URL for a code.

    Args:
        short_code: The short code
        base_url: Base URL (e.g., https://example.com)
        path_prefix: Optional path prefix (e.g., /s)

    Returns:
        Complete short URL
    """
    base = base_url.rstrip("/")
    prefix = path_prefix.strip("/")

    if prefix:
        return f"{base}/{prefix}/{short_code}"
    return f"{base}/{short_code}"
