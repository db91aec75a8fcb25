"""Core link registry for the TinyLink URL shortener."""

from .shortcode import ShortCodeGenerator
from .service import LinkRegistry
from .client import RemoteLinkRegistry

__all__ = ["ShortCodeGenerator", "LinkRegistry", "RemoteLinkRegistry"]
