"""Link store layer for TinyLink."""

from .base import LinkStoreBase, UniqueViolation
from .memory import InMemoryLinkStore
from .models import Link
from .postgres import PostgresLinkStore

__all__ = [
    "LinkStoreBase",
    "UniqueViolation",
    "InMemoryLinkStore",
    "PostgresLinkStore",
    "Link",
]
