"""Pytest configuration and fixtures."""

import random
from typing import AsyncGenerator, Iterable, List, Optional

import httpx
import pytest

from tinylink.config import Config
from tinylink.database.memory import InMemoryLinkStore
from tinylink.errors import StoreUnavailable
from tinylink.service import LinkRegistry
from tinylink.shortcode import ShortCodeGenerator
from tinylink.common.logging_config import setup_logging
from tinylink_web import create_app


class ScriptedGenerator(ShortCodeGenerator):
    """Generator that hands out a fixed sequence of codes."""

    def __init__(self, codes: Iterable[str]):
        super().__init__()
        self.codes = iter(codes)
        self.calls = 0

    def generate(self, length: Optional[int] = None) -> str:
        self.calls += 1
        return next(self.codes)


class UnavailableStore(InMemoryLinkStore):
    """Store whose every operation fails as if the database were down."""

    async def _fail(self, *args, **kwargs):
        raise StoreUnavailable("Link store unavailable: connection refused")

    insert = _fail
    select_by_code = _fail
    select_all = _fail
    delete_by_code = _fail
    increment_clicks_and_fetch_target = _fail
    ping = _fail


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def short_code_generator():
    """Create a seeded short code generator."""
    return ShortCodeGenerator(rng=random.Random(1234))


@pytest.fixture
def store(logger) -> InMemoryLinkStore:
    """Create an in-memory link store."""
    return InMemoryLinkStore(logger=logger)


@pytest.fixture
def registry(store, short_code_generator, logger) -> LinkRegistry:
    """Create a registry over the in-memory store."""
    return LinkRegistry(
        store=store,
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def config() -> Config:
    """Configuration for an in-process combined app."""
    return Config(
        store_backend="memory",
        mode="combined",
        base_url="http://testserver",
    )


@pytest.fixture
def app(registry, config, logger):
    """Create test FastAPI app."""
    return create_app(registry=registry, config=config, logger=logger)


@pytest.fixture
async def client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Create test client."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls() -> List[str]:
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
