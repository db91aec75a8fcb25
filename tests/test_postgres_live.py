"""Tests against a real PostgreSQL server.

Skipped unless TINYLINK_TEST_DATABASE_URL points at a disposable database.
"""

import asyncio
import os
import uuid

import pytest

from tinylink.database import PostgresLinkStore
from tinylink.errors import CodeAlreadyInUse, NotFound
from tinylink.service import LinkRegistry

DATABASE_URL = os.getenv("TINYLINK_TEST_DATABASE_URL")

pytestmark = pytest.mark.skipif(
    not DATABASE_URL, reason="TINYLINK_TEST_DATABASE_URL not set"
)


def unique_code() -> str:
    return "t" + uuid.uuid4().hex[:7]


@pytest.fixture
async def pg_registry(logger):
    store = PostgresLinkStore(db_config=DATABASE_URL, create_tables=True, logger=logger)
    registry = LinkRegistry(store=store, logger=logger)
    yield registry
    await registry.close()


@pytest.mark.asyncio
class TestPostgresLive:
    """Registry behavior over PostgreSQL."""

    async def test_lifecycle(self, pg_registry):
        code = unique_code()
        link = await pg_registry.create("https://example.com/live", custom_code=code)
        assert link.total_clicks == 0

        for _ in range(3):
            assert await pg_registry.track_click(code) == "https://example.com/live"

        link = await pg_registry.get(code)
        assert link.total_clicks == 3
        assert link.last_clicked_at is not None

        with pytest.raises(CodeAlreadyInUse):
            await pg_registry.create("https://example.com/other", custom_code=code)

        await pg_registry.delete(code)
        with pytest.raises(NotFound):
            await pg_registry.get(code)

    async def test_concurrent_clicks(self, pg_registry):
        code = unique_code()
        await pg_registry.create("https://example.com/busy", custom_code=code)

        await asyncio.gather(*[pg_registry.track_click(code) for _ in range(50)])

        assert (await pg_registry.get(code)).total_clicks == 50
        await pg_registry.delete(code)

    async def test_search_escapes_wildcards(self, pg_registry):
        code = unique_code()
        await pg_registry.create("https://example.com/search", custom_code=code)

        assert code in [link.short_code for link in await pg_registry.list(code.upper())]
        assert all("%" in link.short_code for link in await pg_registry.list("%"))

        await pg_registry.delete(code)

    async def test_health_check(self, pg_registry):
        assert await pg_registry.health_check() is True
