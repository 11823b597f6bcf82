"""Unit tests for cached session repository."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from leadengine.adapters.outbound.session import (
    CachedSessionRepository,
    InMemorySessionRepository,
)
from leadengine.domain.entities.session import Session


@pytest.fixture
def primary():
    """Create primary in-memory repository."""
    return InMemorySessionRepository()


@pytest.fixture
def cache():
    """Create a mock session cache."""
    mock_cache = AsyncMock()
    mock_cache.get = AsyncMock(return_value=None)
    return mock_cache


@pytest.fixture
def repository(primary, cache):
    """Create cached repository."""
    return CachedSessionRepository(primary, cache)


@pytest.mark.asyncio
async def test_cache_hit_skips_primary(repository, cache, primary):
    """Test that a cached session is returned without reading the primary."""
    cached = Session(session_id="s1", business_id="demo-dental", current_service="Veneers")
    cache.get.return_value = cached

    result = await repository.get("s1")

    assert result is cached
    assert await primary.get("s1") is None


@pytest.mark.asyncio
async def test_cache_miss_reads_primary_and_populates_cache(repository, cache, primary):
    """Test cache-aside population on a miss."""
    await primary.save(Session(session_id="s1", business_id="demo-dental"))

    result = await repository.get("s1")

    assert result.session_id == "s1"
    cache.set.assert_awaited_once()


@pytest.mark.asyncio
async def test_save_and_delete_write_through(repository, cache, primary):
    """Test that writes go to the primary and refresh the cache."""
    session = Session(session_id="s1", business_id="demo-dental")

    await repository.save(session)
    assert await primary.get("s1") is not None
    cache.set.assert_awaited_once_with(session)

    await repository.delete("s1")
    assert await primary.get("s1") is None
    cache.delete.assert_awaited_once_with("s1")


@pytest.mark.asyncio
async def test_delete_expired_evicts_cache(repository, cache, primary):
    """Test that reaped sessions are evicted from the cache."""
    await primary.save(
        Session(
            session_id="old",
            business_id="demo-dental",
            last_interaction_time=datetime(2020, 1, 1, tzinfo=timezone.utc),
        )
    )

    removed = await repository.delete_expired(datetime.now(timezone.utc))

    assert removed == ["old"]
    cache.delete.assert_awaited_once_with("old")
