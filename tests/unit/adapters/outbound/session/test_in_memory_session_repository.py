"""Unit tests for in-memory session repository."""

from datetime import datetime, timedelta, timezone

import pytest

from leadengine.adapters.outbound.session import InMemorySessionRepository
from leadengine.domain.entities.session import Session


@pytest.fixture
def repository():
    """Create in-memory session repository."""
    return InMemorySessionRepository()


@pytest.mark.asyncio
async def test_get_returns_none_for_unknown_session(repository):
    """Test get on an empty repository."""
    assert await repository.get("missing") is None


@pytest.mark.asyncio
async def test_save_stores_a_detached_copy(repository):
    """Test that later changes to the saved entity do not leak into storage."""
    session = Session(session_id="s1", business_id="demo-dental")
    await repository.save(session)

    session.current_service = "Veneers"
    stored = await repository.get("s1")

    assert stored.current_service is None

    stored.mentioned_services.add("Veneers")
    assert (await repository.get("s1")).mentioned_services == set()


@pytest.mark.asyncio
async def test_delete_removes_session(repository):
    """Test delete, including deleting an unknown id."""
    await repository.save(Session(session_id="s1", business_id="demo-dental"))

    await repository.delete("s1")
    await repository.delete("s1")

    assert await repository.get("s1") is None


@pytest.mark.asyncio
async def test_delete_expired_only_removes_idle_sessions(repository):
    """Test that delete_expired honours the cutoff."""
    now = datetime.now(timezone.utc)
    await repository.save(
        Session(
            session_id="idle",
            business_id="demo-dental",
            last_interaction_time=now - timedelta(days=3),
        )
    )
    await repository.save(Session(session_id="active", business_id="demo-dental"))

    removed = await repository.delete_expired(now - timedelta(days=2))

    assert removed == ["idle"]
    assert await repository.get("idle") is None
    assert await repository.get("active") is not None
