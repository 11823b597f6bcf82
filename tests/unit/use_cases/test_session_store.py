"""Unit tests for SessionStore."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from leadengine.adapters.outbound.session.in_memory_session_repository import (
    InMemorySessionRepository,
)
from leadengine.application.use_cases.session_store import SessionStore
from leadengine.domain.entities.session import ASSISTANT_ROLE, USER_ROLE, ChatMessage, Session
from leadengine.domain.exceptions import PersistenceError, SessionNotFoundError, ValidationError
from leadengine.domain.value_objects.contact_info import ContactInfo
from leadengine.domain.value_objects.question_type import QuestionType


class FlakyRepository(InMemorySessionRepository):
    """In-memory repository whose first N saves fail."""

    def __init__(self, failures: int) -> None:
        """Initialize with the number of failing saves."""
        super().__init__()
        self.failures = failures
        self.save_calls = 0

    async def save(self, session: Session) -> None:
        """Fail until the failure budget is used up."""
        self.save_calls += 1
        if self.failures > 0:
            self.failures -= 1
            raise PersistenceError("write not confirmed")
        await super().save(session)


@pytest.fixture
def repository():
    """Create in-memory session repository."""
    return InMemorySessionRepository()


@pytest.fixture
def store(repository):
    """Create session store with a short TTL."""
    return SessionStore(repository, ttl_seconds=60)


@pytest.mark.asyncio
async def test_get_or_create_creates_and_persists(store, repository):
    """Test that a new session is created, stored and touched."""
    session = await store.get_or_create("s1", "demo-dental")

    assert session.session_id == "s1"
    assert session.business_id == "demo-dental"
    assert await repository.get("s1") is not None


@pytest.mark.asyncio
async def test_get_or_create_returns_existing(store):
    """Test that the second call returns the same stored session."""
    await store.get_or_create("s1", "demo-dental")
    await store.apply_patch("s1", {"current_service": "Veneers"})

    session = await store.get_or_create("s1", "demo-dental")

    assert session.current_service == "Veneers"


@pytest.mark.asyncio
async def test_returned_sessions_are_detached(store):
    """Test that mutating a returned session does not change the store."""
    session = await store.get_or_create("s1", "demo-dental")
    session.current_service = "Veneers"
    session.mentioned_services.add("Veneers")

    stored = await store.get("s1")

    assert stored.current_service is None
    assert stored.mentioned_services == set()


@pytest.mark.asyncio
async def test_get_does_not_touch(store):
    """Test that get leaves last_interaction_time alone."""
    created = await store.get_or_create("s1", "demo-dental")

    fetched = await store.get("s1")

    assert fetched.last_interaction_time == created.last_interaction_time


@pytest.mark.asyncio
async def test_apply_patch_updates_context_fields(store):
    """Test patching context fields."""
    await store.get_or_create("s1", "demo-dental")

    patched = await store.apply_patch(
        "s1",
        {
            "current_service": "Veneers",
            "mentioned_services": {"Veneers"},
            "last_question": QuestionType.PRICE,
            "partial_contact_info": ContactInfo(name="John Doe"),
        },
    )

    assert patched.current_service == "Veneers"
    assert patched.last_question == QuestionType.PRICE
    assert patched.partial_contact_info.name == "John Doe"


@pytest.mark.asyncio
async def test_apply_patch_unknown_session_raises(store):
    """Test that patching a missing session fails."""
    with pytest.raises(SessionNotFoundError):
        await store.apply_patch("missing", {"current_service": "Veneers"})


@pytest.mark.asyncio
async def test_apply_patch_rejects_unknown_fields(store):
    """Test that only context fields can be patched."""
    await store.get_or_create("s1", "demo-dental")

    with pytest.raises(ValidationError):
        await store.apply_patch("s1", {"messages": []})


@pytest.mark.asyncio
async def test_append_turn_keeps_last_twenty_entries(store):
    """Test the history bound with user/assistant pairs."""
    await store.get_or_create("s1", "demo-dental")

    for index in range(1, 13):
        await store.append_turn(
            "s1",
            ChatMessage(role=USER_ROLE, content=f"user {index}"),
            ChatMessage(role=ASSISTANT_ROLE, content=f"bot {index}"),
        )

    session = await store.get("s1")
    assert len(session.messages) == 20
    assert session.messages[0].content == "user 3"
    assert session.messages[-1].content == "bot 12"


@pytest.mark.asyncio
async def test_append_turn_unknown_session_raises(store):
    """Test that appending to a missing session fails."""
    with pytest.raises(SessionNotFoundError):
        await store.append_turn(
            "missing",
            ChatMessage(role=USER_ROLE, content="hi"),
            ChatMessage(role=ASSISTANT_ROLE, content="hello"),
        )


@pytest.mark.asyncio
async def test_expire_removes_session(store):
    """Test explicit expiry."""
    await store.get_or_create("s1", "demo-dental")

    await store.expire("s1")

    assert await store.get("s1") is None


@pytest.mark.asyncio
async def test_idle_session_is_treated_as_absent(store, repository):
    """Test that a session past its TTL is not returned."""
    await store.get_or_create("s1", "demo-dental")
    repository._storage["s1"].last_interaction_time = datetime.now(timezone.utc) - timedelta(
        seconds=120
    )

    assert await store.get("s1") is None
    fresh = await store.get_or_create("s1", "demo-dental")
    assert fresh.messages == []


@pytest.mark.asyncio
async def test_reap_expired_removes_only_idle_sessions(store, repository):
    """Test the reaper sweep."""
    await store.get_or_create("old", "demo-dental")
    await store.get_or_create("new", "demo-dental")
    repository._storage["old"].last_interaction_time = datetime.now(timezone.utc) - timedelta(
        seconds=120
    )

    removed = await store.reap_expired()

    assert removed == ["old"]
    assert await store.get("new") is not None


@pytest.mark.asyncio
async def test_background_reaper_runs_and_stops(store, repository):
    """Test that the reaper task sweeps periodically and can be stopped."""
    await store.get_or_create("old", "demo-dental")
    repository._storage["old"].last_interaction_time = datetime.now(timezone.utc) - timedelta(
        seconds=120
    )

    store.start_reaper(0.01)
    await asyncio.sleep(0.05)
    await store.stop_reaper()

    assert "old" not in repository._storage


@pytest.mark.asyncio
async def test_save_is_retried_once():
    """Test that a single failed write is retried."""
    repository = FlakyRepository(failures=1)
    store = SessionStore(repository, retry_attempts=1)

    await store.get_or_create("s1", "demo-dental")

    assert repository.save_calls == 2
    assert await repository.get("s1") is not None


@pytest.mark.asyncio
async def test_save_failure_surfaces_after_retries():
    """Test that persistent write failures raise PersistenceError."""
    repository = FlakyRepository(failures=5)
    store = SessionStore(repository, retry_attempts=1)

    with pytest.raises(PersistenceError):
        await store.get_or_create("s1", "demo-dental")
    assert repository.save_calls == 2


@pytest.mark.asyncio
async def test_lock_serializes_turns_on_one_session(store):
    """Test that work under the lock for one session does not interleave."""
    await store.get_or_create("s1", "demo-dental")
    order = []

    async def turn(label):
        async with store.lock("s1"):
            order.append(f"{label}-start")
            await asyncio.sleep(0.01)
            await store.apply_patch("s1", {"current_service": label})
            order.append(f"{label}-end")

    await asyncio.gather(turn("a"), turn("b"))

    assert order == ["a-start", "a-end", "b-start", "b-end"]


@pytest.mark.asyncio
async def test_lock_does_not_block_other_sessions(store):
    """Test that different sessions proceed independently."""
    order = []

    async def turn(session_id, delay):
        async with store.lock(session_id):
            order.append(f"{session_id}-start")
            await asyncio.sleep(delay)
            order.append(f"{session_id}-end")

    await asyncio.gather(turn("s1", 0.03), turn("s2", 0.0))

    assert order.index("s2-end") < order.index("s1-end")


@pytest.mark.asyncio
async def test_lock_with_waiters_is_not_dropped(store):
    """Test that a lock a task is queued on survives cleanup and keeps serializing."""
    await store.get_or_create("s1", "demo-dental")
    order = []

    async def turn(label):
        async with store.lock("s1"):
            order.append(f"{label}-start")
            await asyncio.sleep(0.01)
            order.append(f"{label}-end")

    async with store.lock("s1"):
        waiter = asyncio.create_task(turn("a"))
        await asyncio.sleep(0)

    store._drop_lock("s1")

    assert "s1" in store._locks
    await asyncio.gather(waiter, turn("b"))
    assert order == ["a-start", "a-end", "b-start", "b-end"]


@pytest.mark.asyncio
async def test_idle_lock_is_dropped_on_expire(store):
    """Test that expiring a session with no queued work releases its lock entry."""
    await store.get_or_create("s1", "demo-dental")

    await store.expire("s1")

    assert "s1" not in store._locks
