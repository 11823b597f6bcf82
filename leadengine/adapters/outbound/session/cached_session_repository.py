"""Session repository with a Redis cache in front (cache-aside)."""

from datetime import datetime
from typing import Optional

from leadengine.application.ports.session_repository import SessionRepository
from leadengine.domain.entities.session import Session
from leadengine.infrastructure.logging.logger import log_session_event

from .redis_session_cache import RedisSessionCache


class CachedSessionRepository(SessionRepository):
    """Session repository with Redis cache. The primary repository is the source of truth."""

    def __init__(self, primary_repository: SessionRepository, cache: RedisSessionCache) -> None:
        """
        Initialize cached repository.

        Args:
            primary_repository: Primary repository (Postgres)
            cache: Redis cache for sessions
        """
        self._primary = primary_repository
        self._cache = cache

    async def get(self, session_id: str) -> Optional[Session]:
        """
        Get a session, checking the cache first.

        Args:
            session_id: Session identifier

        Returns:
            Session entity, or None if not found
        """
        cached = await self._cache.get(session_id)
        if cached is not None:
            log_session_event(session_id, "cache_hit")
            return cached

        log_session_event(session_id, "cache_miss")
        session = await self._primary.get(session_id)
        if session is not None:
            await self._cache.set(session)
        return session

    async def save(self, session: Session) -> None:
        """
        Save to the primary repository, then refresh the cache.

        Args:
            session: Session entity to save
        """
        await self._primary.save(session)
        await self._cache.set(session)

    async def delete(self, session_id: str) -> None:
        """
        Delete from the primary repository and the cache.

        Args:
            session_id: Session identifier
        """
        await self._primary.delete(session_id)
        await self._cache.delete(session_id)

    async def delete_expired(self, cutoff: datetime) -> list[str]:
        """
        Delete expired sessions from the primary repository and evict them from cache.

        Args:
            cutoff: Oldest last-interaction time that is kept

        Returns:
            Identifiers of the deleted sessions
        """
        expired = await self._primary.delete_expired(cutoff)
        for session_id in expired:
            await self._cache.delete(session_id)
        return expired
