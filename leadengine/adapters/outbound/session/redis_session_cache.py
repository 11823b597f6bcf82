"""Redis cache adapter for chat sessions."""

import json
from typing import Optional

from redis import asyncio as aioredis

from leadengine.domain.entities.session import Session
from leadengine.infrastructure.logging.logger import logger

from .serialization import deserialize_session, serialize_session


class RedisSessionCache:
    """Redis cache for chat sessions. Errors are logged and treated as misses."""

    KEY_PREFIX = "chat:session:"

    def __init__(self, redis_url: str, ttl_seconds: int) -> None:
        """
        Initialize Redis session cache.

        Args:
            redis_url: Redis connection URL
            ttl_seconds: Time-to-live in seconds for cached sessions
        """
        self._redis_url = redis_url
        self._ttl_seconds = ttl_seconds
        self._client: Optional[aioredis.Redis] = None

    async def _get_client(self) -> aioredis.Redis:
        if self._client is None:
            self._client = await aioredis.from_url(
                self._redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    def _make_key(self, session_id: str) -> str:
        return f"{self.KEY_PREFIX}{session_id}"

    async def get(self, session_id: str) -> Optional[Session]:
        """
        Get a session from cache.

        Args:
            session_id: Session identifier

        Returns:
            Session entity, or None on a miss or error
        """
        try:
            client = await self._get_client()
            cached_data = await client.get(self._make_key(session_id))
            if cached_data is None:
                return None
            return deserialize_session(json.loads(cached_data))
        except Exception as e:
            logger.warning(f"Error reading session {session_id} from cache: {str(e)}")
            return None

    async def set(self, session: Session) -> None:
        """
        Store a session in cache with TTL.

        Args:
            session: Session entity to cache
        """
        try:
            client = await self._get_client()
            payload = json.dumps(serialize_session(session), sort_keys=True)
            await client.setex(self._make_key(session.session_id), self._ttl_seconds, payload)
        except Exception as e:
            logger.warning(f"Error writing session {session.session_id} to cache: {str(e)}")

    async def delete(self, session_id: str) -> None:
        """
        Delete a session from cache.

        Args:
            session_id: Session identifier
        """
        try:
            client = await self._get_client()
            await client.delete(self._make_key(session_id))
        except Exception as e:
            logger.warning(f"Error deleting session {session_id} from cache: {str(e)}")

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.close()
            self._client = None
