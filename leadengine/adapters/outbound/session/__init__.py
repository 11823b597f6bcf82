"""Session outbound adapters."""

from leadengine.adapters.outbound.session.cached_session_repository import (
    CachedSessionRepository,
)
from leadengine.adapters.outbound.session.in_memory_session_repository import (
    InMemorySessionRepository,
)
from leadengine.adapters.outbound.session.postgres_session_repository import (
    PostgresSessionRepository,
)
from leadengine.adapters.outbound.session.redis_session_cache import RedisSessionCache

__all__ = [
    "CachedSessionRepository",
    "InMemorySessionRepository",
    "PostgresSessionRepository",
    "RedisSessionCache",
]
