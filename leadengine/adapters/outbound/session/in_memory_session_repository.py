"""In-memory session repository adapter."""

import copy
from datetime import datetime, timezone
from typing import Optional

from leadengine.application.ports.session_repository import SessionRepository
from leadengine.domain.entities.session import Session


class InMemorySessionRepository(SessionRepository):
    """In-memory implementation of session repository."""

    def __init__(self) -> None:
        """Initialize in-memory repository."""
        self._storage: dict[str, Session] = {}

    async def get(self, session_id: str) -> Optional[Session]:
        """
        Get a session.

        Args:
            session_id: Session identifier

        Returns:
            Copy of the stored session, or None if not found
        """
        session = self._storage.get(session_id)
        return copy.deepcopy(session) if session is not None else None

    async def save(self, session: Session) -> None:
        """
        Save a session.

        Args:
            session: Session entity to save
        """
        self._storage[session.session_id] = copy.deepcopy(session)

    async def delete(self, session_id: str) -> None:
        """
        Delete a session.

        Args:
            session_id: Session identifier
        """
        self._storage.pop(session_id, None)

    async def delete_expired(self, cutoff: datetime) -> list[str]:
        """
        Delete sessions idle since before the cutoff.

        Args:
            cutoff: Oldest last-interaction time that is kept

        Returns:
            Identifiers of the deleted sessions
        """
        expired = []
        for session_id, session in list(self._storage.items()):
            last_interaction = session.last_interaction_time
            if last_interaction.tzinfo is None:
                last_interaction = last_interaction.replace(tzinfo=timezone.utc)
            if last_interaction < cutoff:
                expired.append(session_id)
                del self._storage[session_id]
        return expired
