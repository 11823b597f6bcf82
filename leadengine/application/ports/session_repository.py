"""Session repository port."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from leadengine.domain.entities.session import Session


class SessionRepository(ABC):
    """Port interface for chat session persistence."""

    @abstractmethod
    async def get(self, session_id: str) -> Optional[Session]:
        """
        Get a session.

        Args:
            session_id: Session identifier

        Returns:
            Detached copy of the session, or None if not found
        """
        pass

    @abstractmethod
    async def save(self, session: Session) -> None:
        """
        Insert or replace a session.

        Args:
            session: Session entity to save

        Raises:
            PersistenceError: If the write cannot be confirmed
        """
        pass

    @abstractmethod
    async def delete(self, session_id: str) -> None:
        """
        Delete a session.

        Args:
            session_id: Session identifier
        """
        pass

    @abstractmethod
    async def delete_expired(self, cutoff: datetime) -> list[str]:
        """
        Delete sessions whose last interaction is older than the cutoff.

        Args:
            cutoff: Oldest last-interaction time that is kept

        Returns:
            Identifiers of the deleted sessions
        """
        pass
