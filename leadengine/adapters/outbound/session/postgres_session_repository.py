"""Postgres-backed session repository adapter."""

import json
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as DBSession

from leadengine.application.ports.session_repository import SessionRepository
from leadengine.domain.entities.session import Session
from leadengine.domain.exceptions import PersistenceError
from leadengine.infrastructure.db import get_db_session
from leadengine.infrastructure.logging.logger import logger

from .models import ChatSessionModel
from .serialization import deserialize_session, serialize_session


class PostgresSessionRepository(SessionRepository):
    """Postgres implementation of session repository."""

    async def get(self, session_id: str) -> Optional[Session]:
        """
        Get a session.

        Args:
            session_id: Session identifier

        Returns:
            Session entity, or None if not found or unreadable

        Raises:
            PersistenceError: If the database cannot be queried
        """
        db: DBSession = get_db_session()
        try:
            model = (
                db.query(ChatSessionModel).filter(ChatSessionModel.session_id == session_id).first()
            )
            if model is None:
                return None

            data = model.state_json
            if isinstance(data, str):
                data = json.loads(data)
            return deserialize_session(data)
        except SQLAlchemyError as e:
            logger.error(f"Database error while getting session {session_id}: {str(e)}")
            raise PersistenceError(f"Could not read session {session_id}") from e
        except (json.JSONDecodeError, KeyError, ValueError) as e:
            logger.error(f"Error deserializing session {session_id}: {str(e)}")
            return None
        finally:
            db.close()

    async def save(self, session: Session) -> None:
        """
        Insert or replace a session.

        Args:
            session: Session entity to save

        Raises:
            PersistenceError: If the write fails
        """
        db: DBSession = get_db_session()
        try:
            # Round-trip through json for deterministic key order
            state_json = json.loads(json.dumps(serialize_session(session), sort_keys=True))

            model = (
                db.query(ChatSessionModel)
                .filter(ChatSessionModel.session_id == session.session_id)
                .first()
            )
            if model:
                model.state_json = state_json
                model.business_id = session.business_id
                model.last_interaction_time = session.last_interaction_time
            else:
                db.add(
                    ChatSessionModel(
                        session_id=session.session_id,
                        business_id=session.business_id,
                        state_json=state_json,
                        created_at=session.created_at,
                        last_interaction_time=session.last_interaction_time,
                    )
                )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while saving session {session.session_id}: {str(e)}")
            raise PersistenceError(f"Could not save session {session.session_id}") from e
        finally:
            db.close()

    async def delete(self, session_id: str) -> None:
        """
        Delete a session.

        Args:
            session_id: Session identifier

        Raises:
            PersistenceError: If the delete fails
        """
        db: DBSession = get_db_session()
        try:
            db.query(ChatSessionModel).filter(ChatSessionModel.session_id == session_id).delete()
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while deleting session {session_id}: {str(e)}")
            raise PersistenceError(f"Could not delete session {session_id}") from e
        finally:
            db.close()

    async def delete_expired(self, cutoff: datetime) -> list[str]:
        """
        Delete sessions idle since before the cutoff.

        Args:
            cutoff: Oldest last-interaction time that is kept

        Returns:
            Identifiers of the deleted sessions

        Raises:
            PersistenceError: If the delete fails
        """
        if cutoff.tzinfo is None:
            cutoff = cutoff.replace(tzinfo=timezone.utc)
        db: DBSession = get_db_session()
        try:
            query = db.query(ChatSessionModel).filter(
                ChatSessionModel.last_interaction_time < cutoff
            )
            expired = [model.session_id for model in query.all()]
            if expired:
                db.query(ChatSessionModel).filter(
                    ChatSessionModel.session_id.in_(expired)
                ).delete(synchronize_session=False)
                db.commit()
            return expired
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while deleting expired sessions: {str(e)}")
            raise PersistenceError("Could not delete expired sessions") from e
        finally:
            db.close()
