"""SQLAlchemy ORM models for chat sessions."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class ChatSessionModel(Base):
    """SQLAlchemy model for chat_sessions table."""

    __tablename__ = "chat_sessions"

    session_id = Column(String, primary_key=True, index=True)
    business_id = Column(String, nullable=False, index=True)
    state_json = Column(JSON, nullable=False)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    last_interaction_time = Column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=lambda: datetime.now(timezone.utc),
    )
