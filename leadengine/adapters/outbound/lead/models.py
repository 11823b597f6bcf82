"""SQLAlchemy ORM models for leads."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint

# Reuse the session models' declarative base so both tables share metadata
from leadengine.adapters.outbound.session.models import Base


class LeadModel(Base):
    """SQLAlchemy model for leads table."""

    __tablename__ = "leads"
    __table_args__ = (UniqueConstraint("business_id", "phone", name="uq_leads_business_phone"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    business_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    email = Column(String, nullable=False)
    service_interest = Column(String, nullable=False)
    status = Column(String, nullable=False, default="new")
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
