"""SQLAlchemy ORM models for chat analytics."""

from sqlalchemy import Column, Integer, String, UniqueConstraint

from leadengine.adapters.outbound.session.models import Base

ALL_TIME_PERIOD = "all"


class AnalyticsCounterModel(Base):
    """One counter of a business for a day (ISO date) or all time."""

    __tablename__ = "analytics_counters"
    __table_args__ = (
        UniqueConstraint(
            "business_id", "period", "metric", "service", name="uq_analytics_counter"
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    business_id = Column(String, nullable=False, index=True)
    period = Column(String, nullable=False)
    metric = Column(String, nullable=False)
    service = Column(String, nullable=False, default="")
    count = Column(Integer, nullable=False, default=0)
