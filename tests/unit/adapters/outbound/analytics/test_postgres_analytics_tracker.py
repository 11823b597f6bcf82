"""Unit tests for Postgres analytics tracker using SQLite in-memory."""

from datetime import date
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from leadengine.adapters.outbound.analytics.models import AnalyticsCounterModel
from leadengine.adapters.outbound.analytics.postgres_analytics_tracker import (
    PostgresAnalyticsTracker,
)
from leadengine.adapters.outbound.session.models import Base
from leadengine.application.dtos.analytics import AnalyticsEvent
from leadengine.domain.exceptions import PersistenceError


@pytest.fixture
def sqlite_engine():
    """Create SQLite in-memory engine for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session_factory(sqlite_engine):
    """Create a session factory bound to the SQLite engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=sqlite_engine)


@pytest.fixture
def tracker(session_factory, monkeypatch):
    """Create Postgres tracker with SQLite in-memory database for testing."""
    monkeypatch.setattr(
        "leadengine.adapters.outbound.analytics.postgres_analytics_tracker.get_db_session",
        lambda: session_factory(),
    )
    return PostgresAnalyticsTracker()


@pytest.mark.asyncio
async def test_track_increments_day_and_all_time_rows(tracker, session_factory):
    """Test that repeated events update the same counter rows."""
    day = date(2024, 5, 13)
    for _ in range(3):
        await tracker.track("demo-dental", AnalyticsEvent.NEW_CONVERSATION, day=day)

    db = session_factory()
    rows = {(row.period, row.metric): row.count for row in db.query(AnalyticsCounterModel).all()}
    db.close()

    assert rows == {
        ("2024-05-13", "total_conversations"): 3,
        ("all", "total_conversations"): 3,
    }


@pytest.mark.asyncio
async def test_get_summary_reads_leads_by_service(tracker):
    """Test the summary of one day and of all time."""
    day = date(2024, 5, 13)
    await tracker.track("demo-dental", AnalyticsEvent.NEW_CONVERSATION, day=day)
    await tracker.track("demo-dental", AnalyticsEvent.NEW_CONVERSATION, day=date(2024, 5, 14))
    await tracker.track("demo-dental", AnalyticsEvent.LEAD_GENERATED, "Veneers", day=day)
    await tracker.track("demo-dental", AnalyticsEvent.LEAD_GENERATED, "Braces", day=day)

    daily = await tracker.get_summary("demo-dental", day)
    all_time = await tracker.get_summary("demo-dental")

    assert daily.day == day
    assert daily.total_conversations == 1
    assert daily.total_leads == 2
    assert daily.conversion_rate == 100.0
    assert all_time.day is None
    assert all_time.total_conversations == 2
    assert all_time.leads_by_service == {"Veneers": 1, "Braces": 1}
    assert all_time.conversion_rate == 100.0


@pytest.mark.asyncio
async def test_database_error_raises_persistence_error(monkeypatch):
    """Test that database failures surface as PersistenceError."""
    broken_session = MagicMock()
    broken_session.query.side_effect = OperationalError("SELECT", {}, Exception("down"))
    monkeypatch.setattr(
        "leadengine.adapters.outbound.analytics.postgres_analytics_tracker.get_db_session",
        lambda: broken_session,
    )
    tracker = PostgresAnalyticsTracker()

    with pytest.raises(PersistenceError):
        await tracker.track("demo-dental", AnalyticsEvent.NEW_CONVERSATION)
    with pytest.raises(PersistenceError):
        await tracker.get_summary("demo-dental")
    broken_session.rollback.assert_called()
    broken_session.close.assert_called()
