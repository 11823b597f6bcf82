"""Postgres-backed analytics tracker adapter."""

from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from leadengine.application.dtos.analytics import AnalyticsEvent, AnalyticsSummary, counter_updates
from leadengine.application.ports.analytics_tracker import AnalyticsTracker
from leadengine.domain.exceptions import PersistenceError
from leadengine.infrastructure.db import get_db_session
from leadengine.infrastructure.logging.logger import logger

from .models import ALL_TIME_PERIOD, AnalyticsCounterModel

# A concurrent first insert of the same counter is retried once
TRACK_ATTEMPTS = 2


def _period(day: Optional[date]) -> str:
    return day.isoformat() if day else ALL_TIME_PERIOD


class PostgresAnalyticsTracker(AnalyticsTracker):
    """Postgres implementation of analytics tracker."""

    def _increment(self, db: Session, business_id: str, period: str, metric: str, service: str) -> None:
        updated = (
            db.query(AnalyticsCounterModel)
            .filter(
                AnalyticsCounterModel.business_id == business_id,
                AnalyticsCounterModel.period == period,
                AnalyticsCounterModel.metric == metric,
                AnalyticsCounterModel.service == service,
            )
            .update(
                {AnalyticsCounterModel.count: AnalyticsCounterModel.count + 1},
                synchronize_session=False,
            )
        )
        if not updated:
            db.add(
                AnalyticsCounterModel(
                    business_id=business_id,
                    period=period,
                    metric=metric,
                    service=service,
                    count=1,
                )
            )
            db.flush()

    async def track(
        self,
        business_id: str,
        event: AnalyticsEvent,
        service: Optional[str] = None,
        day: Optional[date] = None,
    ) -> None:
        """
        Count an event for the given day and for all time.

        Args:
            business_id: Business identifier
            event: Event to count
            service: Service the event relates to
            day: Day to count against (defaults to today, UTC)

        Raises:
            PersistenceError: If the counters cannot be written
        """
        day = day or datetime.now(timezone.utc).date()
        db: Session = get_db_session()
        try:
            for attempt in range(1, TRACK_ATTEMPTS + 1):
                try:
                    for metric, service_key in counter_updates(event, service):
                        for period in (_period(day), ALL_TIME_PERIOD):
                            self._increment(db, business_id, period, metric, service_key)
                    db.commit()
                    return
                except IntegrityError as e:
                    db.rollback()
                    if attempt == TRACK_ATTEMPTS:
                        raise PersistenceError("Could not track analytics event") from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while tracking {event.value} for {business_id}: {str(e)}")
            raise PersistenceError("Could not track analytics event") from e
        finally:
            db.close()

    async def get_summary(self, business_id: str, day: Optional[date] = None) -> AnalyticsSummary:
        """
        Get the counters of a business.

        Args:
            business_id: Business identifier
            day: Day to read, or None for all-time counters

        Returns:
            Analytics summary

        Raises:
            PersistenceError: If the database cannot be queried
        """
        db: Session = get_db_session()
        try:
            models = (
                db.query(AnalyticsCounterModel)
                .filter(
                    AnalyticsCounterModel.business_id == business_id,
                    AnalyticsCounterModel.period == _period(day),
                )
                .all()
            )
            counters = {(model.metric, model.service): model.count for model in models}
            return AnalyticsSummary.from_counters(business_id, day, counters)
        except SQLAlchemyError as e:
            logger.error(f"Database error while reading analytics for {business_id}: {str(e)}")
            raise PersistenceError("Could not read analytics") from e
        finally:
            db.close()
