"""Analytics tracker port."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from leadengine.application.dtos.analytics import AnalyticsEvent, AnalyticsSummary


class AnalyticsTracker(ABC):
    """Port interface for per-business chat analytics."""

    @abstractmethod
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
            service: Service the event relates to (lead events)
            day: Day to count against (defaults to today, UTC)

        Raises:
            PersistenceError: If the counters cannot be written
        """
        pass

    @abstractmethod
    async def get_summary(self, business_id: str, day: Optional[date] = None) -> AnalyticsSummary:
        """
        Get the counters of a business.

        Args:
            business_id: Business identifier
            day: Day to read, or None for all-time counters

        Returns:
            Analytics summary (zeros when nothing was tracked)
        """
        pass
