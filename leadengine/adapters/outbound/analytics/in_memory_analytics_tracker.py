"""In-memory analytics tracker adapter."""

from collections import defaultdict
from datetime import date, datetime, timezone
from typing import Optional

from leadengine.application.dtos.analytics import AnalyticsEvent, AnalyticsSummary, counter_updates
from leadengine.application.ports.analytics_tracker import AnalyticsTracker


class InMemoryAnalyticsTracker(AnalyticsTracker):
    """In-memory implementation of analytics tracker."""

    def __init__(self) -> None:
        """Initialize in-memory counters keyed by (business_id, day or None)."""
        self._counters: dict[tuple[str, Optional[date]], dict[tuple[str, str], int]] = defaultdict(
            lambda: defaultdict(int)
        )

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
        """
        day = day or datetime.now(timezone.utc).date()
        for metric_key in counter_updates(event, service):
            self._counters[(business_id, day)][metric_key] += 1
            self._counters[(business_id, None)][metric_key] += 1

    async def get_summary(self, business_id: str, day: Optional[date] = None) -> AnalyticsSummary:
        """
        Get the counters of a business.

        Args:
            business_id: Business identifier
            day: Day to read, or None for all-time counters

        Returns:
            Analytics summary
        """
        counters = dict(self._counters.get((business_id, day), {}))
        return AnalyticsSummary.from_counters(business_id, day, counters)
