"""Record analytics events without affecting the conversation."""

from typing import Any, Callable, Optional

from leadengine.application.dtos.analytics import AnalyticsEvent
from leadengine.application.ports.analytics_tracker import AnalyticsTracker
from leadengine.domain.exceptions import PersistenceError


class RecordAnalyticsEvent:
    """Counts chat events; tracking failures are logged and never reach the visitor."""

    def __init__(
        self,
        analytics_tracker: AnalyticsTracker,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize analytics recording.

        Args:
            analytics_tracker: Analytics tracker
            logger: Optional logger function (business_id, event, **kwargs)
        """
        self._analytics_tracker = analytics_tracker
        self._logger = logger

    def _log(self, business_id: str, event: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger(business_id, event, **kwargs)

    async def execute(
        self,
        business_id: str,
        event: AnalyticsEvent,
        service: Optional[str] = None,
    ) -> bool:
        """
        Record one event.

        Args:
            business_id: Business identifier
            event: Event to count
            service: Service the event relates to

        Returns:
            True if the event was counted, False if tracking failed
        """
        try:
            await self._analytics_tracker.track(business_id, event, service)
        except PersistenceError as e:
            self._log(business_id, event.value, error=str(e))
            return False
        self._log(business_id, event.value, service=service)
        return True
