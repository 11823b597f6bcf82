"""Chat analytics DTOs."""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import Field

from leadengine.application.dtos.base import DTO

TOTAL_CONVERSATIONS = "total_conversations"
COMPLETED_CONVERSATIONS = "completed_conversations"
TOTAL_LEADS = "total_leads"
LEADS_BY_SERVICE = "leads_by_service"


class AnalyticsEvent(str, Enum):
    """Chat events counted per business."""

    NEW_CONVERSATION = "new_conversation"
    LEAD_GENERATED = "lead_generated"
    CONVERSATION_COMPLETED = "conversation_completed"


def counter_updates(event: AnalyticsEvent, service: Optional[str] = None) -> list[tuple[str, str]]:
    """
    Map an event to the counters it increments.

    Args:
        event: Tracked event
        service: Service the event relates to, if any

    Returns:
        (metric, service) pairs; service is "" for business-wide counters
    """
    if event == AnalyticsEvent.NEW_CONVERSATION:
        return [(TOTAL_CONVERSATIONS, "")]
    if event == AnalyticsEvent.CONVERSATION_COMPLETED:
        return [(COMPLETED_CONVERSATIONS, "")]
    updates = [(TOTAL_LEADS, "")]
    if service and service.strip():
        updates.append((LEADS_BY_SERVICE, service.strip()))
    return updates


class AnalyticsSummary(DTO):
    """Counters of one business for one day, or all-time when day is None."""

    business_id: str
    day: Optional[date] = None
    total_conversations: int = 0
    completed_conversations: int = 0
    total_leads: int = 0
    leads_by_service: dict[str, int] = Field(default_factory=dict)

    @property
    def conversion_rate(self) -> float:
        """Leads per conversation as a percentage, capped at 100."""
        if self.total_conversations <= 0:
            return 0.0
        return min(self.total_leads / self.total_conversations * 100, 100.0)

    @classmethod
    def from_counters(
        cls,
        business_id: str,
        day: Optional[date],
        counters: dict[tuple[str, str], int],
    ) -> "AnalyticsSummary":
        """Build a summary from (metric, service) -> count pairs."""
        return cls(
            business_id=business_id,
            day=day,
            total_conversations=counters.get((TOTAL_CONVERSATIONS, ""), 0),
            completed_conversations=counters.get((COMPLETED_CONVERSATIONS, ""), 0),
            total_leads=counters.get((TOTAL_LEADS, ""), 0),
            leads_by_service={
                service: count
                for (metric, service), count in counters.items()
                if metric == LEADS_BY_SERVICE
            },
        )
