"""Analytics outbound adapters."""

from leadengine.adapters.outbound.analytics.in_memory_analytics_tracker import (
    InMemoryAnalyticsTracker,
)
from leadengine.adapters.outbound.analytics.postgres_analytics_tracker import (
    PostgresAnalyticsTracker,
)

__all__ = ["InMemoryAnalyticsTracker", "PostgresAnalyticsTracker"]
