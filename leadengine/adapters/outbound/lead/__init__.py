"""Lead repository adapters."""

from leadengine.adapters.outbound.lead.in_memory_lead_repository import InMemoryLeadRepository
from leadengine.adapters.outbound.lead.postgres_lead_repository import PostgresLeadRepository

__all__ = [
    "InMemoryLeadRepository",
    "PostgresLeadRepository",
]
