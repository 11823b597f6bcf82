"""In-memory lead repository adapter."""

from typing import Optional

from leadengine.application.dtos.lead import Lead
from leadengine.application.ports.lead_repository import LeadRepository
from leadengine.domain.exceptions import LeadAlreadyExistsError


class InMemoryLeadRepository(LeadRepository):
    """In-memory implementation of lead repository, unique by (business_id, phone)."""

    def __init__(self) -> None:
        """Initialize in-memory repository."""
        self._storage: dict[tuple[str, str], Lead] = {}

    async def get_by_phone(self, business_id: str, phone: str) -> Optional[Lead]:
        """
        Get a lead by its (business_id, phone) key.

        Args:
            business_id: Business identifier
            phone: Normalized phone number

        Returns:
            Lead DTO, or None if not found
        """
        return self._storage.get((business_id, phone))

    async def add(self, lead: Lead) -> None:
        """
        Insert a new lead.

        Args:
            lead: Lead DTO to insert

        Raises:
            LeadAlreadyExistsError: If the key is already stored
        """
        key = (lead.business_id, lead.phone)
        # check-and-set without awaiting in between
        if key in self._storage:
            raise LeadAlreadyExistsError(lead.business_id, lead.phone)
        self._storage[key] = lead

    async def list(self) -> list[Lead]:
        """
        List all leads.

        Returns:
            List of all leads in insertion order
        """
        return list(self._storage.values())
