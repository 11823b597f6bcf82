"""Lead repository port."""

from abc import ABC, abstractmethod
from typing import Optional

from leadengine.application.dtos.lead import Lead


class LeadRepository(ABC):
    """Port interface for lead repository."""

    @abstractmethod
    async def get_by_phone(self, business_id: str, phone: str) -> Optional[Lead]:
        """
        Get a lead by its (business_id, phone) key.

        Args:
            business_id: Business identifier
            phone: Normalized phone number

        Returns:
            Lead DTO, or None if not found
        """
        pass

    @abstractmethod
    async def add(self, lead: Lead) -> None:
        """
        Insert a new lead.

        Args:
            lead: Lead DTO to insert

        Raises:
            LeadAlreadyExistsError: If (business_id, phone) is already stored
            PersistenceError: If the write fails for any other reason
        """
        pass

    @abstractmethod
    async def list(self) -> list[Lead]:
        """
        List all leads.

        Returns:
            List of all leads (used for debug/demo purposes)
        """
        pass
