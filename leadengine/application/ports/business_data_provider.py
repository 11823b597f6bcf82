"""Business data provider port."""

from abc import ABC, abstractmethod

from leadengine.application.dtos.business import (
    BusinessContactDetails,
    FAQEntry,
    ServiceCatalogEntry,
)


class BusinessDataProvider(ABC):
    """Port interface for read-only business data."""

    @abstractmethod
    async def get_services(self, business_id: str) -> list[ServiceCatalogEntry]:
        """
        Get the service catalog of a business.

        Args:
            business_id: Business identifier

        Returns:
            Catalog entries in catalog order

        Raises:
            ExternalServiceError: If the data source cannot be read
        """
        pass

    @abstractmethod
    async def get_contact_details(self, business_id: str) -> BusinessContactDetails:
        """
        Get the public contact details of a business.

        Args:
            business_id: Business identifier

        Returns:
            Contact details (fields may be empty)

        Raises:
            ExternalServiceError: If the data source cannot be read
        """
        pass

    @abstractmethod
    async def get_faqs(self, business_id: str) -> list[FAQEntry]:
        """
        Get the FAQs of a business.

        Args:
            business_id: Business identifier

        Returns:
            FAQ entries

        Raises:
            ExternalServiceError: If the data source cannot be read
        """
        pass

    @abstractmethod
    async def get_business_name(self, business_id: str) -> str:
        """
        Get the display name of a business.

        Args:
            business_id: Business identifier

        Returns:
            Display name, or an empty string when unknown
        """
        pass
