"""Business data DTOs."""

from typing import Optional

from pydantic import Field

from leadengine.application.dtos.base import DTO


class ServiceCatalogEntry(DTO):
    """One offering in a business's service catalog."""

    name: str
    description: Optional[str] = None
    price: Optional[str] = None
    manual_override: bool = Field(default=False, alias="manualOverride")
    benefits: Optional[str] = None
    features: Optional[str] = None
    timeline: Optional[str] = None


class BusinessContactDetails(DTO):
    """Public contact details of a business."""

    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


class FAQEntry(DTO):
    """Frequently asked question with its answer."""

    question: str
    answer: str
