"""Lead DTOs."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field

from leadengine.application.dtos.base import DTO

DEFAULT_SERVICE_INTEREST = "General Inquiry"


class LeadStatus(str, Enum):
    """Lead lifecycle status."""

    NEW = "new"
    CONTACTED = "contacted"
    CONVERTED = "converted"


class Lead(DTO):
    """Captured prospective-customer record."""

    business_id: str
    name: str
    phone: str
    email: str
    service_interest: str = DEFAULT_SERVICE_INTEREST
    status: LeadStatus = LeadStatus.NEW
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class LeadCaptureStatus(str, Enum):
    """Result of a lead commit."""

    CREATED = "created"
    DUPLICATE = "duplicate"


class LeadCaptureOutcome(DTO):
    """Outcome of LeadCapture.commit."""

    status: LeadCaptureStatus
    message: str
    lead: Optional[Lead] = None


class LeadSubmission(DTO):
    """Direct lead submission payload."""

    name: str
    phone: str
    email: str
    service_interest: Optional[str] = Field(default=None, alias="serviceInterest")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "John Doe",
                "phone": "555-123-4567",
                "email": "john@example.com",
                "serviceInterest": "Veneers",
            }
        }
    )
