"""Lead capture use case."""

from typing import Any, Callable, Optional

from leadengine.application.dtos.analytics import AnalyticsEvent
from leadengine.application.dtos.lead import (
    DEFAULT_SERVICE_INTEREST,
    Lead,
    LeadCaptureOutcome,
    LeadCaptureStatus,
    LeadStatus,
)
from leadengine.application.ports.lead_repository import LeadRepository
from leadengine.application.use_cases.extract_contact_info import is_valid_email, is_valid_phone
from leadengine.application.use_cases.record_analytics_event import RecordAnalyticsEvent
from leadengine.application.use_cases.user_messages_en import UserMessagesEN
from leadengine.domain.exceptions import LeadAlreadyExistsError, ValidationError
from leadengine.domain.value_objects.contact_info import ContactInfo


class LeadCapture:
    """Commits complete contacts as leads, at most one per (business, phone)."""

    def __init__(
        self,
        lead_repository: LeadRepository,
        logger: Optional[Callable[..., None]] = None,
        analytics: Optional[RecordAnalyticsEvent] = None,
    ) -> None:
        """
        Initialize lead capture.

        Args:
            lead_repository: Repository for leads
            logger: Optional logger function (business_id, status, **kwargs)
            analytics: Optional analytics recorder for new leads
        """
        self._lead_repository = lead_repository
        self._logger = logger
        self._analytics = analytics

    def _log(self, business_id: str, status: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger(business_id, status, **kwargs)

    async def commit(
        self,
        business_id: str,
        contact: Optional[ContactInfo],
        service_interest: Optional[str] = None,
    ) -> LeadCaptureOutcome:
        """
        Create a lead for a complete contact unless one already exists.

        Args:
            business_id: Business the lead belongs to
            contact: Normalized, complete contact
            service_interest: Service the visitor asked about

        Returns:
            Outcome with status, lead and acknowledgement message

        Raises:
            ValidationError: If business_id is blank or the contact is incomplete or malformed
            PersistenceError: If the lead cannot be stored
        """
        if not isinstance(business_id, str) or not business_id.strip():
            raise ValidationError("business_id is required")
        if contact is None or not contact.is_complete():
            raise ValidationError("Complete contact info (name, phone, email) is required")
        if not is_valid_phone(contact.phone):
            raise ValidationError("Phone number must have at least 7 digits")
        if not is_valid_email(contact.email):
            raise ValidationError("Email address is not valid")

        existing = await self._lead_repository.get_by_phone(business_id, contact.phone)
        if existing is not None:
            return self._duplicate(existing)

        lead = Lead(
            business_id=business_id,
            name=contact.name.strip(),
            phone=contact.phone,
            email=contact.email,
            service_interest=service_interest or DEFAULT_SERVICE_INTEREST,
            status=LeadStatus.NEW,
        )
        try:
            await self._lead_repository.add(lead)
        except LeadAlreadyExistsError:
            existing = await self._lead_repository.get_by_phone(business_id, contact.phone)
            return self._duplicate(existing or lead)

        self._log(business_id, LeadCaptureStatus.CREATED.value, service=lead.service_interest)
        if self._analytics is not None:
            await self._analytics.execute(
                business_id, AnalyticsEvent.LEAD_GENERATED, lead.service_interest
            )
        return LeadCaptureOutcome(
            status=LeadCaptureStatus.CREATED,
            message=UserMessagesEN.lead_created(lead.name, lead.phone, lead.service_interest),
            lead=lead,
        )

    def _duplicate(self, lead: Lead) -> LeadCaptureOutcome:
        self._log(lead.business_id, LeadCaptureStatus.DUPLICATE.value, service=lead.service_interest)
        return LeadCaptureOutcome(
            status=LeadCaptureStatus.DUPLICATE,
            message=UserMessagesEN.lead_already_on_file(lead.name),
            lead=lead,
        )
