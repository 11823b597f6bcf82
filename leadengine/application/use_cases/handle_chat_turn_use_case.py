"""Handle chat turn use case."""

import dataclasses
from typing import Any, Callable, Optional, Sequence

from leadengine.application.dtos.analytics import AnalyticsEvent
from leadengine.application.dtos.business import (
    BusinessContactDetails,
    FAQEntry,
    ServiceCatalogEntry,
)
from leadengine.application.dtos.chat import ChatRequest, ChatResponse
from leadengine.application.dtos.lexicon import Lexicon
from leadengine.application.ports.business_data_provider import BusinessDataProvider
from leadengine.application.use_cases.ai_fallback import GenerateAIFallbackReply
from leadengine.application.use_cases.capture_lead import LeadCapture
from leadengine.application.use_cases.classify_intent import IntentClassifier
from leadengine.application.use_cases.extract_contact_info import (
    ContactExtractor,
    format_contact_info,
)
from leadengine.application.use_cases.generate_response import ResponseGenerator
from leadengine.application.use_cases.match_service import ServiceMatcher
from leadengine.application.use_cases.pii_guard import PIIGuard
from leadengine.application.use_cases.record_analytics_event import RecordAnalyticsEvent
from leadengine.application.use_cases.session_store import SessionStore
from leadengine.application.use_cases.track_dialogue_context import DialogueContextTracker
from leadengine.domain.entities.session import ASSISTANT_ROLE, ChatMessage, Session
from leadengine.domain.exceptions import ExternalServiceError, ValidationError
from leadengine.domain.value_objects.contact_info import ContactInfo


class HandleChatTurnUseCase:
    """
    Processes one visitor message end to end.

    The whole turn runs under the session lock: load or create the session,
    track intent and service, capture contact details, pick a reply, then
    persist the context patch and the redacted user/assistant pair.
    Conversation events are recorded once the turn is stored.
    """

    def __init__(
        self,
        session_store: SessionStore,
        business_data_provider: BusinessDataProvider,
        lead_capture: LeadCapture,
        lexicon: Optional[Lexicon] = None,
        ai_fallback: Optional[GenerateAIFallbackReply] = None,
        analytics: Optional[RecordAnalyticsEvent] = None,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize handle chat turn use case.

        Args:
            session_store: Store owning session records
            business_data_provider: Provider for catalog, contact details and FAQs
            lead_capture: Lead capture use case
            lexicon: Keyword tables (defaults when omitted)
            ai_fallback: Optional LLM fallback for messages no rule places
            analytics: Optional recorder for conversation events
            logger: Optional logger function (session_id, turn_id, component, **kwargs)
        """
        lexicon = lexicon or Lexicon()
        self._session_store = session_store
        self._business_data_provider = business_data_provider
        self._lead_capture = lead_capture
        self._ai_fallback = ai_fallback
        self._analytics = analytics
        self._logger = logger
        self._intent_classifier = IntentClassifier(lexicon)
        self._service_matcher = ServiceMatcher(lexicon)
        self._tracker = DialogueContextTracker(
            self._intent_classifier,
            self._service_matcher,
            max_messages=session_store.max_messages,
        )
        self._contact_extractor = ContactExtractor(lexicon)
        self._pii_guard = PIIGuard(lexicon)
        self._response_generator = ResponseGenerator(lexicon)

    def _log(self, session_id: str, turn_id: str, component: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger(session_id, turn_id, component, **kwargs)

    async def execute(self, request: ChatRequest, turn_id: Optional[str] = None) -> ChatResponse:
        """
        Execute chat turn handling.

        Args:
            request: Chat request DTO
            turn_id: Optional turn identifier for logging

        Returns:
            Chat response DTO

        Raises:
            ValidationError: If a field is blank or the session belongs to another business
            PersistenceError: If the session or lead cannot be stored
        """
        turn_id = turn_id or "unknown"
        session_id = request.session_id.strip()
        business_id = request.business_id.strip()
        message = request.message
        if not session_id:
            raise ValidationError("sessionId is required")
        if not business_id:
            raise ValidationError("businessId is required")
        if not message.strip():
            raise ValidationError("message must not be empty")

        self._log(
            session_id,
            turn_id,
            "use_case",
            business_id=business_id,
            message=self._pii_guard.redact(message),
        )

        async with self._session_store.lock(session_id):
            session = await self._session_store.get_or_create(session_id, business_id)
            is_new = not session.messages
            if session.business_id != business_id:
                raise ValidationError("Session belongs to a different business")

            catalog = await self._load_catalog(session_id, turn_id, business_id)
            session = self._tracker.process(session, message, catalog or ())
            user_entry = session.messages[-1]
            question_type = user_entry.question_type
            detected_service = None if user_entry.was_affirmative else user_entry.service_context

            self._log(
                session_id,
                turn_id,
                "intent_detection",
                intent_detected=question_type.value if question_type else None,
                was_affirmative=user_entry.was_affirmative,
            )
            if detected_service:
                self._log(session_id, turn_id, "service_detection", service_detected=detected_service)

            completed = False
            reply = await self._capture_contact(session, message, catalog or (), turn_id)
            if reply is None:
                if session.contact_info is not None and self._intent_classifier.is_closing(
                    message
                ):
                    reply = self._response_generator.goodbye(session.contact_info)
                    completed = True
                elif catalog is None:
                    reply = self._response_generator.service_unavailable(
                        await self._contact_details(session_id, turn_id, business_id)
                    )
                elif session.current_service is None:
                    reply = await self._unplaced_reply(session, message, catalog, turn_id)
                else:
                    reply = self._response_generator.generate(session, catalog, question_type)

            await self._session_store.apply_patch(
                session_id,
                {
                    "current_service": session.current_service,
                    "mentioned_services": session.mentioned_services,
                    "last_question": session.last_question,
                    "service_context": session.service_context,
                    "partial_contact_info": session.partial_contact_info,
                    "contact_info": session.contact_info,
                },
            )
            await self._session_store.append_turn(
                session_id,
                dataclasses.replace(user_entry, content=self._pii_guard.redact(user_entry.content)),
                ChatMessage(
                    role=ASSISTANT_ROLE,
                    content=self._pii_guard.redact(reply),
                    service_context=session.current_service,
                ),
            )

        if self._analytics is not None:
            if is_new:
                await self._analytics.execute(business_id, AnalyticsEvent.NEW_CONVERSATION)
            if completed:
                await self._analytics.execute(
                    business_id, AnalyticsEvent.CONVERSATION_COMPLETED, session.current_service
                )

        self._log(
            session_id,
            turn_id,
            "use_case",
            current_service=session.current_service,
            last_question=session.last_question.value if session.last_question else None,
            reply=self._pii_guard.redact(reply),
        )

        return ChatResponse(
            response=reply,
            detected_service=detected_service,
            question_type=question_type.value if question_type else None,
        )

    async def _capture_contact(
        self,
        session: Session,
        message: str,
        catalog: Sequence[ServiceCatalogEntry],
        turn_id: str,
    ) -> Optional[str]:
        """
        Merge contact fragments from the message and commit a lead once complete.

        Returns:
            Reply for the contact exchange, or None if the message carries no contact details
        """
        extracted = self._contact_extractor.extract(message)
        if extracted is None:
            return None

        if extracted.name and any(
            extracted.name.lower() == entry.name.lower() for entry in catalog
        ):
            extracted = ContactInfo(phone=extracted.phone, email=extracted.email)
        if extracted.phone and not self._pii_guard.contains_potential_phone(message):
            # Digit runs such as order numbers or dates are not a phone number.
            extracted = ContactInfo(name=extracted.name, email=extracted.email)

        collecting = session.partial_contact_info.has_any() and session.contact_info is None
        has_signal = bool(
            extracted.phone
            or extracted.email
            or self._pii_guard.contains_potential_pii(message)
            or (collecting and extracted.name)
        )
        if not has_signal:
            return None

        merged = session.partial_contact_info.merge(format_contact_info(extracted))
        session.partial_contact_info = merged
        self._log(
            session.session_id,
            turn_id,
            "contact_extraction",
            name_present=bool(extracted.name),
            phone_present=bool(extracted.phone),
            email_present=bool(extracted.email),
            missing_fields=merged.missing_fields(),
        )

        if not merged.is_complete():
            return self._response_generator.ask_for_missing_contact(merged)

        outcome = await self._lead_capture.commit(
            session.business_id, merged, session.current_service
        )
        session.contact_info = merged
        self._log(
            session.session_id,
            turn_id,
            "lead_capture",
            lead_status=outcome.status.value,
            service_interest=outcome.lead.service_interest if outcome.lead else None,
        )
        return outcome.message

    async def _unplaced_reply(
        self,
        session: Session,
        message: str,
        catalog: Sequence[ServiceCatalogEntry],
        turn_id: str,
    ) -> str:
        faq_answer = self._response_generator.answer_faq(
            message, await self._load_faqs(session.session_id, turn_id, session.business_id)
        )
        if faq_answer:
            self._log(session.session_id, turn_id, "faq", faq_answered=True)
            return faq_answer

        question_type = session.messages[-1].question_type
        if self._ai_fallback is not None and question_type is None:
            self._log(session.session_id, turn_id, "ai_fallback", invoked=True)
            return await self._ai_fallback.execute(
                session,
                message,
                await self._business_name(session.session_id, turn_id, session.business_id),
                await self._contact_details(session.session_id, turn_id, session.business_id),
                catalog,
                turn_id=turn_id,
            )

        return self._response_generator.generate(session, catalog, question_type)

    async def _load_catalog(
        self, session_id: str, turn_id: str, business_id: str
    ) -> Optional[list[ServiceCatalogEntry]]:
        try:
            return await self._business_data_provider.get_services(business_id)
        except ExternalServiceError as e:
            self._log(session_id, turn_id, "business_data", error=str(e), resource="services")
            return None

    async def _load_faqs(self, session_id: str, turn_id: str, business_id: str) -> list[FAQEntry]:
        try:
            return await self._business_data_provider.get_faqs(business_id)
        except ExternalServiceError as e:
            self._log(session_id, turn_id, "business_data", error=str(e), resource="faqs")
            return []

    async def _business_name(self, session_id: str, turn_id: str, business_id: str) -> str:
        try:
            return await self._business_data_provider.get_business_name(business_id)
        except ExternalServiceError as e:
            self._log(session_id, turn_id, "business_data", error=str(e), resource="name")
            return ""

    async def _contact_details(
        self, session_id: str, turn_id: str, business_id: str
    ) -> Optional[BusinessContactDetails]:
        try:
            return await self._business_data_provider.get_contact_details(business_id)
        except ExternalServiceError as e:
            self._log(session_id, turn_id, "business_data", error=str(e), resource="contact")
            return None
