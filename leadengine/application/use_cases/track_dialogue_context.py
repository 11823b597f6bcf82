"""Dialogue context tracking."""

from datetime import datetime, timezone
from typing import Optional, Sequence

from leadengine.application.dtos.business import ServiceCatalogEntry
from leadengine.application.use_cases.classify_intent import IntentClassifier
from leadengine.application.use_cases.match_service import ServiceMatcher
from leadengine.domain.entities.session import USER_ROLE, ChatMessage, Session
from leadengine.domain.value_objects.question_type import QuestionType


class DialogueContextTracker:
    """
    Merges intent and service detection into a session's context.

    ``last_question`` is the only state of the dialogue. It follows the
    intent of the latest message, except that a bare affirmative answer to a
    previous question moves it to ``booking`` without running detection.
    """

    def __init__(
        self,
        intent_classifier: IntentClassifier,
        service_matcher: ServiceMatcher,
        max_messages: Optional[int] = None,
    ) -> None:
        """
        Initialize tracker.

        Args:
            intent_classifier: Classifier for question types
            service_matcher: Matcher for catalog services
            max_messages: Optional history cap override
        """
        self._intent_classifier = intent_classifier
        self._service_matcher = service_matcher
        self._max_messages = max_messages

    def _append(self, session: Session, message: ChatMessage) -> None:
        if self._max_messages:
            session.append_message(message, self._max_messages)
        else:
            session.append_message(message)

    def process(
        self,
        session: Session,
        message: str,
        catalog: Sequence[ServiceCatalogEntry] = (),
    ) -> Session:
        """
        Apply one user message to the session context.

        Args:
            session: Session to update in place
            message: Raw user message
            catalog: Service catalog of the session's business

        Returns:
            The updated session; its last history entry is the tagged user message
        """
        now = datetime.now(timezone.utc)

        if session.last_question is not None and self._intent_classifier.is_affirmative(message):
            previous_question = session.last_question
            session.last_question = QuestionType.BOOKING
            self._append(
                session,
                ChatMessage(
                    role=USER_ROLE,
                    content=message,
                    timestamp=now,
                    service_context=session.current_service,
                    question_type=QuestionType.BOOKING,
                    was_affirmative=True,
                    previous_question=previous_question,
                ),
            )
            session.touch()
            return session

        question_type = self._intent_classifier.classify(message)
        detected_service = self._service_matcher.match(message, catalog)

        if detected_service:
            session.current_service = detected_service
            session.mentioned_services.add(detected_service)
            session.get_or_create_service_context(detected_service).last_discussed_at = now

        if question_type is not None:
            if session.current_service:
                session.get_or_create_service_context(session.current_service).mark(question_type)
            session.last_question = question_type

        self._append(
            session,
            ChatMessage(
                role=USER_ROLE,
                content=message,
                timestamp=now,
                service_context=detected_service,
                question_type=question_type,
            ),
        )
        session.touch()
        return session
