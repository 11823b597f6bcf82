"""Chat session entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from leadengine.domain.value_objects.contact_info import ContactInfo
from leadengine.domain.value_objects.question_type import QuestionType

MAX_MESSAGES = 20

USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ChatMessage:
    """One entry of a session's history."""

    role: str
    content: str
    timestamp: datetime = field(default_factory=_utcnow)
    service_context: Optional[str] = None
    question_type: Optional[QuestionType] = None
    was_affirmative: bool = False
    previous_question: Optional[QuestionType] = None


@dataclass
class ServiceContext:
    """What has already been discussed about one service."""

    price_asked: bool = False
    introduction_given: bool = False
    timeline_discussed: bool = False
    booking_attempted: bool = False
    last_discussed_at: datetime = field(default_factory=_utcnow)

    def mark(self, question_type: QuestionType) -> None:
        """Set the flag that corresponds to a detected question type."""
        if question_type == QuestionType.PRICE:
            self.price_asked = True
        elif question_type == QuestionType.INTRODUCTION:
            self.introduction_given = True
        elif question_type == QuestionType.TIMELINE:
            self.timeline_discussed = True
        elif question_type == QuestionType.BOOKING:
            self.booking_attempted = True


@dataclass
class Session:
    """Conversation record for one chat session."""

    session_id: str
    business_id: str
    messages: list[ChatMessage] = field(default_factory=list)
    current_service: Optional[str] = None
    mentioned_services: set[str] = field(default_factory=set)
    last_question: Optional[QuestionType] = None
    service_context: dict[str, ServiceContext] = field(default_factory=dict)
    partial_contact_info: ContactInfo = field(default_factory=ContactInfo)
    contact_info: Optional[ContactInfo] = None
    created_at: datetime = field(default_factory=_utcnow)
    last_interaction_time: datetime = field(default_factory=_utcnow)

    def touch(self) -> None:
        """Refresh the last interaction timestamp."""
        self.last_interaction_time = _utcnow()

    def append_message(self, message: ChatMessage, max_messages: int = MAX_MESSAGES) -> None:
        """
        Append a history entry, evicting the oldest ones past the cap.

        Args:
            message: Entry to append
            max_messages: History cap
        """
        self.messages.append(message)
        if len(self.messages) > max_messages:
            del self.messages[: len(self.messages) - max_messages]

    def last_user_message(self) -> Optional[ChatMessage]:
        """Return the most recent user entry, if any."""
        for message in reversed(self.messages):
            if message.role == USER_ROLE:
                return message
        return None

    def get_or_create_service_context(self, service_name: str) -> ServiceContext:
        """Return the context for a service, creating it on first mention."""
        context = self.service_context.get(service_name)
        if context is None:
            context = ServiceContext()
            self.service_context[service_name] = context
        return context

    def is_expired(self, ttl_seconds: int, now: Optional[datetime] = None) -> bool:
        """Check whether the session has been idle longer than the TTL."""
        now = now or _utcnow()
        last_interaction = self.last_interaction_time
        if last_interaction.tzinfo is None:
            last_interaction = last_interaction.replace(tzinfo=timezone.utc)
        return (now - last_interaction).total_seconds() > ttl_seconds
