"""JSON-compatible (de)serialization of Session entities."""

from datetime import datetime, timezone
from typing import Any, Optional

from leadengine.domain.entities.session import ChatMessage, ServiceContext, Session
from leadengine.domain.value_objects.contact_info import ContactInfo
from leadengine.domain.value_objects.question_type import QuestionType


def _dt_to_str(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _str_to_dt(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _question_type(value: Optional[str]) -> Optional[QuestionType]:
    return QuestionType(value) if value else None


def _serialize_contact(contact: Optional[ContactInfo]) -> Optional[dict[str, Any]]:
    if contact is None:
        return None
    return {
        "name": contact.name,
        "phone": contact.phone,
        "email": contact.email,
        "extracted_at": _dt_to_str(contact.extracted_at),
    }


def _deserialize_contact(data: Optional[dict[str, Any]]) -> Optional[ContactInfo]:
    if data is None:
        return None
    return ContactInfo(
        name=data.get("name"),
        phone=data.get("phone"),
        email=data.get("email"),
        extracted_at=_str_to_dt(data.get("extracted_at")),
    )


def serialize_session(session: Session) -> dict[str, Any]:
    """
    Serialize a Session to a JSON-compatible dictionary.

    Args:
        session: Session entity

    Returns:
        Dictionary representation of the session
    """
    return {
        "session_id": session.session_id,
        "business_id": session.business_id,
        "messages": [
            {
                "role": message.role,
                "content": message.content,
                "timestamp": _dt_to_str(message.timestamp),
                "service_context": message.service_context,
                "question_type": message.question_type.value if message.question_type else None,
                "was_affirmative": message.was_affirmative,
                "previous_question": (
                    message.previous_question.value if message.previous_question else None
                ),
            }
            for message in session.messages
        ],
        "current_service": session.current_service,
        "mentioned_services": sorted(session.mentioned_services),
        "last_question": session.last_question.value if session.last_question else None,
        "service_context": {
            name: {
                "price_asked": context.price_asked,
                "introduction_given": context.introduction_given,
                "timeline_discussed": context.timeline_discussed,
                "booking_attempted": context.booking_attempted,
                "last_discussed_at": _dt_to_str(context.last_discussed_at),
            }
            for name, context in session.service_context.items()
        },
        "partial_contact_info": _serialize_contact(session.partial_contact_info),
        "contact_info": _serialize_contact(session.contact_info),
        "created_at": _dt_to_str(session.created_at),
        "last_interaction_time": _dt_to_str(session.last_interaction_time),
    }


def deserialize_session(data: dict[str, Any]) -> Session:
    """
    Deserialize a dictionary produced by serialize_session.

    Args:
        data: Dictionary representation of the session

    Returns:
        Session entity

    Raises:
        KeyError: If an identifier is missing
        ValueError: If a timestamp or question type cannot be parsed
    """
    now = datetime.now(timezone.utc)
    return Session(
        session_id=data["session_id"],
        business_id=data["business_id"],
        messages=[
            ChatMessage(
                role=item["role"],
                content=item["content"],
                timestamp=_str_to_dt(item.get("timestamp")) or now,
                service_context=item.get("service_context"),
                question_type=_question_type(item.get("question_type")),
                was_affirmative=bool(item.get("was_affirmative", False)),
                previous_question=_question_type(item.get("previous_question")),
            )
            for item in data.get("messages", [])
        ],
        current_service=data.get("current_service"),
        mentioned_services=set(data.get("mentioned_services", [])),
        last_question=_question_type(data.get("last_question")),
        service_context={
            name: ServiceContext(
                price_asked=bool(item.get("price_asked", False)),
                introduction_given=bool(item.get("introduction_given", False)),
                timeline_discussed=bool(item.get("timeline_discussed", False)),
                booking_attempted=bool(item.get("booking_attempted", False)),
                last_discussed_at=_str_to_dt(item.get("last_discussed_at")) or now,
            )
            for name, item in data.get("service_context", {}).items()
        },
        partial_contact_info=_deserialize_contact(data.get("partial_contact_info")) or ContactInfo(),
        contact_info=_deserialize_contact(data.get("contact_info")),
        created_at=_str_to_dt(data.get("created_at")) or now,
        last_interaction_time=_str_to_dt(data.get("last_interaction_time")) or now,
    )
