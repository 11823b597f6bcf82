"""Structured logger for observability."""

import logging
from typing import Any, Optional

_logger = logging.getLogger("lead_capture_engine")
_logger.setLevel(logging.INFO)

if not _logger.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)


def _format_fields(fields: dict[str, Any]) -> str:
    return " | ".join(f"{k}={v!r}" for k, v in fields.items())


def log_turn(
    session_id: str,
    turn_id: str,
    component: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """
    Log structured event for a chat turn.

    Callers are responsible for redacting message text before it gets here.

    Args:
        session_id: Session identifier
        turn_id: Turn identifier (UUID string)
        component: Component name (e.g., 'http', 'use_case', 'lead_capture')
        level: Log level (default: INFO)
        **kwargs: Additional structured fields to log
    """
    fields = {
        "session_id": session_id,
        "turn_id": turn_id,
        "component": component,
    }
    fields.update(kwargs)
    _logger.log(level, _format_fields(fields))


def log_intent_detected(
    session_id: str,
    turn_id: str,
    intent: Optional[str],
    **kwargs: Any,
) -> None:
    """
    Log intent detection event.

    Args:
        session_id: Session identifier
        turn_id: Turn identifier
        intent: Detected question type, or None
        **kwargs: Additional fields
    """
    log_turn(
        session_id=session_id,
        turn_id=turn_id,
        component="intent_detection",
        intent_detected=intent,
        **kwargs,
    )


def log_service_detected(
    session_id: str,
    turn_id: str,
    service: Optional[str],
    **kwargs: Any,
) -> None:
    """
    Log service detection event.

    Args:
        session_id: Session identifier
        turn_id: Turn identifier
        service: Detected catalog service, or None
        **kwargs: Additional fields
    """
    log_turn(
        session_id=session_id,
        turn_id=turn_id,
        component="service_detection",
        service_detected=service,
        **kwargs,
    )


def log_contact_extraction(
    session_id: str,
    turn_id: str,
    name_present: bool,
    phone_present: bool,
    email_present: bool,
    **kwargs: Any,
) -> None:
    """
    Log which contact fields were found. Values are never logged.

    Args:
        session_id: Session identifier
        turn_id: Turn identifier
        name_present: Whether a name was extracted
        phone_present: Whether a phone number was extracted
        email_present: Whether an email was extracted
        **kwargs: Additional fields
    """
    log_turn(
        session_id=session_id,
        turn_id=turn_id,
        component="contact_extraction",
        name_present=name_present,
        phone_present=phone_present,
        email_present=email_present,
        **kwargs,
    )


def log_lead_capture(business_id: str, status: str, **kwargs: Any) -> None:
    """
    Log a lead commit outcome.

    Args:
        business_id: Business identifier
        status: Outcome status ('created' or 'duplicate')
        **kwargs: Additional fields
    """
    fields = {"component": "lead_capture", "business_id": business_id, "lead_status": status}
    fields.update(kwargs)
    _logger.info(_format_fields(fields))


def log_analytics_event(business_id: str, event: str, **kwargs: Any) -> None:
    """
    Log an analytics event, or the failure to record it.

    Args:
        business_id: Business identifier
        event: Event name
        **kwargs: Additional fields
    """
    level = logging.WARNING if "error" in kwargs else logging.INFO
    fields = {"component": "analytics", "business_id": business_id, "event": event}
    fields.update(kwargs)
    _logger.log(level, _format_fields(fields))


def log_session_event(session_id: str, event: str, **kwargs: Any) -> None:
    """
    Log a session store event (created, expired, reaped, save_retry, ...).

    Args:
        session_id: Session identifier
        event: Event name
        **kwargs: Additional fields
    """
    level = logging.WARNING if "error" in kwargs or event == "save_retry" else logging.INFO
    fields = {"component": "session_store", "session_id": session_id, "event": event}
    fields.update(kwargs)
    _logger.log(level, _format_fields(fields))


def log_chat_turn(session_id: str, turn_id: str, component: str, **kwargs: Any) -> None:
    """
    Route use case log events to the matching structured helper.

    Args:
        session_id: Session identifier
        turn_id: Turn identifier
        component: Component name emitted by the use case
        **kwargs: Event fields
    """
    if component == "intent_detection":
        log_intent_detected(session_id, turn_id, kwargs.pop("intent_detected", None), **kwargs)
    elif component == "service_detection":
        log_service_detected(session_id, turn_id, kwargs.pop("service_detected", None), **kwargs)
    elif component == "contact_extraction":
        log_contact_extraction(
            session_id,
            turn_id,
            kwargs.pop("name_present", False),
            kwargs.pop("phone_present", False),
            kwargs.pop("email_present", False),
            **kwargs,
        )
    else:
        level = logging.WARNING if "error" in kwargs else logging.INFO
        log_turn(session_id, turn_id, component, level=level, **kwargs)


# Export logger for direct use
logger = _logger
