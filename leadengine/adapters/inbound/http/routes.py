"""HTTP and WebSocket routes."""

from datetime import datetime, timezone
from uuid import uuid4

from fastapi import APIRouter, HTTPException, Response, WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError as PydanticValidationError

from leadengine.adapters.outbound.session.serialization import serialize_session
from leadengine.application.dtos.chat import ChatRequest, ChatResponse
from leadengine.application.dtos.lead import LeadCaptureStatus, LeadSubmission
from leadengine.application.use_cases.extract_contact_info import format_contact_info
from leadengine.domain.exceptions import (
    LeadEngineError,
    PersistenceError,
    SessionNotFoundError,
    ValidationError,
)
from leadengine.domain.value_objects.contact_info import ContactInfo
from leadengine.infrastructure.config.settings import settings
from leadengine.infrastructure.logging.logger import log_turn, logger
from leadengine.infrastructure.wiring.dependencies import (
    create_analytics_tracker,
    create_handle_chat_turn_use_case,
    create_lead_capture,
    create_lead_repository,
    create_record_analytics_event,
    create_session_store,
)

router = APIRouter()

# Shared instances; the session store's reaper is started by the app lifespan
session_store = create_session_store()
_lead_repository = create_lead_repository()
_analytics_tracker = create_analytics_tracker()
_record_analytics = create_record_analytics_event(_analytics_tracker)
_lead_capture = create_lead_capture(_lead_repository, _record_analytics)
_handle_chat_turn_use_case = create_handle_chat_turn_use_case(
    session_store, _lead_repository, analytics=_record_analytics
)


def _to_http_error(error: LeadEngineError) -> HTTPException:
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, SessionNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, PersistenceError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Storage temporarily unavailable, please retry",
        )
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))


def _require_debug_mode() -> None:
    if not settings.debug_mode:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Debug endpoint is disabled",
        )


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> dict[str, str]:
    """
    Health check endpoint for liveness/readiness.

    Returns:
        Health status
    """
    return {"status": "ok"}


@router.post(
    "/chat",
    status_code=status.HTTP_200_OK,
    response_model=ChatResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def chat(request: ChatRequest) -> ChatResponse:
    """
    Handle one visitor message.

    Args:
        request: Chat request containing sessionId, businessId and message

    Returns:
        Chat response with the reply, detected service and question type

    Raises:
        HTTPException: 400 on blank fields, 404 on unknown session, 503 on storage failure
    """
    turn_id = str(uuid4())
    log_turn(
        session_id=request.session_id,
        turn_id=turn_id,
        component="http",
        business_id=request.business_id,
        message_length=len(request.message),
    )

    try:
        response = await _handle_chat_turn_use_case.execute(request, turn_id=turn_id)
    except LeadEngineError as e:
        log_turn(request.session_id, turn_id, "http", error=type(e).__name__)
        raise _to_http_error(e) from e

    if settings.debug_mode:
        response = response.model_copy(update={"debug": {"turn_id": turn_id}})

    log_turn(
        session_id=request.session_id,
        turn_id=turn_id,
        component="http",
        reply_length=len(response.response),
        question_type=response.question_type,
    )
    return response


@router.websocket("/ws/chat")
async def chat_websocket(websocket: WebSocket) -> None:
    """
    Chat over a WebSocket using the same JSON contract as POST /chat.

    Each inbound frame is ``{sessionId, businessId, message}``; each reply is
    ``{response, detectedService?, questionType?}`` or ``{"error": ...}``.
    """
    await websocket.accept()
    try:
        while True:
            payload = await websocket.receive_json()
            turn_id = str(uuid4())
            try:
                request = ChatRequest.model_validate(payload)
            except PydanticValidationError as e:
                await websocket.send_json({"error": "Invalid message", "details": e.errors()})
                continue

            try:
                response = await _handle_chat_turn_use_case.execute(request, turn_id=turn_id)
            except LeadEngineError as e:
                log_turn(request.session_id, turn_id, "websocket", error=type(e).__name__)
                await websocket.send_json({"error": _to_http_error(e).detail})
                continue

            await websocket.send_json(response.model_dump(by_alias=True, exclude_none=True))
    except WebSocketDisconnect:
        logger.info("WebSocket client disconnected")


@router.post("/businesses/{business_id}/leads", status_code=status.HTTP_201_CREATED)
async def submit_lead(business_id: str, submission: LeadSubmission, response: Response) -> dict:
    """
    Submit a lead directly (e.g. from a contact form).

    Args:
        business_id: Business identifier
        submission: Name, phone, email and optional service interest

    Returns:
        Lead capture outcome; 201 when created, 200 when the phone is already on file

    Raises:
        HTTPException: 400 if the submission is incomplete or the phone or email is invalid
    """
    contact = format_contact_info(
        ContactInfo(name=submission.name, phone=submission.phone, email=submission.email)
    )
    try:
        outcome = await _lead_capture.commit(business_id, contact, submission.service_interest)
    except LeadEngineError as e:
        raise _to_http_error(e) from e

    if outcome.status == LeadCaptureStatus.DUPLICATE:
        response.status_code = status.HTTP_200_OK
    return {
        "status": outcome.status.value,
        "message": outcome.message,
        "lead": outcome.lead.model_dump(mode="json") if outcome.lead else None,
    }


@router.get("/debug/session/{session_id}", status_code=status.HTTP_200_OK)
async def get_session_debug(session_id: str) -> dict:
    """
    Get a session (only enabled if DEBUG_MODE=true).

    Args:
        session_id: Session identifier

    Returns:
        Serialized session, or null if it does not exist
    """
    _require_debug_mode()
    session = await session_store.get(session_id)
    return {
        "session_id": session_id,
        "session": serialize_session(session) if session is not None else None,
    }


@router.post("/debug/session/{session_id}/reset", status_code=status.HTTP_200_OK)
async def reset_session(session_id: str) -> dict:
    """
    Expire a session immediately (only enabled if DEBUG_MODE=true).

    Args:
        session_id: Session identifier

    Returns:
        Confirmation message
    """
    _require_debug_mode()
    await session_store.expire(session_id)
    return {
        "session_id": session_id,
        "message": "Session reset successfully",
        "status": "reset",
    }


@router.get("/debug/leads", status_code=status.HTTP_200_OK)
async def get_leads_debug() -> dict:
    """
    Get all captured leads (only enabled if DEBUG_MODE=true).

    Returns:
        Captured leads and their count
    """
    _require_debug_mode()
    leads = await _lead_repository.list()
    return {
        "leads": [lead.model_dump(mode="json") for lead in leads],
        "count": len(leads),
    }


@router.get("/debug/analytics/{business_id}", status_code=status.HTTP_200_OK)
async def get_analytics_debug(business_id: str) -> dict:
    """
    Get today's and all-time chat counters of a business (only enabled if DEBUG_MODE=true).

    Args:
        business_id: Business identifier

    Returns:
        Today's and all-time summaries with their conversion rates
    """
    _require_debug_mode()
    today = datetime.now(timezone.utc).date()
    try:
        daily = await _analytics_tracker.get_summary(business_id, today)
        all_time = await _analytics_tracker.get_summary(business_id)
    except LeadEngineError as e:
        raise _to_http_error(e) from e
    return {
        "business_id": business_id,
        "today": {**daily.model_dump(mode="json"), "conversion_rate": daily.conversion_rate},
        "all_time": {**all_time.model_dump(mode="json"), "conversion_rate": all_time.conversion_rate},
    }
