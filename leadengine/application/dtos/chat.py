"""Chat DTOs."""

from typing import Any, Optional

from pydantic import ConfigDict, Field, StrictStr

from leadengine.application.dtos.base import DTO


class ChatRequest(DTO):
    """Inbound chat message from a transport."""

    session_id: StrictStr = Field(alias="sessionId")
    business_id: StrictStr = Field(alias="businessId")
    message: StrictStr

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "sessionId": "5f0c2c8e-session",
                "businessId": "demo-dental",
                "message": "What's the price for Veneers?",
            }
        }
    )


class ChatResponse(DTO):
    """Outbound reply for a chat message."""

    response: str
    detected_service: Optional[str] = Field(default=None, alias="detectedService")
    question_type: Optional[str] = Field(default=None, alias="questionType")
    debug: Optional[dict[str, Any]] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "response": (
                    "For Veneers, the investment typically ranges from $800-$2,500 per tooth. "
                    "We offer flexible payment plans to fit your budget. To get your "
                    "personalized quote for Veneers, please share your name, phone number, "
                    "and email address."
                ),
                "detectedService": "Veneers",
                "questionType": "price",
            }
        }
    )
