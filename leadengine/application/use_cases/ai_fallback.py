"""AI fallback reply for messages the rules cannot place."""

import asyncio
from typing import Any, Callable, Optional, Sequence

from leadengine.application.dtos.business import BusinessContactDetails, ServiceCatalogEntry
from leadengine.application.ports.llm_client import LLMClient
from leadengine.application.use_cases.user_messages_en import UserMessagesEN
from leadengine.domain.entities.session import USER_ROLE, Session
from leadengine.domain.exceptions import ExternalServiceError

HISTORY_CONTEXT_MESSAGES = 6


def build_system_prompt(
    business_name: str,
    contact_details: Optional[BusinessContactDetails],
    services: Sequence[ServiceCatalogEntry],
) -> str:
    """
    Build the business context prompt for the LLM.

    Args:
        business_name: Display name of the business
        contact_details: Public contact details, if known
        services: Service catalog

    Returns:
        System prompt text
    """
    name = business_name or "our business"
    lines = [
        f"You are a friendly, professional assistant for {name}.",
        "Answer briefly and only about this business and its services.",
        "Never invent prices or services that are not listed below.",
        "When the visitor shows interest, invite them to share their name, phone number, "
        "and email address so the team can follow up.",
    ]
    if contact_details is not None:
        if contact_details.phone:
            lines.append(f"Business phone: {contact_details.phone}")
        if contact_details.email:
            lines.append(f"Business email: {contact_details.email}")
        if contact_details.address:
            lines.append(f"Business address: {contact_details.address}")
    if services:
        lines.append("Services offered:")
        for service in services:
            detail = f" ({service.price})" if service.price else ""
            lines.append(f"- {service.name}{detail}")
    return "\n".join(lines)


class GenerateAIFallbackReply:
    """Asks the LLM for a reply when no rule produced one."""

    def __init__(
        self,
        llm_client: LLMClient,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize AI fallback.

        Args:
            llm_client: LLM client
            logger: Optional logger function (session_id, turn_id, component, **kwargs)
        """
        self._llm_client = llm_client
        self._logger = logger

    async def execute(
        self,
        session: Session,
        message: str,
        business_name: str,
        contact_details: Optional[BusinessContactDetails],
        services: Sequence[ServiceCatalogEntry],
        turn_id: str = "unknown",
    ) -> str:
        """
        Generate a fallback reply.

        Args:
            session: Current session (history is sent as context)
            message: Raw user message
            business_name: Display name of the business
            contact_details: Public contact details, if known
            services: Service catalog
            turn_id: Turn identifier for logging

        Returns:
            LLM reply, or a fixed apology if the LLM fails
        """
        system_prompt = build_system_prompt(business_name, contact_details, services)
        earlier = session.messages
        if earlier and earlier[-1].role == USER_ROLE and earlier[-1].content == message:
            # The current message is sent separately as the user turn.
            earlier = earlier[:-1]
        history = [
            {"role": entry.role, "content": entry.content}
            for entry in earlier[-HISTORY_CONTEXT_MESSAGES:]
        ]
        try:
            return await asyncio.to_thread(
                self._llm_client.generate_reply,
                system_prompt,
                message,
                {"history": history},
            )
        except ExternalServiceError as e:
            if self._logger:
                self._logger(session.session_id, turn_id, "ai_fallback", error=str(e))
            return UserMessagesEN.AI_FALLBACK_APOLOGY
