"""Dependency injection factory functions."""

import os
from typing import Optional

from leadengine.adapters.outbound.analytics import (
    InMemoryAnalyticsTracker,
    PostgresAnalyticsTracker,
)
from leadengine.adapters.outbound.business_data.json_business_data_provider import (
    JSONBusinessDataProvider,
)
from leadengine.adapters.outbound.lead import InMemoryLeadRepository, PostgresLeadRepository
from leadengine.adapters.outbound.llm.openai_llm_client import OpenAILLMClient
from leadengine.adapters.outbound.session import (
    CachedSessionRepository,
    InMemorySessionRepository,
    PostgresSessionRepository,
    RedisSessionCache,
)
from leadengine.application.dtos.lexicon import Lexicon
from leadengine.application.ports.analytics_tracker import AnalyticsTracker
from leadengine.application.ports.business_data_provider import BusinessDataProvider
from leadengine.application.ports.lead_repository import LeadRepository
from leadengine.application.ports.llm_client import LLMClient
from leadengine.application.ports.session_repository import SessionRepository
from leadengine.application.use_cases.ai_fallback import GenerateAIFallbackReply
from leadengine.application.use_cases.capture_lead import LeadCapture
from leadengine.application.use_cases.handle_chat_turn_use_case import HandleChatTurnUseCase
from leadengine.application.use_cases.record_analytics_event import RecordAnalyticsEvent
from leadengine.application.use_cases.session_store import SessionStore
from leadengine.infrastructure.config.settings import settings
from leadengine.infrastructure.logging.logger import (
    log_analytics_event,
    log_chat_turn,
    log_lead_capture,
    log_session_event,
    logger,
)


def create_lexicon() -> Lexicon:
    """
    Factory function to create the lexicon.

    Returns:
        Lexicon loaded from LEXICON_PATH, or the defaults
    """
    return Lexicon.load(settings.lexicon_path or None)


def create_session_repository() -> SessionRepository:
    """
    Factory function to create session repository.

    Returns:
        SessionRepository instance, wrapped in a Redis cache when enabled
    """
    if settings.session_repository == "postgres":
        if not settings.database_url:
            raise ValueError("DATABASE_URL is required when SESSION_REPOSITORY=postgres")
        repository: SessionRepository = PostgresSessionRepository()
    else:
        repository = InMemorySessionRepository()

    if settings.session_cache_enabled and settings.redis_url:
        cache = RedisSessionCache(settings.redis_url, settings.session_ttl_seconds)
        return CachedSessionRepository(repository, cache)
    return repository


def create_session_store(repository: Optional[SessionRepository] = None) -> SessionStore:
    """
    Factory function to create the session store.

    Args:
        repository: Optional repository override

    Returns:
        SessionStore instance
    """
    return SessionStore(
        repository or create_session_repository(),
        ttl_seconds=settings.session_ttl_seconds,
        max_messages=settings.max_session_messages,
        retry_attempts=settings.persistence_retry_attempts,
        logger=log_session_event,
    )


def create_lead_repository() -> LeadRepository:
    """
    Factory function to create lead repository.

    Returns:
        LeadRepository instance
    """
    if settings.lead_repository == "postgres":
        if not settings.database_url:
            raise ValueError("DATABASE_URL is required when LEAD_REPOSITORY=postgres")
        return PostgresLeadRepository()
    return InMemoryLeadRepository()


def create_business_data_provider() -> BusinessDataProvider:
    """
    Factory function to create business data provider.

    Returns:
        BusinessDataProvider instance
    """
    path = settings.business_data_path
    if path and not os.path.isabs(path) and not os.path.exists(path):
        # Fall back to the bundled data file when run outside the project root
        path = None
    return JSONBusinessDataProvider(path or None)


def create_llm_client() -> Optional[LLMClient]:
    """
    Factory function to create LLM client if enabled.

    Returns:
        LLMClient instance if enabled, None otherwise
    """
    if not settings.llm_enabled:
        return None

    try:
        return OpenAILLMClient()
    except ValueError as e:
        logger.warning(f"LLM fallback disabled: {str(e)}")
        return None


def create_analytics_tracker() -> AnalyticsTracker:
    """
    Factory function to create analytics tracker.

    Returns:
        AnalyticsTracker instance
    """
    if settings.analytics_repository == "postgres":
        if not settings.database_url:
            raise ValueError("DATABASE_URL is required when ANALYTICS_REPOSITORY=postgres")
        return PostgresAnalyticsTracker()
    return InMemoryAnalyticsTracker()


def create_record_analytics_event(
    analytics_tracker: Optional[AnalyticsTracker] = None,
) -> RecordAnalyticsEvent:
    return RecordAnalyticsEvent(
        analytics_tracker or create_analytics_tracker(), logger=log_analytics_event
    )


def create_lead_capture(
    lead_repository: Optional[LeadRepository] = None,
    analytics: Optional[RecordAnalyticsEvent] = None,
) -> LeadCapture:
    """
    Factory function to create lead capture.

    Args:
        lead_repository: Optional repository override
        analytics: Optional analytics recorder for generated leads

    Returns:
        LeadCapture instance
    """
    return LeadCapture(
        lead_repository or create_lead_repository(),
        analytics=analytics,
        logger=log_lead_capture,
    )


def create_handle_chat_turn_use_case(
    session_store: Optional[SessionStore] = None,
    lead_repository: Optional[LeadRepository] = None,
    business_data_provider: Optional[BusinessDataProvider] = None,
    analytics: Optional[RecordAnalyticsEvent] = None,
) -> HandleChatTurnUseCase:
    """
    Factory function to create HandleChatTurnUseCase with dependencies.

    Args:
        session_store: Optional shared session store
        lead_repository: Optional shared lead repository
        business_data_provider: Optional business data provider override
        analytics: Optional shared analytics recorder

    Returns:
        HandleChatTurnUseCase instance
    """
    llm_client = create_llm_client()
    ai_fallback = (
        GenerateAIFallbackReply(llm_client, logger=log_chat_turn) if llm_client is not None else None
    )
    return HandleChatTurnUseCase(
        session_store or create_session_store(),
        business_data_provider or create_business_data_provider(),
        create_lead_capture(lead_repository, analytics),
        lexicon=create_lexicon(),
        ai_fallback=ai_fallback,
        analytics=analytics,
        logger=log_chat_turn,
    )
