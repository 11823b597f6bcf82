"""Domain exceptions."""


class LeadEngineError(Exception):
    """Base class for errors raised by the engine."""


class ValidationError(LeadEngineError):
    """Raised when inbound fields or lead preconditions are invalid."""


class SessionNotFoundError(LeadEngineError):
    """Raised when an update targets a session that does not exist."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id


class ExternalServiceError(LeadEngineError):
    """Raised when the business data provider or the LLM fails."""


class PersistenceError(LeadEngineError):
    """Raised when a session or lead write cannot be confirmed."""


class LeadAlreadyExistsError(LeadEngineError):
    """Raised by lead stores when (business_id, phone) is already taken."""

    def __init__(self, business_id: str, phone: str) -> None:
        super().__init__(f"Lead already exists for business {business_id}")
        self.business_id = business_id
        self.phone = phone
