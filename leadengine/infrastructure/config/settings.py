"""Application settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    debug_mode: bool = False
    session_ttl_seconds: int = 172800  # 48 hours
    max_session_messages: int = 20
    session_reaper_interval_seconds: int = 300
    session_repository: str = "in_memory"  # in_memory or postgres
    session_cache_enabled: bool = False
    redis_url: str = "redis://localhost:6379/0"
    lead_repository: str = "in_memory"  # in_memory or postgres
    analytics_repository: str = "in_memory"  # in_memory or postgres
    database_url: str = ""  # Required when any repository setting is postgres
    persistence_retry_attempts: int = 1
    business_data_path: str = "data/businesses.json"
    lexicon_path: str = ""  # Optional JSON override of the default lexicon
    llm_enabled: bool = False
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_timeout_seconds: int = 10

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
    )


settings = Settings()
