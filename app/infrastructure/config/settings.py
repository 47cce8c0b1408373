"""Application settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    debug_mode: bool = False
    llm_provider: str = "openai"  # openai or gemini
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_timeout_seconds: int = 60
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    intent_check_temperature: float = 0.1
    persona_repository: str = "static"  # static or postgres
    session_record_repository: str = "in_memory"  # in_memory or postgres
    database_url: str = ""  # Required when either repository is postgres
    redis_url: str = "redis://localhost:6379/0"
    session_record_cache_enabled: bool = False
    session_record_cache_ttl_seconds: int = 3600
    live_context_ttl_seconds: int = 86400  # 24 hours default
    live_context_max_sessions: int = 1000
    cors_allow_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
    )


settings = Settings()
