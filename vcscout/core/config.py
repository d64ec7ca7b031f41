"""
Configuration management for VC Scout.

Provides centralized, validated configuration from environment variables
with proper type checking and defaults.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _parse_bool(v) -> bool:
    if isinstance(v, str):
        return v.lower() in ("1", "true", "yes", "y")
    return bool(v)


class LLMConfig(BaseSettings):
    """Completion service configuration."""

    openai_api_key: Optional[str] = Field(default=None, alias="OPENAI_API_KEY")
    model: str = Field(default="gpt-4o-mini", alias="OPENAI_CHAT_MODEL")
    temperature: float = Field(default=0.7, alias="LLM_TEMPERATURE")
    max_tokens: int = Field(default=1000, alias="LLM_MAX_TOKENS")
    timeout_seconds: float = Field(default=30.0, alias="LLM_TIMEOUT_SECONDS")
    json_mode: bool = Field(default=True, alias="LLM_JSON_MODE")

    @field_validator("openai_api_key", mode="before")
    @classmethod
    def blank_key_is_missing(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("json_mode", mode="before")
    @classmethod
    def parse_json_mode(cls, v):
        return _parse_bool(v)

    model_config = SettingsConfigDict(env_prefix="", extra="ignore", populate_by_name=True)


class FetchConfig(BaseSettings):
    """Company website fetch configuration."""

    timeout_seconds: float = Field(default=10.0, alias="FETCH_TIMEOUT_SECONDS")
    user_agent: str = Field(
        default="Mozilla/5.0 (compatible; VCScoutBot/1.0; +https://vcscout.dev/bot)",
        alias="FETCH_USER_AGENT",
    )
    max_chars: int = Field(default=15000, alias="CONTENT_MAX_CHARS")

    model_config = SettingsConfigDict(env_prefix="", extra="ignore", populate_by_name=True)


class CacheConfig(BaseSettings):
    """Enrichment cache configuration."""

    ttl_seconds: int = Field(default=3600, alias="ENRICHMENT_CACHE_TTL_SECONDS")

    model_config = SettingsConfigDict(env_prefix="", extra="ignore", populate_by_name=True)


class Settings(BaseSettings):
    """Main application settings."""

    # Environment
    environment: str = Field(default="production", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")

    # Service runtime
    service_host: str = Field(default="127.0.0.1", alias="SERVICE_HOST")
    service_port: int = Field(default=8080, alias="SERVICE_PORT")

    # Component configurations
    llm: LLMConfig = Field(default_factory=LLMConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)

    @field_validator("debug", mode="before")
    @classmethod
    def parse_debug(cls, v):
        return _parse_bool(v)

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


# Global settings instance
settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global settings
    settings = None


def validate_required_settings(config: Optional[Settings] = None) -> List[str]:
    """
    Validate that credentials needed for enrichment are present.

    Returns:
        List of missing required settings
    """
    config = config or get_settings()
    missing = []
    if not config.llm.openai_api_key:
        missing.append("OPENAI_API_KEY")
    return missing


def print_configuration_summary(console=None):
    """Print a summary of the current configuration for debugging."""
    config = get_settings()
    write = console.print if console is not None else print
    write("=== VC Scout Configuration Summary ===")
    write(f"Environment: {config.environment}")
    write(f"Debug Mode: {config.debug}")
    write(f"Service: {config.service_host}:{config.service_port}")
    write("")
    write(f"OpenAI: {'✓' if config.llm.openai_api_key else '✗'}")
    write(f"  Model: {config.llm.model}")
    write(f"  Temperature: {config.llm.temperature}")
    write(f"  Max Tokens: {config.llm.max_tokens}")
    write(f"  Timeout: {config.llm.timeout_seconds}s")
    write(f"  JSON Mode: {'✓' if config.llm.json_mode else '✗'}")
    write("")
    write(f"Fetch Timeout: {config.fetch.timeout_seconds}s")
    write(f"Content Budget: {config.fetch.max_chars} chars")
    write(f"Cache TTL: {config.cache.ttl_seconds}s")
    write("=" * 38)
