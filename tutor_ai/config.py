"""
Application configuration management.

Following Sandi Metz principles:
- Single Responsibility: Configuration loading and validation
- Small class: One settings block per upstream provider
- Clear naming: Descriptive property names
"""

from typing import Any, Callable, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tutor_ai.exceptions import ConfigurationError


class ProviderSettings(BaseModel):
    """
    Settings for one upstream AI provider.

    Immutable: switching the active model builds a new instance.
    """

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    enabled: bool = Field(default=False, description="Provider enabled")
    api_key: str = Field(default="", description="Bearer credential")
    base_url: str = Field(default="", description="API base URL")
    models: Dict[str, str] = Field(
        default_factory=dict, description="Model aliases (key -> model name)"
    )
    model_key: str = Field(default="default", description="Active model alias")
    max_tokens: int = Field(default=1000, ge=1, description="Max output tokens")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Temperature")
    timeout_seconds: float = Field(default=30.0, gt=0, description="Call timeout")

    @property
    def is_configured(self) -> bool:
        """Check enabled flag and credential presence."""
        return self.enabled and bool(self.api_key)

    @property
    def model(self) -> str:
        """Get the active model name."""
        return self.models.get(self.model_key, self.model_key)

    def with_model(self, model_key: str) -> "ProviderSettings":
        """
        Build settings with another active model.

        Args:
            model_key: Alias from the models table

        Returns:
            New settings instance

        Raises:
            ConfigurationError: If the alias is unknown
        """
        if model_key not in self.models:
            available = ", ".join(self.models.keys())
            raise ConfigurationError(
                f"Model key '{model_key}' not configured. Available: {available}"
            )
        return self.model_copy(update={"model_key": model_key})


def _gemini_defaults() -> ProviderSettings:
    return ProviderSettings(
        enabled=True,
        base_url="https://generativelanguage.googleapis.com/v1beta",
        models={"default": "gemini-1.5-flash", "advanced": "gemini-1.5-pro"},
        max_tokens=2048,
    )


def _groq_defaults() -> ProviderSettings:
    return ProviderSettings(
        enabled=True,
        base_url="https://api.groq.com/openai/v1",
        models={"default": "llama-3.1-8b-instant", "advanced": "llama-3.3-70b-versatile"},
    )


def _openai_defaults() -> ProviderSettings:
    return ProviderSettings(
        enabled=True,
        base_url="https://api.openai.com/v1",
        models={
            "default": "gpt-4o-mini",
            "mini": "gpt-4o-mini",
            "advanced": "gpt-4o",
            "turbo": "gpt-3.5-turbo",
        },
    )


def _deepseek_defaults() -> ProviderSettings:
    return ProviderSettings(
        base_url="https://api.deepseek.com/v1",
        models={"default": "deepseek-chat"},
    )


def _anthropic_defaults() -> ProviderSettings:
    return ProviderSettings(
        base_url="https://api.anthropic.com",
        models={
            "default": "claude-3-5-haiku-latest",
            "advanced": "claude-3-5-sonnet-latest",
        },
    )


_PROVIDER_DEFAULTS: Dict[str, Callable[[], ProviderSettings]] = {
    "gemini": _gemini_defaults,
    "groq": _groq_defaults,
    "openai": _openai_defaults,
    "deepseek": _deepseek_defaults,
    "anthropic": _anthropic_defaults,
}


class AppConfig(BaseSettings):
    """
    Application configuration with validation.

    Loads from environment variables with fallback to .env file.
    Nested provider settings use a double underscore, e.g. GEMINI__API_KEY.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = Field(default="TutorAI", description="Application name")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment"
    )
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Debug mode")

    # API settings
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="API port")

    # Redis settings
    redis_host: str = Field(default="localhost", description="Redis host")
    redis_port: int = Field(default=6379, ge=1, le=65535, description="Redis port")
    redis_db: int = Field(default=0, ge=0, le=15, description="Redis database")
    redis_password: str = Field(default="", description="Redis password")
    redis_max_connections: int = Field(default=10, ge=1, description="Max connections")
    redis_socket_timeout: float = Field(
        default=2.0, gt=0, description="Redis socket timeout (seconds)"
    )

    # Provider settings
    ai_provider_priority: str = Field(
        default="gemini,groq,openai", description="Fallback order of provider keys"
    )
    gemini: ProviderSettings = Field(default_factory=_gemini_defaults)
    groq: ProviderSettings = Field(default_factory=_groq_defaults)
    openai: ProviderSettings = Field(default_factory=_openai_defaults)
    deepseek: ProviderSettings = Field(default_factory=_deepseek_defaults)
    anthropic: ProviderSettings = Field(default_factory=_anthropic_defaults)

    # Retry settings
    retry_max_attempts: int = Field(default=3, ge=1, description="Attempts per provider")
    retry_initial_delay: float = Field(
        default=0.5, ge=0.0, description="First backoff delay (seconds)"
    )
    retry_max_delay: float = Field(default=10.0, ge=0.0, description="Backoff cap")
    retry_backoff_multiplier: float = Field(
        default=2.0, ge=1.0, description="Backoff growth factor"
    )

    # Rate limit settings
    rate_limit_enabled: bool = Field(default=True, description="Enable rate limiting")

    @model_validator(mode="before")
    @classmethod
    def merge_provider_defaults(cls, data: Any) -> Any:
        """Layer partial provider overrides on top of vendor defaults."""
        if not isinstance(data, dict):
            return data
        for key, factory in _PROVIDER_DEFAULTS.items():
            override = data.get(key)
            if isinstance(override, dict):
                data[key] = {**factory().model_dump(), **override}
        return data

    @property
    def provider_priority_list(self) -> List[str]:
        """Get provider priority as list of lowercase keys."""
        return [
            key.strip().lower()
            for key in self.ai_provider_priority.split(",")
            if key.strip()
        ]

    def provider_settings(self) -> Dict[str, ProviderSettings]:
        """Get settings of every known provider keyed by registry key."""
        return {key: getattr(self, key) for key in _PROVIDER_DEFAULTS}

    @property
    def redis_url(self) -> str:
        """Build Redis URL."""
        if self.redis_password:
            return (
                f"redis://:{self.redis_password}@"
                f"{self.redis_host}:{self.redis_port}/{self.redis_db}"
            )
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


# Global configuration instance
config = AppConfig()
