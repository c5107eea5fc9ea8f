"""
Application settings and configuration management.
"""
from typing import Literal, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Server Configuration
    server_host: str = Field(default="0.0.0.0", description="Server host")
    server_port: int = Field(default=8000, description="Server port")
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment"
    )
    log_level: str = Field(default="INFO", description="Log level")

    # LLM providers, tried in this order by the gateway
    llm_providers: str = Field(
        default="openai,gemini", description="Comma-separated provider priority"
    )

    # OpenAI API
    openai_api_key: str = Field(default="", description="OpenAI API key")
    openai_org_id: str = Field(default="", description="OpenAI organization ID")

    # Google Gemini API
    gemini_api_key: str = Field(default="", description="Gemini API key")

    # Evaluation
    evaluation_config_path: str = Field(
        default="", description="Path to evaluation_config.yaml (empty = bundled default)"
    )
    default_strategy: Optional[Literal["fixed_weight", "brand_first"]] = Field(
        default=None, description="Default aggregation strategy (overrides YAML)"
    )
    agent_timeout_seconds: Optional[float] = Field(
        default=None, description="Per-agent deadline in seconds (overrides YAML)"
    )

    # Monitoring
    enable_metrics: bool = Field(default=True, description="Enable Prometheus metrics")
    enable_structured_logging: bool = Field(
        default=True, description="Enable structured JSON logging"
    )

    @property
    def provider_order(self) -> list[str]:
        """Provider names in priority order."""
        return [p.strip().lower() for p in self.llm_providers.split(",") if p.strip()]


# Global settings instance
settings = Settings()
