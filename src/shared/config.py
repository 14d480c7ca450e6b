"""
Application configuration using Pydantic Settings.
Loads from environment variables and .env file.
"""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # MongoDB
    mongodb_uri: str = Field(default="mongodb://localhost:27017")
    mongodb_database: str = Field(default="career_coach")

    # Auth
    jwt_secret: SecretStr = Field(default=SecretStr("change-me"))
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_days: int = Field(default=7)
    bcrypt_rounds: int = Field(default=12, description="bcrypt cost factor")

    # OpenAI / LLM
    openai_api_key: SecretStr = Field(default=SecretStr(""))
    llm_models: str = Field(
        default="gpt-4o-mini,gpt-4o,gpt-4.1-mini",
        description="Comma-separated list of models, tried in order",
    )
    llm_temperature: float = Field(default=0.3)
    llm_max_tokens: int = Field(default=2000)

    @property
    def llm_models_list(self) -> list[str]:
        """Parse comma-separated model names into a list."""
        return [m.strip() for m in self.llm_models.split(",") if m.strip()]

    @property
    def llm_configured(self) -> bool:
        return bool(self.openai_api_key.get_secret_value())

    # Resume parsing
    resume_max_bytes: int = Field(default=5 * 1024 * 1024, description="Max upload size")
    resume_prompt_chars: int = Field(
        default=8000, description="Resume characters sent to the LLM"
    )

    # Recommendations
    recommendations_limit: int = Field(default=20)

    # API server
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=5000)
    frontend_url: str = Field(default="http://localhost:3001")

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
