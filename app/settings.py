"""Application settings loaded from environment variables."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the tutor feedback service."""

    model_config = SettingsConfigDict(env_prefix="TUTOR_", extra="ignore")

    app_name: str = "Tutor Feedback API"
    log_level: str = "INFO"

    # Completion provider
    openai_model: str = Field(
        default="gpt-4o-mini",
        validation_alias=AliasChoices("TUTOR_OPENAI_MODEL", "OPENAI_MODEL"),
    )
    openai_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    openai_max_tokens: int | None = Field(default=None, gt=0)
    openai_timeout_seconds: float = Field(default=30.0, gt=0)

    # CORS configuration
    cors_allow_origins: str = Field(
        default="*",
        validation_alias=AliasChoices("TUTOR_CORS_ALLOW_ORIGINS", "CORS_ALLOW_ORIGINS"),
    )

    @property
    def cors_origin_list(self) -> list[str]:
        if self.cors_allow_origins.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]


settings = Settings()
