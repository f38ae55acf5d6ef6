"""Application configuration using Pydantic Settings."""

import json
from functools import lru_cache

import structlog
from pydantic import AliasChoices, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Worker Directory API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Database
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/worker_directory",
        description="PostgreSQL connection URL with asyncpg driver",
    )

    # Firebase identity
    firebase_project_id: str = Field(
        default="",
        description="Firebase project id (token audience). Parsed from the service account if empty.",
    )
    firebase_service_account_key: str = Field(
        default="",
        description="Firebase service account JSON blob",
    )

    # Local HS256 tokens (development and tests only)
    auth_dev_secret: str = Field(
        default="",
        description="Shared secret for locally-minted HS256 tokens. Leave empty in production.",
    )
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_minutes: int = Field(default=30)

    # Language model
    openai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("OPENAI_API_KEY", "AI_INTEGRATIONS_OPENAI_API_KEY"),
    )
    openai_base_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_BASE_URL", "AI_INTEGRATIONS_OPENAI_BASE_URL"),
    )
    openai_model: str = Field(default="gpt-4o-mini")
    openai_max_tokens: int = Field(default=1024)
    openai_timeout_seconds: float | None = Field(
        default=None,
        description="Per-call timeout for the language model. None waits indefinitely.",
    )
    profile_language: str = Field(
        default="Hebrew",
        description="Language the generated profile text is written in",
    )

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable/disable rate limiting (disable for tests)",
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed origins",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """Ensure the database URL uses the asyncpg driver scheme.

        Hosting providers supply a standard ``postgresql://`` URL.
        SQLAlchemy's async engine requires ``postgresql+asyncpg://``.
        """
        url = self.database_url
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    @computed_field  # type: ignore[prop-decorator]
    @property
    def resolved_firebase_project_id(self) -> str:
        """Project id from explicit config or from the service account blob."""
        if self.firebase_project_id:
            return self.firebase_project_id
        return parse_service_account_project_id(self.firebase_service_account_key)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def parse_service_account_project_id(raw: str) -> str:
    """Extract ``project_id`` from a service account JSON blob.

    Some hosts store the blob as a JSON-encoded string, so a quoted value is
    decoded twice. Returns an empty string when the blob is absent or invalid.
    """
    if not raw:
        return ""
    try:
        data = json.loads(raw)
        if isinstance(data, str):
            data = json.loads(data)
    except ValueError:
        logger.error("firebase_service_account_invalid", length=len(raw))
        return ""
    if not isinstance(data, dict):
        return ""
    return str(data.get("project_id") or "")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
