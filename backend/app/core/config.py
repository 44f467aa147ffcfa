"""Application configuration via pydantic settings."""

import logging
import secrets
from functools import lru_cache
from pathlib import Path

from typing import Annotated, Any

from pydantic import Field
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger(__name__)

_MIN_PRODUCTION_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Typed application configuration."""

    app_env: str = Field("local", alias="APP_ENV")
    app_name: str = Field("Fleet Inventory API", alias="APP_NAME")
    api_v1_prefix: str = "/api/v1"

    database_url: str = Field(
        "sqlite+aiosqlite:///./fleet.db", alias="DATABASE_URL"
    )
    sync_database_url: str | None = Field(default=None, alias="SYNC_DATABASE_URL")
    db_auto_create: bool | None = Field(default=None, alias="DB_AUTO_CREATE")

    jwt_secret_key: str = Field(default="", alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    jwt_issuer: str = Field("FleetInventoryAPI", alias="JWT_ISSUER")
    jwt_audience: str = Field("FleetInventoryApp", alias="JWT_AUDIENCE")
    access_token_expire_hours: int = Field(24, alias="ACCESS_TOKEN_EXPIRE_HOURS", ge=1)

    password_min_length: int = Field(6, alias="PASSWORD_MIN_LENGTH", ge=1)
    lockout_max_failed_attempts: int = Field(
        5, alias="LOCKOUT_MAX_FAILED_ATTEMPTS", ge=1
    )
    lockout_duration_minutes: int = Field(5, alias="LOCKOUT_DURATION_MINUTES", ge=1)
    password_reset_token_expire_hours: int = Field(
        24, alias="PASSWORD_RESET_TOKEN_EXPIRE_HOURS", ge=1
    )
    password_reset_expose_token: bool = Field(
        default=True, alias="PASSWORD_RESET_EXPOSE_TOKEN"
    )
    default_roles: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["User"], alias="DEFAULT_ROLES"
    )

    bootstrap_admin_email: str | None = Field(
        default=None, alias="BOOTSTRAP_ADMIN_EMAIL"
    )
    bootstrap_admin_password: str | None = Field(
        default=None, alias="BOOTSTRAP_ADMIN_PASSWORD"
    )

    redis_url: str | None = Field(default=None, alias="REDIS_URL")
    rate_limit_default: str = Field("100/minute", alias="RATE_LIMIT_DEFAULT")
    rate_limit_login: str = Field("10/minute", alias="RATE_LIMIT_LOGIN")

    smtp_host: str | None = Field(default=None, alias="SMTP_HOST")
    smtp_port: int | None = Field(default=None, alias="SMTP_PORT")
    smtp_username: str | None = Field(default=None, alias="SMTP_USER")
    smtp_password: str | None = Field(default=None, alias="SMTP_PASSWORD")
    smtp_from: str | None = Field(default=None, alias="SMTP_FROM")

    cors_allow_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "https://localhost:5173",
        ],
        alias="CORS_ALLOW_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[3] / ".env",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() in {"production", "prod"}

    @property
    def auto_create_schema(self) -> bool:
        if self.db_auto_create is None:
            return not self.is_production
        return self.db_auto_create

    @model_validator(mode="after")
    def _check_signing_secret(self) -> "Settings":
        """Refuse to run production without an explicit signing secret."""

        if self.is_production:
            if len(self.jwt_secret_key) < _MIN_PRODUCTION_SECRET_LENGTH:
                raise ValueError(
                    "JWT_SECRET_KEY must be set to at least "
                    f"{_MIN_PRODUCTION_SECRET_LENGTH} characters in production"
                )
            # reset tokens go through the mailer only
            object.__setattr__(self, "password_reset_expose_token", False)
        elif not self.jwt_secret_key:
            logger.warning(
                "JWT_SECRET_KEY is not set; using an ephemeral secret. "
                "Issued tokens will not survive a restart."
            )
            object.__setattr__(self, "jwt_secret_key", secrets.token_urlsafe(48))
        return self

    @field_validator("cors_allow_origins", "default_roles", mode="before")
    @classmethod
    def _split_csv(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]
