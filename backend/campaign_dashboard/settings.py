from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        extra="ignore",
    )

    app_name: str = "campaign-dashboard"
    environment: str = Field(default="local", validation_alias=AliasChoices("ENVIRONMENT", "CAMPAIGN_DASHBOARD_ENVIRONMENT"))
    log_level: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "CAMPAIGN_DASHBOARD_LOG_LEVEL"))
    database_url: str = Field(
        default="postgresql+asyncpg://postgres:postgres@db:5432/campaign_dashboard",
        validation_alias=AliasChoices("DATABASE_URL", "CAMPAIGN_DASHBOARD_DATABASE_URL"),
    )
    auto_create_schema: bool = Field(default=True, validation_alias=AliasChoices("AUTO_CREATE_SCHEMA", "CAMPAIGN_DASHBOARD_AUTO_CREATE_SCHEMA"))
    jwt_secret: str | None = Field(default=None, validation_alias=AliasChoices("JWT_SECRET", "CAMPAIGN_DASHBOARD_JWT_SECRET"))
    jwt_algorithm: str = Field(default="HS256", validation_alias=AliasChoices("JWT_ALGORITHM", "CAMPAIGN_DASHBOARD_JWT_ALGORITHM"))
    slack_webhook_url: str | None = Field(default=None, validation_alias=AliasChoices("SLACK_WEBHOOK_URL", "CAMPAIGN_DASHBOARD_SLACK_WEBHOOK_URL"))
    smtp_host: str | None = Field(default=None, validation_alias=AliasChoices("SMTP_HOST", "CAMPAIGN_DASHBOARD_SMTP_HOST"))
    smtp_port: int = Field(default=587, validation_alias=AliasChoices("SMTP_PORT", "CAMPAIGN_DASHBOARD_SMTP_PORT"))
    smtp_username: str | None = Field(default=None, validation_alias=AliasChoices("SMTP_USERNAME", "CAMPAIGN_DASHBOARD_SMTP_USERNAME"))
    smtp_password: str | None = Field(default=None, validation_alias=AliasChoices("SMTP_PASSWORD", "CAMPAIGN_DASHBOARD_SMTP_PASSWORD"))
    smtp_use_tls: bool = Field(default=True, validation_alias=AliasChoices("SMTP_USE_TLS", "CAMPAIGN_DASHBOARD_SMTP_USE_TLS"))
    smtp_sender: str = Field(default="noreply@campaign-dashboard.local", validation_alias=AliasChoices("SMTP_SENDER", "CAMPAIGN_DASHBOARD_SMTP_SENDER"))
    admin_email: str | None = Field(default=None, validation_alias=AliasChoices("ADMIN_EMAIL", "CAMPAIGN_DASHBOARD_ADMIN_EMAIL"))
    owner_email: str | None = Field(default=None, validation_alias=AliasChoices("OWNER_EMAIL", "CAMPAIGN_DASHBOARD_OWNER_EMAIL"))

    @property
    def async_database_url(self) -> str:
        if self.database_url.startswith("postgresql+"):
            return self.database_url
        if self.database_url.startswith("postgresql://"):
            return self.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return self.database_url

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
