"""
Application configuration using Pydantic Settings.

All configuration is loaded from environment variables and/or a .env file.
Sensitive data (passwords, API keys) should only come from environment.
"""

from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: SecretStr = SecretStr("postgres")
    database: str = "catalog"
    pool_size: int = 10
    pool_max_overflow: int = 20
    echo: bool = False

    # Full SQLAlchemy URL, overrides host/port/user/password/database
    url: Optional[str] = None

    @property
    def async_url(self) -> str:
        """Get async database URL for SQLAlchemy."""
        if self.url:
            return self.url
        pwd = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{pwd}@{self.host}:{self.port}/{self.database}"

    @property
    def is_sqlite(self) -> bool:
        return self.async_url.startswith("sqlite")


class MailSettings(BaseSettings):
    """Mail relay used for "new resource" notifications."""

    model_config = SettingsConfigDict(env_prefix="MAIL_")

    relay_url: Optional[str] = Field(
        default=None,
        description="HTTP endpoint accepting JSON mails. Notifications are skipped when unset.",
    )
    sender: str = "catalog@acme.com"
    recipient: str = "admin@acme.com"
    timeout: float = 10.0


class SecuritySettings(BaseSettings):
    """Security configuration."""

    model_config = SettingsConfigDict(env_prefix="SECURITY_")

    api_key: Optional[SecretStr] = Field(
        default=None,
        description="API key for REST API authentication"
    )
    cors_allowed_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins. "
                    "Use '*' only in development."
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "catalog-service"
    debug: bool = False
    environment: str = "development"

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    mail: MailSettings = Field(default_factory=MailSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)


# Cached settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings.

    Uses caching to avoid re-reading environment on every call.

    Returns:
        Settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def clear_settings_cache() -> None:
    """Clear settings cache (useful for testing)."""
    global _settings
    _settings = None
