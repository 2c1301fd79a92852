"""Application settings and configuration.

This module defines all configuration options for the mediator service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="TSS Mediator", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Listener configuration
    host: str = Field(default="0.0.0.0", alias="MEDIATOR_HOST")
    port: int = Field(default=8080, alias="MEDIATOR_PORT")
    websocket_path: str = Field(default="/websocket/ws", alias="MEDIATOR_WEBSOCKET_PATH")

    # CORS configuration
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_log_level(self) -> str:
        """Return the log level, forcing DEBUG when debug mode is on."""
        if self.debug:
            return "DEBUG"
        return self.log_level.upper()


settings = Settings()
