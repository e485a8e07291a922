"""Configuration for Pokedex BFF Service.

Uses Pydantic settings for environment-based configuration.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Defines application environments."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class PokedexBFFSettings(BaseSettings):
    """Configuration settings for Pokedex BFF Service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="POKEDEX_BFF_",
        case_sensitive=False,
        extra="ignore",
    )

    # Service identity
    SERVICE_NAME: str = "pokedex-bff-service"

    # Environment
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        validation_alias="ENVIRONMENT",
        description="Runtime environment for the service",
    )

    # HTTP server configuration
    HOST: str = Field(default="0.0.0.0", description="HTTP server host")
    PORT: int = Field(default=4102, description="HTTP server port")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # CORS configuration for frontend development
    CORS_ORIGINS: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:4173", "http://localhost:3000"],
        description="Allowed CORS origins for the frontend dev server",
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(
        default=True, description="Allow credentials in CORS requests"
    )
    CORS_ALLOW_METHODS: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        description="Allowed HTTP methods for CORS",
    )
    CORS_ALLOW_HEADERS: list[str] = Field(
        default=["*"], description="Allowed headers for CORS requests"
    )

    # Upstream catalog
    POKEAPI_BASE_URL: str = Field(
        default="https://pokeapi.co/api/v2",
        description="Base URL of the upstream Pokemon catalog API",
    )

    # HTTP client configuration
    HTTP_CLIENT_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        description="HTTP client request timeout in seconds",
    )
    HTTP_CLIENT_CONNECT_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="HTTP client connection timeout in seconds",
    )

    # Session tokens
    JWT_SECRET_KEY: SecretStr = Field(
        default=SecretStr("pokedex-dev-secret-change-me-in-production"),
        description="Process-wide secret used to sign session tokens",
    )
    JWT_ALGORITHM: str = Field(default="HS256", description="Session token signing algorithm")
    JWT_ACCESS_TOKEN_EXPIRES_SECONDS: int = Field(
        default=24 * 60 * 60,
        description="Default session token lifetime in seconds",
    )

    # The single login credential pair
    LOGIN_USERNAME: str = Field(default="admin", description="Fixed login username")
    LOGIN_PASSWORD: SecretStr = Field(
        default=SecretStr("admin"), description="Fixed login password"
    )

    # Listing defaults
    DEFAULT_PAGE_LIMIT: int = Field(
        default=50, ge=1, description="Page size used when the client omits limit"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid log level: {v}")
        return level

    def is_development(self) -> bool:
        return self.ENVIRONMENT == Environment.DEVELOPMENT


# Global settings instance
settings = PokedexBFFSettings()
