"""
Configuration Management for Task Tracker
=========================================

This module handles all application configuration using the Settings pattern
with Pydantic. Values come from environment variables (prefixed with
TASKTRACKER_), an optional .env file, and the defaults defined here.

Design Pattern: Singleton-like Settings
We use a cached function to ensure we only load settings once,
but still allow for easy testing with different configurations.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Example: TASKTRACKER_API_PORT=8080

    Priority order (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values defined here
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKTRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =================================================================
    # Document Store (Redis)
    # =================================================================
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Connection URL of the Redis server holding users and tasks"
    )

    key_prefix: str = Field(
        default="tasktracker",
        description="Namespace prepended to every storage key"
    )

    redis_connect_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Seconds to wait for the initial connection at startup"
    )

    # =================================================================
    # Authentication
    # =================================================================
    jwt_secret_key: str = Field(
        default="change-me-in-production",
        description="Shared secret used to sign and verify session tokens"
    )

    jwt_algorithm: str = Field(
        default="HS256",
        description="JWT signing algorithm"
    )

    jwt_access_token_expire_minutes: Optional[int] = Field(
        default=None,
        ge=1,
        description="""
        Lifetime of issued session tokens in minutes.

        None issues tokens without an `exp` claim, so they never expire.
        """
    )

    bcrypt_rounds: int = Field(
        default=10,
        ge=4,
        le=31,
        description="bcrypt cost factor (log2 of the number of rounds)"
    )

    enforce_task_ownership: bool = Field(
        default=False,
        description="""
        Restrict task operations to the owner of the task.

        When enabled, creating, listing, updating and deleting tasks requires
        a valid token whose user owns the targeted tasks (403 otherwise).
        Disabled by default: any authenticated user may modify any task and
        task lists are public.
        """
    )

    # =================================================================
    # API Server
    # =================================================================
    api_host: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP server binds to"
    )

    api_port: int = Field(
        default=4001,
        description="Port the HTTP server listens on"
    )

    api_debug: bool = Field(
        default=False,
        description="Enable uvicorn auto-reload and verbose logging"
    )

    cors_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed to call the API from a browser"
    )

    cors_allow_credentials: bool = Field(
        default=True,
        description="Whether CORS responses allow credentials"
    )

    # =================================================================
    # Logging Configuration
    # =================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )

    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Python logging format string"
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached singleton).

    For testing, you can clear the cache:
        get_settings.cache_clear()

    Returns:
        Settings: Application settings instance
    """
    return Settings()


def get_settings_for_testing(**overrides) -> Settings:
    """
    Create a Settings instance with custom values for testing.

    Example:
        settings = get_settings_for_testing(enforce_task_ownership=True)

    Args:
        **overrides: Setting values to override

    Returns:
        Settings: New Settings instance with overrides applied
    """
    return Settings(**overrides)
