"""
Application configuration and environment variables.

This module unifies configuration using pydantic-settings.
Variables can come from:
1. .env file
2. System environment variables (have priority)
3. Default values

Naming convention:
- In Python code: snake_case (persistence_timeout_seconds)
- In .env or ENV vars: UPPER_CASE (PERSISTENCE_TIMEOUT_SECONDS)
- Pydantic automatically converts between both
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Unified application configuration.

    All variables can be defined in:
    - .env file: VARIABLE_NAME=value
    - Environment variables: export VARIABLE_NAME=value

    Example:
        # In .env or as environment variable:
        PROJECT_NAME=Tableside
        DEBUG=true
        LOG_LEVEL=INFO
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # Allows using uppercase or lowercase
        extra="ignore",  # Ignores extra variables in .env
    )

    # ============================================================================
    # PROJECT SETTINGS
    # ============================================================================
    project_name: str = Field(default="Tableside", description="Project name")
    project_description: str = Field(
        default="Dining service tracking for tables, orders and kitchen queues",
        description="Project description",
    )

    # ============================================================================
    # SERVER SETTINGS
    # ============================================================================
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")
    debug: bool = Field(default=False, description="Debug mode")
    enable_docs: bool = Field(
        default=False, description="Enable API documentation (Swagger/ReDoc)"
    )

    # ============================================================================
    # LOGGING SETTINGS
    # ============================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | trace_id={extra[trace_id]} | actor={extra[actor_id]} | {name}:{function}:{line} - {message}",  # noqa: E501
        description="Log format",
    )
    logger_enqueue: bool = Field(
        default=False, description="Enqueue logs using multiprocessing"
    )

    # ============================================================================
    # CORS SETTINGS
    # ============================================================================
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Allowed origins for CORS (comma-separated)",
    )
    cors_allowed_methods: str = Field(
        default="GET,POST,PATCH,DELETE,OPTIONS",
        description="Allowed HTTP methods for CORS",
    )
    cors_allowed_headers: str = Field(
        default="Content-Type,Authorization,X-User-Id,X-User-Role",
        description="Allowed headers for CORS",
    )

    # ============================================================================
    # INFRASTRUCTURE SETTINGS (table persistence)
    # ============================================================================
    infrastructure_provider: str = Field(
        default="local",
        description="Infrastructure provider (local, aws, azure)",
    )
    infrastructure_base_dir: str = Field(
        default="./.tableside",
        description="Base directory for local storage (tables, menu items, users)",
    )

    # AWS Infrastructure Configuration
    aws_region: str = Field(default="eu-west-1", description="AWS region")
    aws_dynamodb_table: str = Field(
        default="tableside-tables",
        description="DynamoDB table name for table aggregates",
    )
    auto_create_resources: bool = Field(
        default=False,
        description="Auto-create AWS resources (DynamoDB table) if missing",
    )

    # ============================================================================
    # CONCURRENCY SETTINGS
    # ============================================================================
    persistence_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Upper bound for a single persistence call",
    )
    max_conflict_retries: int = Field(
        default=3,
        ge=0,
        description="Extra attempts when a save loses a revision race",
    )

    # ============================================================================
    # NOTIFIER SETTINGS
    # ============================================================================
    notifier_provider: str = Field(
        default="memory",
        description="Notifier used for order-ready signals (memory, webhook)",
    )
    notifier_webhook_url: str = Field(
        default="http://localhost:5001",
        description="Base URL of the notification gateway (webhook provider)",
    )
    notifier_timeout_seconds: float = Field(
        default=2.0,
        gt=0,
        description="Timeout for a single notification delivery",
    )

    # ============================================================================
    # AUTH SETTINGS (identity is issued upstream)
    # ============================================================================
    user_id_header: str = Field(
        default="X-User-Id", description="Header carrying the caller user id"
    )
    user_role_header: str = Field(
        default="X-User-Role", description="Header carrying the caller role"
    )
    enforce_roles: bool = Field(
        default=True, description="Enforce role restrictions on order mutations"
    )
    order_create_roles: str = Field(
        default="waiter", description="Roles allowed to place orders"
    )
    order_update_roles: str = Field(
        default="cook,cash_desk",
        description="Roles allowed to update item preparation and processed state",
    )
    order_remove_roles: str = Field(
        default="waiter,cash_desk", description="Roles allowed to remove orders"
    )

    # ============================================================================
    # HELPER METHODS
    # ============================================================================

    def get_allowed_origins(self) -> list[str]:
        """
        Get list of allowed origins for CORS.

        Returns:
            list[str]: List of allowed origin URLs.
        """
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    def get_cors_allowed_methods(self) -> list[str]:
        """
        Get list of allowed HTTP methods for CORS.

        Returns:
            list[str]: List of allowed HTTP methods. Returns ["*"] if all methods are allowed.
        """
        if self.cors_allowed_methods == "*":
            return ["*"]
        return [method.strip() for method in self.cors_allowed_methods.split(",")]

    def get_cors_allowed_headers(self) -> list[str]:
        """
        Get list of allowed headers for CORS.

        Returns:
            list[str]: List of allowed headers. Returns ["*"] if all headers are allowed.
        """
        if self.cors_allowed_headers == "*":
            return ["*"]
        return [header.strip() for header in self.cors_allowed_headers.split(",")]

    def get_role_list(self, value: str) -> list[str]:
        """
        Split a comma-separated role setting.

        Args:
            value: Raw setting value (e.g. "cook,cash_desk")

        Returns:
            list[str]: Lowercased role names, empty entries dropped.
        """
        return [role.strip().lower() for role in value.split(",") if role.strip()]


# ============================================================================
# SINGLETON PATTERN - Global settings instance
# ============================================================================


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings (LRU cached).

    This function is cached, so the .env file is only read once.
    To refresh the configuration, clear the cache:
        get_settings.cache_clear()

    Usage:
        # In FastAPI endpoints (dependency injection):
        def my_endpoint(settings: Settings = Depends(get_settings)):
            print(settings.project_name)

        # In normal code (outside FastAPI):
        from tableside.config import get_settings
        settings = get_settings()
        print(settings.project_name)

    Returns:
        Settings: Application configuration instance.
    """
    return Settings()


# Global instance for use outside FastAPI
settings = get_settings()
