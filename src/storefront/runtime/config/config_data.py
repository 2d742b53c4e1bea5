"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field


class CORSConfig(BaseModel):
    """Static CORS headers attached to every API response."""

    allow_origin: str = Field(default="*", description="Access-Control-Allow-Origin value")
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["Content-Type", "Authorization"])
    max_age: int = Field(default=86400, description="Preflight cache lifetime in seconds")


class RedisConfig(BaseModel):
    """Redis configuration model."""

    enabled: bool = Field(default=False, description="Enable Redis session storage")
    url: str = Field(default="", description="Redis connection URL")
    password: str | None = Field(
        default=None, description="Password for Redis authentication"
    )
    decode_responses: bool = Field(
        default=True, description="Decode Redis responses to strings"
    )

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the Redis connection string with password if provided."""
        if self.password and "@" not in self.url:
            parts = self.url.split("://", 1)
            if len(parts) == 2:
                scheme, rest = parts
                return f"{scheme}://:{self.password}@{rest}"
        return self.url


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str = Field(default="logs/app.log", description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Local catalog database configuration model."""

    url: str = Field(
        default="sqlite:///./data/catalog.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    seed_on_startup: bool = Field(
        default=True, description="Create tables and load sample data when empty"
    )

    @computed_field
    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class SanityConfig(BaseModel):
    """Sanity CMS connection settings."""

    project_id: str = Field(default="", description="Sanity project ID")
    dataset: str = Field(default="production", description="Sanity dataset")
    api_version: str = Field(default="2024-01-01", description="Sanity API version")
    token: str | None = Field(default=None, description="Sanity API write token")
    use_cdn: bool = Field(default=False, description="Read through the Sanity CDN")
    preview_secret: str = Field(
        default="", description="Shared secret required to enable draft mode"
    )
    timeout_seconds: float = Field(default=10.0, description="HTTP timeout")

    @computed_field
    @property
    def base_url(self) -> str:
        """Build the Sanity data API base URL for the configured project."""
        host = "apicdn.sanity.io" if self.use_cdn else "api.sanity.io"
        return f"https://{self.project_id}.{host}/v{self.api_version}"

    @property
    def is_configured(self) -> bool:
        return bool(self.project_id)


class ShopifyConfig(BaseModel):
    """Shopify store connection settings."""

    store_domain: str = Field(default="", description="myshopify.com store domain")
    admin_access_token: str | None = Field(
        default=None, description="Admin API access token"
    )
    storefront_access_token: str | None = Field(
        default=None, description="Storefront API access token"
    )
    api_version: str = Field(default="2024-01", description="Shopify API version")
    timeout_seconds: float = Field(default=10.0, description="HTTP timeout")

    @computed_field
    @property
    def admin_base_url(self) -> str:
        return f"https://{self.store_domain}/admin/api/{self.api_version}"

    @computed_field
    @property
    def storefront_url(self) -> str:
        return f"https://{self.store_domain}/api/{self.api_version}/graphql.json"


class AuthConfig(BaseModel):
    """Admin authentication and session settings."""

    session_max_age: int = Field(
        default=8 * 60 * 60, description="Admin session lifetime in seconds"
    )
    refresh_window_seconds: int = Field(
        default=5 * 60,
        description="Sessions expiring within this window should be refreshed",
    )
    cookie_name: str = Field(default="admin_session", description="Session cookie name")
    secure_cookies: bool = Field(
        default=True, description="Force secure cookies in production"
    )
    cookie_samesite: Literal["lax", "strict", "none"] = Field(
        default="lax", description="SameSite cookie attribute"
    )


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    redis: RedisConfig = Field(
        default_factory=RedisConfig, description="Redis configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    auth: AuthConfig = Field(
        default_factory=AuthConfig, description="Admin authentication configuration"
    )
    sanity: SanityConfig = Field(
        default_factory=SanityConfig, description="Sanity CMS configuration"
    )
    shopify: ShopifyConfig = Field(
        default_factory=ShopifyConfig, description="Shopify configuration"
    )

    def warn_on_missing_integrations(self) -> None:
        """Log which external integrations will be unavailable."""
        if not self.sanity.is_configured:
            logger.warning("Sanity project ID not configured; /api/products will fail")
        if not self.sanity.preview_secret:
            logger.warning("Sanity preview secret not configured; draft mode is disabled")
        if not self.shopify.store_domain:
            logger.warning("Shopify store domain not configured")
