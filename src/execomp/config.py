"""Configuration management for execomp.

Loads the provider API key and engine settings from environment variables
using Pydantic. Secrets belong in .env (never hardcoded).

Usage:
    from execomp.config import settings

    print(settings.exchange)  # Validated at import
    print(settings.max_concurrent_requests)
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """execomp configuration from environment variables.

    Loads from .env file automatically. Validates on instantiation.
    The API key is optional at import so the engine can be used with an
    injected provider; the CLI refuses a live run without it.

    Attributes:
        service_api_key: CompanyInfo service API key
        company_info_base_url: Base URL of the CompanyInfo service
        exchange: Exchange screened by default
        compensation_multiple: Benchmark multiple an executive must clear
        max_concurrent_requests: Admission gate size for outgoing fetches
        cache_ttl_seconds: Lifetime of a read-through cache entry
        cache_ttl_jitter_seconds: Max random amount shaved off each entry's TTL
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown env vars
    )

    # Provider
    service_api_key: str | None = Field(
        default=None,
        min_length=1,
        description="CompanyInfo service API key",
    )
    company_info_base_url: str = Field(
        default="https://companyinfo.example.com",
        description="CompanyInfo service base URL",
    )
    provider_rate_limit: int = Field(default=10, ge=1, description="Provider requests/second")
    provider_timeout: float = Field(default=30.0, gt=0, description="Provider request timeout (seconds)")
    provider_max_retries: int = Field(default=6, ge=0, description="Retries on transient provider errors")

    # Engine
    exchange: str = Field(default="ASX", min_length=1, description="Default exchange symbol")
    compensation_multiple: float = Field(
        default=1.10,
        gt=0,
        description="Multiple of the industry benchmark an executive must reach",
    )
    max_concurrent_requests: int = Field(
        default=20,
        ge=1,
        le=200,
        description="Max outgoing fetches in flight at once",
    )

    # Cache
    cache_ttl_seconds: float = Field(default=3600.0, gt=0, description="Cache entry TTL (seconds)")
    cache_ttl_jitter_seconds: float = Field(
        default=0.0,
        ge=0,
        description="Random jitter subtracted from each entry's TTL (seconds)",
    )

    # System Settings
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("exchange")
    @classmethod
    def validate_exchange(cls, v: str) -> str:
        """Exchange symbols are upper-case."""
        return v.strip().upper()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid:
            raise ValueError(f"log_level must be one of {valid}, got {v}")
        return v_upper

    @field_validator("cache_ttl_jitter_seconds")
    @classmethod
    def validate_jitter(cls, v: float, info) -> float:
        """Jitter must leave every entry a positive lifetime."""
        ttl = info.data.get("cache_ttl_seconds")
        if ttl is not None and v >= ttl:
            raise ValueError("cache_ttl_jitter_seconds must be smaller than cache_ttl_seconds")
        return v


# Global settings instance — loaded once at import
settings = Settings()
