"""
Settings for signed-token.

The parsing and validation core never reads the environment; settings only
feed the JWKS resolver factory and ``TokenValidator.from_settings``.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TokenSettings(BaseSettings):
    """Environment-driven settings (prefix ``SIGNED_TOKEN_``)."""

    model_config = SettingsConfigDict(
        env_prefix="SIGNED_TOKEN_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Logging
    log_level: str = Field(default="info")
    json_logs: bool = Field(default=True)

    # Default validation options
    check_expiration: bool = Field(default=True)
    check_not_before: bool = Field(default=True)
    issuer: Optional[str] = Field(default=None)
    audience: Optional[str] = Field(default=None)

    # Remote key set
    jwks_url: Optional[str] = Field(default=None)
    jwks_cache_ttl: int = Field(default=3600, ge=0)
    jwks_http_timeout: float = Field(default=5.0, gt=0)
    jwks_max_attempts: int = Field(default=3, ge=1)
    jwks_retry_base_delay: float = Field(default=0.5, ge=0)


@lru_cache(maxsize=1)
def get_settings() -> TokenSettings:
    """Get the process-wide settings instance."""
    return TokenSettings()
