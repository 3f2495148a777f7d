"""Client configuration using Pydantic Settings."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


PRODUCTION_API_BASE_URL = "https://api.freeagent.com"
SANDBOX_API_BASE_URL = "https://api.sandbox.freeagent.com"


class FreeAgentSettings(BaseSettings):
    """FreeAgent client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FREEAGENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API
    api_base_url: str = PRODUCTION_API_BASE_URL
    sandbox: bool = False
    access_token: str = ""
    request_timeout: float = 30.0  # seconds

    # Cache
    cache_ttl: int = 300  # 5 minutes
    redis_url: Optional[str] = None

    debug: bool = False

    @property
    def base_url(self) -> str:
        """Effective API base URL, honouring the sandbox flag."""
        if self.sandbox and self.api_base_url == PRODUCTION_API_BASE_URL:
            return SANDBOX_API_BASE_URL
        return self.api_base_url.rstrip("/")


# Create settings instance
settings = FreeAgentSettings()
