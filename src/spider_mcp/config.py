"""Configuration using pydantic-settings."""

from pydantic_settings import BaseSettings

from .core.client import DEFAULT_API_BASE, DEFAULT_USER_AGENT
from .core.errors import ConfigurationError

API_KEYS_URL = "https://spider.cloud/api-keys"


class SpiderSettings(BaseSettings):
    """Server configuration, read once at startup."""

    api_key: str = ""
    api_base: str = DEFAULT_API_BASE
    timeout: float = 600.0  # crawls stream for a long time
    connect_timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    max_connections: int = 100
    max_keepalive_connections: int = 20
    connect_retries: int = 2
    log_level: str = "WARNING"

    model_config = {"env_prefix": "SPIDER_", "env_file": ".env", "extra": "ignore"}

    def require_api_key(self) -> str:
        """Return the API key or raise ConfigurationError if it is unset."""
        if not self.api_key:
            raise ConfigurationError(
                f"SPIDER_API_KEY environment variable is required. Get your key at {API_KEYS_URL}"
            )
        return self.api_key
