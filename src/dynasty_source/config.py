"""Configuration using pydantic-settings."""

from pydantic_settings import BaseSettings


class SourceSettings(BaseSettings):
    """Dynasty Scans source configuration."""

    base_url: str = "https://dynasty-scans.com"
    timeout: float = 10.0
    user_agent: str = "DynastySource/0.1 (+https://github.com/dynasty-source)"
    max_connections: int = 100
    max_keepalive_connections: int = 20

    # Outbound traffic policy, applied once per fetcher
    rate_limit: int = 5
    rate_limit_period: float = 1.0

    max_attempts: int = 4
    retry_delay: float = 1.0

    search_classes: list[str] = ["Series"]
    log_level: str = "INFO"

    model_config = {"env_prefix": "DYNASTY_"}


settings = SourceSettings()
