"""Application configuration."""
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Browser
    browser_headless: bool = True
    browser_executable_path: str | None = None
    browser_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36"
    )
    viewport_width: int = 1920
    viewport_height: int = 1080

    # Navigation / extraction timing (milliseconds unless noted)
    navigation_timeout_ms: int = 30000
    navigation_attempts: int = 2
    navigation_backoff_seconds: float = 2.0
    settle_delay_ms: int = 3000
    section_timeout_ms: int = 5000
    list_section_timeout_ms: int = 10000

    # Redis
    redis_url: str = "redis://localhost:6379/0"
    title_cache_ttl: int = 24 * 60 * 60
    trending_cache_ttl: int = 60 * 60

    # Background Tasks
    trending_url: str = "https://www.imdb.com/chart/moviemeter/"
    trending_refresh_hours: int = 6

    # API
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:3001"]
    log_level: str = "INFO"


settings = Settings()
