import urllib.parse
from pathlib import Path
from typing import Optional

import httpx
from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Site
    SITE_NAME: str = "0xos4ma"
    SITE_URL: str = "http://localhost:8000"
    DEFAULT_DESCRIPTION: str = "Cybersecurity insights"

    # Static resources (post index and markdown bodies)
    STATIC_BASE_URL: str = "http://localhost:8080"
    POSTS_INDEX_PATH: str = "data/posts.json"
    POSTS_CONTENT_DIR: str = "posts"

    # Blog pages
    SEARCH_DEBOUNCE_SECONDS: float = 0.3
    LATEST_POSTS_LIMIT: int = 3

    # Unset means fetches never time out
    FETCH_TIMEOUT: Optional[float] = None

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def fetch_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.FETCH_TIMEOUT)

    def post_url(self, post_id: str) -> str:
        quoted = urllib.parse.quote(post_id, safe="")
        return f"{self.SITE_URL.rstrip('/')}/post.html?id={quoted}"


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
