from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_SITE_URL = "https://jfix.github.io/si-rss-generator"


class Settings(BaseSettings):
    news_url: str = "https://www.invader-spotter.art/news.php"
    site_url: str = DEFAULT_SITE_URL
    cache_path: str = "data/news-cache.html"
    docs_dir: str = "docs"
    feed_window_days: int = 90
    fetch_timeout: float = 30.0
    fetch_max_retries: int = 2
    run_interval_minutes: int = 60
    metrics_port: int = 9108
    log_level: str = "INFO"
    github_actions: bool = Field(default=False, alias="GITHUB_ACTIONS")

    @field_validator("site_url", mode="before")
    @classmethod
    def default_empty_site_url(cls, v: str) -> str:
        if not v or not v.strip():
            return DEFAULT_SITE_URL
        return v.rstrip("/")

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "env_file": ".env",
        "extra": "ignore",
        "populate_by_name": True,
    }


settings = Settings()
