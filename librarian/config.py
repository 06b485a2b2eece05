# librarian/config.py
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process configuration, read from the environment and an optional .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///librarian.db"
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # OpenLibrary
    openlibrary_url: str = "https://openlibrary.org/search.json"
    openlibrary_timeout: float = 10

    # Slack
    slack_bot_token: Optional[str] = None
    slack_signing_secret: Optional[str] = None
    slack_app_token: Optional[str] = None

    # Monitoring
    sentry_dsn: Optional[str] = None
    sentry_traces_sample_rate: float = 1.0
    log_level: str = "INFO"

    @field_validator("database_url")
    @classmethod
    def normalize_database_url(cls, url: str) -> str:
        # Heroku-style URLs are not accepted by SQLAlchemy 1.4+
        if url.startswith("postgres://"):
            return "postgresql://" + url[len("postgres://"):]
        return url

    def require_slack_credentials(self) -> None:
        """Fail fast when the bot is started without its Slack tokens."""
        missing = [
            name for name, value in (
                ("SLACK_BOT_TOKEN", self.slack_bot_token),
                ("SLACK_SIGNING_SECRET", self.slack_signing_secret),
                ("SLACK_APP_TOKEN", self.slack_app_token),
            )
            if not value
        ]
        if missing:
            raise ValueError(f"Missing Slack configuration: {', '.join(missing)}")


settings = Settings()
