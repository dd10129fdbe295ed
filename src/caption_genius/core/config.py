from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    environment: str = "dev"
    base_url: str = "http://localhost:8000"
    secret_key: str = "change-me"

    database_url: str = "sqlite:///./caption_genius.db"

    access_token_exp_minutes: int = 60 * 24

    openai_api_key: str | None = None
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o-mini"
    openai_timeout_seconds: float = 30.0
    caption_temperature: float = 0.7
    caption_max_tokens: int = 150

    daily_caption_quota: int = 30
    quota_window_hours: int = 24
    signup_credits: int = 0

    seed_default_niches: bool = True


settings = Settings()
