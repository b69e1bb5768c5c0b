from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Twelve Labs (video search provider)
    TWELVELABS_API_KEY: str | None = None
    TWELVELABS_BASE_URL: str = "https://api.twelvelabs.io/v1.3"

    # Allow a browser-supplied provider key when no server key is set
    ACCEPT_CLIENT_API_KEY: bool = True

    # OpenAI (prompt engineering)
    OPENAI_API_KEY: str | None = None
    PROMPT_ENGINEER_MODEL: str = "gpt-4o"

    # Provider call budgets
    SEARCH_PAGE_LIMIT: int = 10
    ANALYSIS_TIMEOUT_SECONDS: float = 1200.0
    TASK_POLL_INTERVAL_SECONDS: float = 5.0
    PROVIDER_HTTP_TIMEOUT_SECONDS: float = 60.0

    # App
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:5173",
        "https://master.d3velq4v6mncnz.amplifyapp.com",
    ]
    PORT: int = 3001
    LOG_LEVEL: str = "INFO"

    # API
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "ClipLens"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return settings
