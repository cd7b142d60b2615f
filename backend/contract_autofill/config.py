"""
Contract Autofill Configuration
Pydantic settings for environment variables.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./data/contracts.db"

    # AI APIs
    anthropic_api_key: str = ""
    openai_api_key: str = ""

    # Models
    openai_model: str = "gpt-4-turbo-preview"
    anthropic_model: str = "claude-3-5-sonnet-20241022"
    llm_temperature: float = 0.1
    llm_max_tokens: int = 4000
    default_llm_provider: str = "openai"

    # Uploads
    upload_dir: str = "uploads"
    max_file_size: int = 10 * 1024 * 1024

    # Application
    log_level: str = "INFO"
    debug: bool = False
    allowed_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
