"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Engine settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="SDUI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Decoding limits
    max_document_size: int = Field(default=512 * 1024, gt=0, description="Max document size (bytes)")
    max_json_depth: int = Field(default=64, gt=0, description="Max JSON nesting depth")
    repair_json: bool = Field(default=False, description="Repair broken JSON before decoding")

    # Caching
    enable_cache: bool = Field(default=True, description="Cache decoded trees by document")
    cache_size: int = Field(default=64, gt=0, description="Cache max size")
    cache_ttl: int | None = Field(default=None, gt=0, description="Cache TTL (seconds)")

    # Dispatcher
    default_route: str = Field(default="home", description="Route used when navigate has none")
    dialog_state_key: str = Field(default="currentDialog", description="State key for dialog payload")
    dispatch_history_size: int = Field(default=100, gt=0, description="Transition log length")

    # Network collaborator
    api_base_url: str = Field(default="", description="Base URL for relative API calls")
    api_timeout: float = Field(default=10.0, gt=0, description="API request timeout (seconds)")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
