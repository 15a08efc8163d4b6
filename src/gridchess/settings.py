"""Application configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"

    # Frontend
    frontend_url: str = "http://localhost:5173"

    # Development mode
    dev_mode: bool = False

    # Game registry
    max_games: int = 1000
    stale_game_seconds: int = 3600

    # Names used when a game is created without explicit players
    default_white_name: str = "white"
    default_black_name: str = "black"

    @property
    def cors_origins(self) -> list[str]:
        """Origins allowed to call the API."""
        if self.dev_mode:
            return ["http://localhost:5173", "http://127.0.0.1:5173"]
        return [self.frontend_url]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
