"""Application settings, read from the environment (prefix TICTACTOE_) or a local .env file."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TICTACTOE_", env_file=".env", extra="ignore")

    host: str = "0.0.0.0"
    port: int = 3000
    cors_origin: str = "http://localhost:4200"
    log_level: str = "INFO"
    # Clients validate the join code by its length, so keep this at 6 unless the frontend changes too.
    room_id_length: int = 6


@lru_cache
def get_settings() -> Settings:
    return Settings()
