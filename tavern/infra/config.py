"""Application configuration via Pydantic Settings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Dice
    max_dice_count: int = 100
    rng_seed: int | None = None  # fixed seed for reproducible sessions

    # Logging
    log_level: str = "INFO"

    # App
    app_debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
