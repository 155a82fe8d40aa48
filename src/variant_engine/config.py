"""Front-end configuration.

Settings are read from environment variables (or a .env.variants file).
The engine functions are pure and never read settings; only the CLI and
the HTTP app do.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env.variants", env_file_encoding="utf-8",
    )

    # Category assumed when a request doesn't name one
    default_category: str = "untimed"

    log_level: str = "INFO"

    # Seed for random Chess960 positions (unset = system randomness)
    chess960_seed: int | None = None
