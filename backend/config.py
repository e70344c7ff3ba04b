"""
Runtime settings for the snake game.

Values come from environment variables (a local .env file is picked up via
python-dotenv). Command-line flags in main.py take precedence over these.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from domain.constants import DEFAULT_SNAKE_NAME


@dataclass
class Settings:
    grid_width: int = 20
    grid_height: int = 20
    snake_name: str = DEFAULT_SNAKE_NAME
    high_score_file: str = "highscore.txt"
    log_level: str = "INFO"


def _env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def _env_str(key: str, default: str) -> str:
    raw = os.getenv(key, "").strip()
    return raw or default


def load_settings() -> Settings:
    """
    Build Settings from the environment.

    Raises:
        ValueError: If a numeric variable does not hold an integer
    """
    load_dotenv()
    defaults = Settings()

    return Settings(
        grid_width=_env_int("SNAKE_GRID_WIDTH", defaults.grid_width),
        grid_height=_env_int("SNAKE_GRID_HEIGHT", defaults.grid_height),
        snake_name=_env_str("SNAKE_NAME", defaults.snake_name),
        high_score_file=_env_str("SNAKE_HIGH_SCORE_FILE", defaults.high_score_file),
        log_level=_env_str("SNAKE_LOG_LEVEL", defaults.log_level).upper(),
    )
