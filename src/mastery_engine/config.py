"""
Runtime configuration for the mastery engine.
Values come from environment variables with home-directory defaults.
"""
import os
from pathlib import Path

DEFAULT_DB_PATH = str(Path.home() / ".mastery_engine" / "mastery.db")


class Config:
    """Application configuration"""

    DB_PATH: str = os.getenv("MASTERY_ENGINE_DB", DEFAULT_DB_PATH)
    LOG_LEVEL: str = os.getenv("MASTERY_ENGINE_LOG_LEVEL", "WARNING").upper()

    # Leaderboard rows shown by the CLI
    LEADERBOARD_LIMIT: int = int(os.getenv("MASTERY_ENGINE_LEADERBOARD_LIMIT", "20"))


config = Config()
