"""
Configuration Management

Loads configuration from .env files and provides typed config objects.
Handles display defaults, traversal limits and export settings.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .models import Config


def load_config(env_file: Optional[Path] = None) -> Config:
    """
    Load configuration from .env file and environment variables.

    Searches for .env file in:
    1. Provided env_file path
    2. Current directory
    3. User's home directory

    Environment variables override .env file values.

    Args:
        env_file: Optional path to .env file

    Returns:
        Config object with all settings

    Raises:
        ValidationError: If a variable holds a malformed or out-of-range value

    Example:
        config = load_config()
        scorer = UIScorer(config)
    """
    if env_file and env_file.exists():
        load_dotenv(env_file)
    elif Path(".env").exists():
        load_dotenv(".env")
    elif (Path.home() / ".env").exists():
        load_dotenv(Path.home() / ".env")

    # Raw strings are coerced and range-checked by the Config model
    config = Config(
        density=os.getenv("UIQ_DENSITY", "1.0"),
        screen_width_px=os.getenv("UIQ_SCREEN_WIDTH", "1080"),
        screen_height_px=os.getenv("UIQ_SCREEN_HEIGHT", "1920"),
        max_depth=os.getenv("UIQ_MAX_DEPTH", "200"),
        depth_policy=os.getenv("UIQ_DEPTH_POLICY", "truncate"),
        export_path=os.getenv("UIQ_EXPORT_PATH") or None,
        log_level=os.getenv("UIQ_LOG_LEVEL", "WARNING"),
    )

    return config
