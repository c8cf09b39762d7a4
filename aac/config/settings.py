"""
Runtime settings read from the environment.

Values come from process environment variables, optionally seeded from a
`.env` file in the working directory.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

DEFAULT_MODELS_DIR = "data/models"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """
    Settings for the loader, web app and CLI.

    Usage in code:
        from aac.config.settings import get_settings
        settings = get_settings()
        loader = PklModelLoader(settings.models_dir)
    """

    models_dir: str = field(default_factory=lambda: os.getenv("AAC_MODELS_DIR", DEFAULT_MODELS_DIR))
    log_level: str = field(default_factory=lambda: os.getenv("AAC_LOG_LEVEL", "INFO").upper())
    host: str = field(default_factory=lambda: os.getenv("AAC_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("AAC_PORT", "8080")))
    load_on_startup: bool = field(default_factory=lambda: _env_flag("AAC_LOAD_ON_STARTUP", "true"))

    def __post_init__(self):
        """Validate settings values."""
        if not 0 < self.port < 65536:
            raise ValueError(f"AAC_PORT={self.port} outside range (0, 65536)")


def get_settings(dotenv: bool = True) -> Settings:
    """
    Build settings from the current environment.

    Args:
        dotenv: Load a `.env` file first (existing variables win)

    Returns:
        Fresh Settings instance
    """
    if dotenv:
        load_dotenv(override=False)
    return Settings()
