"""Configuration constants and environment settings."""

from .constants import MAPPER_DEFAULTS, PKL_PATTERNS, VALIDATION_CODES
from .settings import Settings, get_settings

__all__ = ["MAPPER_DEFAULTS", "PKL_PATTERNS", "VALIDATION_CODES", "Settings", "get_settings"]
