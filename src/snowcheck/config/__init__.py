"""Configuration management."""

from snowcheck.config.loader import apply_environment, load_config, load_settings
from snowcheck.config.settings import Settings

__all__ = ["Settings", "apply_environment", "load_config", "load_settings"]
