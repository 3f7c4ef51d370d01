"""Configuration module for cealloga."""

from cealloga.config.loader import load_config, get_config_path
from cealloga.config.schema import ClientConfig

__all__ = ["ClientConfig", "load_config", "get_config_path"]
