"""Configuration module for shellguard."""

from shellguard.config.loader import get_config_path, load_config
from shellguard.config.schema import Config

__all__ = ["Config", "load_config", "get_config_path"]
