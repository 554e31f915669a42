"""Configuration module for socialcli."""

from socialcli.config.loader import get_config_path, load_config, save_config
from socialcli.config.schema import Config

__all__ = ["Config", "get_config_path", "load_config", "save_config"]
