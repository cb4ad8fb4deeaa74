"""Configuration module for plugsys."""

from plugsys.config.loader import get_config_path, load_config, save_config
from plugsys.config.schema import Config, LoggingConfig, PluginsConfig

__all__ = ["Config", "PluginsConfig", "LoggingConfig", "load_config", "save_config", "get_config_path"]
