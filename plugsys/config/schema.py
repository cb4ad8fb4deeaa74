"""Configuration schema using Pydantic."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PluginsConfig(BaseModel):
    """Plugin discovery configuration."""
    directory: str = "~/.plugsys/plugins"
    nested: bool = True  # Descend into subdirectories during autoload
    suffix: str = "Plugin"  # Class-name suffix that marks a plugin source
    strict: bool = False  # Raise on broken plugin files instead of skipping them
    require_membership: bool = True  # Registry state calls reject unregistered plugins


class LoggingConfig(BaseModel):
    """Logging configuration."""
    enabled: bool = True
    level: str = "INFO"
    file_enabled: bool = False
    file_path: str = "~/.plugsys/logs/plugsys.log"
    rotation: str = "10 MB"
    retention: str = "7 days"


class Config(BaseSettings):
    """Root configuration for plugsys."""
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(env_prefix="PLUGSYS_", env_nested_delimiter="__")

    @property
    def plugins_path(self) -> Path:
        """Get expanded plugin directory path."""
        return Path(self.plugins.directory).expanduser()
