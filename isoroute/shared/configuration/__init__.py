"""Configuration management."""
from .config_manager import ConfigManager, get_config, initialize_config
from .settings import (
    GridSettings, TracerSettings, WorldSettings,
    LoggingSettings, ApplicationSettings
)

__all__ = [
    'ConfigManager', 'get_config', 'initialize_config',
    'GridSettings', 'TracerSettings', 'WorldSettings',
    'LoggingSettings', 'ApplicationSettings'
]
