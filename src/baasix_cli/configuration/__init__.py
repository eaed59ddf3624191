"""Configuration domain exports."""

from .connection_settings import DEFAULT_SERVER_URL, ConnectionSettings
from .loader import ConfigurationError, load_config_file, load_connection_settings

__all__ = [
    "DEFAULT_SERVER_URL",
    "ConnectionSettings",
    "ConfigurationError",
    "load_config_file",
    "load_connection_settings",
]
