"""
Configuration management for the FakeYou client
"""

# Standard library imports
from pathlib import Path
from typing import Optional, Union

# Local imports
from fakeyou.config.config import (
    BASE_URL,
    STORAGE_BASE_URL,
    USER_AGENT,
    AttemptFailedPolicy,
    ClientSettings,
    Configuration,
    ConfigurationFileError,
    ConfigurationKeyError,
    ConfigurationValueError,
)


def load_settings(config_path: Optional[Union[str, Path]] = None) -> ClientSettings:
    """
    Load client settings from a config file.

    Args:
        config_path (Union[str, Path], optional): Path to a JSON or YAML file.
            When omitted the defaults are returned.

    Returns:
        ClientSettings: Settings object
    """
    if config_path is None:
        return ClientSettings()
    return Configuration(config_file=config_path).to_settings()


__all__ = [
    "BASE_URL",
    "STORAGE_BASE_URL",
    "USER_AGENT",
    "AttemptFailedPolicy",
    "ClientSettings",
    "Configuration",
    "ConfigurationFileError",
    "ConfigurationKeyError",
    "ConfigurationValueError",
    "load_settings",
]
