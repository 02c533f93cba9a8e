"""
Configuration management for the FakeYou client.

This module provides the ClientSettings value threaded through every client
call, and a Configuration loader that builds one from a JSON or YAML file.
Nothing is read from the environment; applications that want environment
overrides pass the values in explicitly.
"""

# Standard library imports
import json
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Third-party imports
import yaml

from fakeyou import __version__
from fakeyou.utils.common.exceptions import ConfigurationError

BASE_URL = "https://api.fakeyou.com"
STORAGE_BASE_URL = "https://storage.googleapis.com/vocodes-public"
USER_AGENT = f"fakeyou-client@{__version__}"


class ConfigurationFileError(ConfigurationError):
    """
    Exception raised for errors related to configuration files.

    Attributes:
        file_path: Path to the configuration file that caused the error.
        message: A string describing the error.
    """

    def __init__(self, file_path: Union[str, Path], message: str):
        self.file_path = Path(file_path)
        self.message = message
        super().__init__(
            f"Configuration file error at {self.file_path}: {self.message}"
        )


class ConfigurationKeyError(ConfigurationError):
    """
    Exception raised when a configuration key is not found.

    Attributes:
        key: The configuration key that was not found.
    """

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Configuration key not found: {self.key}")


class ConfigurationValueError(ConfigurationError):
    """
    Exception raised when a configuration value is invalid.

    Attributes:
        key: The configuration key with the invalid value.
        message: A string describing why the value is invalid.
    """

    def __init__(self, key: str, message: str):
        self.key = key
        self.message = message
        super().__init__(
            f"Invalid value for configuration key '{self.key}': {self.message}"
        )


class AttemptFailedPolicy(Enum):
    """How the poller treats ``attempt_failed``."""

    # The server retries the job internally, keep polling.
    RETRYABLE = "retryable"
    # Fail the job on the first failed attempt.
    TERMINAL = "terminal"


@dataclass(frozen=True)
class ClientSettings:
    """
    Settings for a FakeYou client.

    Attributes:
        base_url: Root of the FakeYou API.
        storage_base_url: Prefix prepended to media paths returned by jobs.
        connect_timeout: Connect timeout in seconds for every request.
        read_timeout: Read timeout in seconds, or None to wait indefinitely.
            A status request in flight cannot be cancelled, so this also
            bounds how late a poll loop notices cancellation or its timeout.
        user_agent: User agent sent with every request.
        tts_poll_interval: Seconds between status requests for TTS jobs.
        face_animation_poll_interval: Seconds between status requests for
            face animation jobs.
        default_poll_interval: Seconds between status requests for any other
            job type.
        attempt_failed_policy: "retryable" keeps polling on attempt_failed,
            "terminal" fails the job.
    """

    base_url: str = BASE_URL
    storage_base_url: str = STORAGE_BASE_URL
    connect_timeout: float = 10.0
    read_timeout: Optional[float] = 30.0
    user_agent: str = USER_AGENT
    tts_poll_interval: float = 8.0
    face_animation_poll_interval: float = 10.0
    default_poll_interval: float = 2.0
    attempt_failed_policy: Union[str, AttemptFailedPolicy] = AttemptFailedPolicy.RETRYABLE

    def __post_init__(self) -> None:
        try:
            policy = AttemptFailedPolicy(self.attempt_failed_policy)
        except ValueError:
            raise ConfigurationValueError(
                "attempt_failed_policy",
                f"expected one of {[p.value for p in AttemptFailedPolicy]}, "
                f"got {self.attempt_failed_policy!r}",
            ) from None
        object.__setattr__(self, "attempt_failed_policy", policy)

        for key in ("base_url", "storage_base_url", "user_agent"):
            value = getattr(self, key)
            if not isinstance(value, str) or not value:
                raise ConfigurationValueError(key, "must be a non-empty string")
        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigurationValueError("base_url", "must include http/https scheme")

        for key in (
            "connect_timeout",
            "tts_poll_interval",
            "face_animation_poll_interval",
            "default_poll_interval",
        ):
            value = getattr(self, key)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
                raise ConfigurationValueError(key, "must be a non-negative number")
        if self.read_timeout is not None and (
            isinstance(self.read_timeout, bool)
            or not isinstance(self.read_timeout, (int, float))
            or self.read_timeout <= 0
        ):
            raise ConfigurationValueError("read_timeout", "must be a positive number or null")

    @property
    def timeout(self) -> Any:
        """Timeout value in the form ``requests`` expects."""
        return (self.connect_timeout, self.read_timeout)

    def with_overrides(self, **overrides: Any) -> "ClientSettings":
        """Return a copy with the given fields replaced."""
        unknown = set(overrides) - {f.name for f in fields(self)}
        if unknown:
            raise ConfigurationKeyError(", ".join(sorted(unknown)))
        return replace(self, **overrides)


class Configuration:
    """
    Loads client settings from a JSON or YAML file.

    Values found in the file override the ClientSettings defaults. The file
    may hold the settings at top level or under a ``fakeyou`` section.

    Attributes:
        config_file (Path): Path to the configuration file.
        config_data (Dict[str, Any]): The loaded configuration data.
    """

    SECTION = "fakeyou"

    def __init__(self, config_file: Union[str, Path]):
        """
        Initialize the Configuration object.

        Args:
            config_file: Path to the configuration file, either as a string or Path object.

        Examples:
            >>> config = Configuration("fakeyou.yaml")
            >>> settings = config.to_settings()
        """
        self.config_file = Path(config_file)
        self.config_data: Dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        """
        Load configuration from the configuration file.

        Raises:
            ConfigurationFileError: If the file is missing, unreadable or malformed.
        """
        if not self.config_file.exists():
            raise ConfigurationFileError(self.config_file, "File not found")

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                if self.config_file.suffix.lower() in [".yaml", ".yml"]:
                    data = yaml.safe_load(f) or {}
                else:
                    data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationFileError(
                self.config_file, f"Invalid file format: {str(e)}"
            ) from e
        except PermissionError as e:
            raise ConfigurationFileError(
                self.config_file, "Permission denied when reading file"
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationFileError(self.config_file, "Top level must be a mapping")

        section = data.get(self.SECTION, data)
        if not isinstance(section, dict):
            raise ConfigurationFileError(
                self.config_file, f"'{self.SECTION}' section must be a mapping"
            )
        self.config_data = dict(section)

    def get(self, key: str, default: Optional[Any] = None) -> Union[Any, None]:
        """Get a configuration value, or ``default`` if the key is absent."""
        return self.config_data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        if key not in self.config_data:
            raise ConfigurationKeyError(key)
        return self.config_data[key]

    def __contains__(self, key: str) -> bool:
        return key in self.config_data

    def to_settings(self, base: Optional[ClientSettings] = None) -> ClientSettings:
        """
        Build ClientSettings from the loaded values.

        Args:
            base: Settings to start from. Defaults to ClientSettings().

        Returns:
            ClientSettings: Settings with file values applied

        Raises:
            ConfigurationKeyError: If the file holds an unknown key.
            ConfigurationValueError: If a value is invalid.
        """
        return (base or ClientSettings()).with_overrides(**self.config_data)
