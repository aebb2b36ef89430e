"""Configuration module for Tap Tempo.

This module provides the configuration dataclass and the functions that load it
from JSON files and the environment.
"""

import dataclasses
import json
import logging
import math
import os
import pathlib
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from tap_tempo.core import registry
from tap_tempo.errors import ConfigurationError
from tap_tempo.utils.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_DISPLAY,
    DEFAULT_PRECISION,
    DEFAULT_SAMPLE_SIZE,
    DEFAULT_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)

# Expected JSON type for each field
_FIELD_TYPES = {
    "sample_size": int,
    "timeout": (int, float),
    "precision": int,
    "display": str,
    "mouse": bool,
    "color": bool,
}


@dataclass(frozen=True)
class TapTempoConfig:
    sample_size: int = DEFAULT_SAMPLE_SIZE
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    precision: int = DEFAULT_PRECISION
    display: str = DEFAULT_DISPLAY
    mouse: bool = True
    color: bool = True

    def validate(self) -> "TapTempoConfig":
        """
        Check value ranges and return self.

        Raises
        ------
        ConfigurationError
            If any value is out of range or the display is unknown.
        """
        if self.sample_size < 1:
            raise ConfigurationError("sample size must be positive.")
        if not math.isfinite(self.timeout) or self.timeout < 0:
            raise ConfigurationError(f"timeout must be non-negative and finite, got {self.timeout}.")
        if self.precision < 0:
            raise ConfigurationError(f"precision must be non-negative, got {self.precision}.")
        if self.display not in registry.available():
            supported = ", ".join(registry.available())
            raise ConfigurationError(
                f"Unknown display '{self.display}'. Supported displays are: {supported}."
            )
        return self

    def merge(self, **overrides: Any) -> "TapTempoConfig":
        """Return a validated copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        unknown = set(changes) - set(_FIELD_TYPES)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return dataclasses.replace(self, **changes).validate()

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TapTempoConfig":
        """
        Build a validated config from a mapping.

        Raises
        ------
        ConfigurationError
            If the mapping has unknown keys or values of the wrong type.
        """
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration must be a JSON object, got {type(data).__name__}"
            )

        unknown = set(data) - set(_FIELD_TYPES)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        for key, value in data.items():
            expected = _FIELD_TYPES[key]
            # bool is a subclass of int but never a valid number here
            wrong_bool = isinstance(value, bool) and expected is not bool
            if wrong_bool or not isinstance(value, expected):
                raise ConfigurationError(
                    f"Invalid type for '{key}': {type(value).__name__}"
                )

        return cls(**data).validate()

    @classmethod
    def from_file(cls, config_path: Union[str, pathlib.Path]) -> "TapTempoConfig":
        """
        Load configuration from a JSON file.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        ConfigurationError
            If the file is not valid JSON or holds invalid values.
        """
        config_path = pathlib.Path(config_path)
        if not config_path.is_file():
            raise FileNotFoundError(f"Configuration file not found at {config_path}")

        with open(config_path, "r") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Error decoding JSON from {config_path}: {e}") from e

        logger.info("Loaded configuration from %s", config_path)
        return cls.from_dict(data)

    @classmethod
    def from_env(cls) -> "TapTempoConfig":
        """
        Load configuration from the file named by TAP_TEMPO_CONFIG, or defaults.

        Raises
        ------
        ConfigurationError
            If the variable names a missing file or the file is invalid.
        """
        config_path = os.getenv(CONFIG_ENV_VAR)
        if not config_path:
            logger.debug("%s is not set, using default configuration", CONFIG_ENV_VAR)
            return cls()
        try:
            return cls.from_file(config_path)
        except FileNotFoundError as e:
            raise ConfigurationError(
                f"{CONFIG_ENV_VAR} points to a missing file: {config_path}"
            ) from e


def load_config(config_path: Optional[Union[str, pathlib.Path]] = None) -> TapTempoConfig:
    """Load from ``config_path`` when given, otherwise from the environment."""
    if config_path is not None:
        return TapTempoConfig.from_file(config_path)
    return TapTempoConfig.from_env()
