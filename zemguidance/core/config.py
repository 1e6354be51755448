"""
Configuration management for zemguidance.
"""

import os
import math
import yaml
import logging
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, asdict
from pathlib import Path

from .types import GuidanceGains, DEFAULT_ZEM_GAIN, DEFAULT_ZEV_GAIN


logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(ValueError):
    """Raised when a configuration value is invalid."""


@dataclass
class GuidanceConfig:
    """Main configuration class for zemguidance."""

    # Optimal guidance law gains
    zem_gain: float = DEFAULT_ZEM_GAIN
    zev_gain: float = DEFAULT_ZEV_GAIN

    # Default time-to-go (s) used when a caller does not supply one
    time_to_go: Optional[float] = None

    # Environment settings
    environment: str = field(default_factory=lambda: os.getenv("ENVIRONMENT", "development"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    def __post_init__(self):
        """Post-initialization configuration setup."""
        try:
            self.zem_gain = float(self.zem_gain)
            self.zev_gain = float(self.zev_gain)
            if self.time_to_go is not None:
                self.time_to_go = float(self.time_to_go)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid numeric configuration value: {e}") from e
        self.log_level = str(self.log_level).upper()

        self._validate()

    def _validate(self):
        """Validate configuration settings."""
        if not math.isfinite(self.zem_gain):
            raise ConfigurationError("zem_gain must be finite")

        if not math.isfinite(self.zev_gain):
            raise ConfigurationError("zev_gain must be finite")

        if self.time_to_go is not None and not self.time_to_go > 0:
            raise ConfigurationError("time_to_go must be positive")

        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {self.log_level}")

        if not GuidanceGains(self.zem_gain, self.zev_gain).is_optimal:
            logger.warning(
                f"Non-optimal guidance gains configured: zem_gain={self.zem_gain}, "
                f"zev_gain={self.zev_gain}"
            )

    @property
    def gains(self) -> GuidanceGains:
        return GuidanceGains(zem_gain=self.zem_gain, zev_gain=self.zev_gain)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "GuidanceConfig":
        """Load configuration from YAML file."""
        config_path = Path(config_path)

        if not config_path.exists():
            logger.warning(f"Config file {config_path} not found, using defaults")
            return cls()

        try:
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load config from {config_path}: {e}")
            logger.info("Using default configuration")
            return cls()

        if not config_data:
            logger.warning("Empty config file, using defaults")
            return cls()

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")

        # Gains may be given flat or nested under "gains"
        gains_data = config_data.pop("gains", None) or {}
        if not isinstance(gains_data, dict):
            raise ConfigurationError(f"gains in {config_path} must be a mapping")
        config_data = {**gains_data, **config_data}

        unknown = set(config_data) - set(cls.__dataclass_fields__)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {sorted(unknown)}")
            for key in unknown:
                config_data.pop(key)

        logger.info(f"Configuration loaded from {config_path}")
        return cls(**config_data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def to_file(self, config_path: Union[str, Path]):
        """Save configuration to YAML file."""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(config_path, 'w') as f:
                yaml.safe_dump(self.to_dict(), f, default_flow_style=False, indent=2)

            logger.info(f"Configuration saved to {config_path}")

        except OSError as e:
            logger.error(f"Failed to save config to {config_path}: {e}")
            raise

    def update_from_env(self):
        """Update configuration from environment variables."""
        env_mappings = {
            "ZEMGUIDANCE_ZEM_GAIN": ("zem_gain", float),
            "ZEMGUIDANCE_ZEV_GAIN": ("zev_gain", float),
            "ZEMGUIDANCE_TIME_TO_GO": ("time_to_go", float),
            "ZEMGUIDANCE_LOG_LEVEL": ("log_level", str.upper),
        }

        for env_var, (attr_name, converter) in env_mappings.items():
            value = os.getenv(env_var)
            if value is None:
                continue

            try:
                value = converter(value)
            except ValueError as e:
                logger.error(f"Failed to set {attr_name} from {env_var}: {e}")
                continue

            previous = getattr(self, attr_name)
            setattr(self, attr_name, value)
            try:
                self._validate()
            except ConfigurationError as e:
                setattr(self, attr_name, previous)
                logger.error(f"Ignoring {env_var}: {e}")
                continue

            logger.info(f"Updated {attr_name} from environment variable {env_var}")


def load_config(config_path: Optional[Union[str, Path]] = None) -> GuidanceConfig:
    """
    Load configuration from file or environment.

    Args:
        config_path: Path to configuration file (optional)

    Returns:
        Loaded configuration object
    """
    if config_path:
        config = GuidanceConfig.from_file(config_path)
    else:
        # Look for config file in standard locations
        possible_paths = [
            "zemguidance.yaml",
            "config/zemguidance.yaml",
            os.path.expanduser("~/.zemguidance/config.yaml"),
        ]

        config = None
        for path in possible_paths:
            if os.path.exists(path):
                config = GuidanceConfig.from_file(path)
                break

        if config is None:
            config = GuidanceConfig()

    # Update from environment variables
    config.update_from_env()

    return config
