"""
Configuration loader for Terraform generation.

Handles loading from multiple sources with proper priority:
CLI Args > Environment Variables > Config File > Defaults
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .models import GenerationConfig


class ConfigError(Exception):
    """Configuration loading or validation error."""

    pass


class ConfigLoader:
    """
    Loads and merges configuration from multiple sources.

    Priority order (highest to lowest):
    1. CLI arguments (passed to load() as overrides)
    2. Environment variables (CLOUDCANVAS_*)
    3. Configuration file
    4. Default values
    """

    DEFAULT_CONFIG_DIR = Path.home() / ".config" / "cloudcanvas"
    DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
    ENV_PREFIX = "CLOUDCANVAS_"
    CONFIG_PATH_ENV = "CLOUDCANVAS_CONFIG_PATH"

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration loader.

        Args:
            config_path: Path to configuration file. If None, uses default location.
        """
        self.config_path = config_path or self._get_config_path_from_env()

    @classmethod
    def _get_config_path_from_env(cls) -> Path:
        """Get configuration path from environment variable or default."""
        env_path = os.environ.get(cls.CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path).expanduser()
        return cls.DEFAULT_CONFIG_FILE

    def load(self, overrides: Optional[Dict[str, Any]] = None) -> GenerationConfig:
        """
        Load configuration from all sources and merge.

        Args:
            overrides: Highest-priority values, usually from CLI flags

        Returns:
            Validated GenerationConfig object

        Raises:
            ConfigError: If configuration is invalid
        """
        try:
            config_dict: dict[str, Any] = {}

            if self.config_path.exists():
                file_config = self._load_file(self.config_path)
                config_dict = self._deep_merge(config_dict, file_config)

            env_config = self._load_from_env()
            config_dict = self._deep_merge(config_dict, env_config)

            if overrides:
                config_dict = self._deep_merge(config_dict, overrides)

            return GenerationConfig.model_validate(config_dict)

        except ConfigError:
            raise
        except ValidationError as e:
            raise ConfigError(f"Configuration validation failed: {e}") from e
        except Exception as e:
            raise ConfigError(f"Failed to load configuration: {e}") from e

    def _load_file(self, path: Path) -> dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Configuration dictionary

        Raises:
            ConfigError: If file cannot be read or parsed
        """
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return data

    def _load_from_env(self) -> dict[str, Any]:
        """
        Load configuration from environment variables.

        Environment variable format:
        - CLOUDCANVAS_UNIQUE_IDENTIFIERS
        - CLOUDCANVAS_VARIABLES__AWS_REGION
        - CLOUDCANVAS_PORTS__APPLICATION_PORT

        Double underscore (__) separates nested keys.

        Returns:
            Configuration dictionary
        """
        config: dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(self.ENV_PREFIX) or key == self.CONFIG_PATH_ENV:
                continue

            config_key = key[len(self.ENV_PREFIX) :].lower()
            parts = config_key.split("__")

            current = config
            for part in parts[:-1]:
                if part not in current:
                    current[part] = {}
                current = current[part]

            current[parts[-1]] = self._convert_env_value(value)

        return config

    def _convert_env_value(self, value: str) -> Any:
        """
        Convert environment variable string to appropriate type.

        Args:
            value: Environment variable value as string

        Returns:
            Converted value (bool, int, float, or str)
        """
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        return value

    def _deep_merge(
        self, base: dict[str, Any], update: dict[str, Any]
    ) -> dict[str, Any]:
        """
        Deep merge two dictionaries.

        Args:
            base: Base dictionary
            update: Dictionary with updates

        Returns:
            Merged dictionary (base is not modified)
        """
        result = base.copy()

        for key, value in update.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def load_config(
    config_path: Optional[Path] = None, overrides: Optional[Dict[str, Any]] = None
) -> GenerationConfig:
    """
    Convenience function to load configuration.

    Args:
        config_path: Optional path to configuration file
        overrides: Optional highest-priority values

    Returns:
        Validated GenerationConfig
    """
    return ConfigLoader(config_path).load(overrides)


def create_default_config(output_path: Path) -> None:
    """
    Write a YAML file containing the default configuration.

    Args:
        output_path: Where to write the configuration file
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        yaml.safe_dump(
            GenerationConfig().model_dump(mode="json"),
            f,
            default_flow_style=False,
            sort_keys=False,
        )
