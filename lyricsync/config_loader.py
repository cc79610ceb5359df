"""Handles loading configuration from YAML files."""

import logging
import os

import yaml

from .exceptions import ConfigurationError
from .models import SyncConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads configuration settings from a YAML file."""

    def load_config(self, config_path: str) -> dict:
        """
        Loads configuration from the specified YAML file path.

        Args:
            config_path: The path to the YAML configuration file.

        Returns:
            A dictionary containing the loaded configuration settings.
            An empty file yields an empty dictionary.

        Raises:
            FileNotFoundError: If the configuration file does not exist.
            ConfigurationError: If the file cannot be parsed as YAML or
                                its root is not a mapping.
        """
        logger.info(f"Loading configuration from: {config_path}")
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        if not os.path.isfile(config_path):
            raise ConfigurationError(f"Configuration path is not a file: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML format in {config_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Could not read configuration file {config_path}: {e}") from e

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigurationError(f"Invalid YAML structure in {config_path}. Root must be a mapping.")
        return config

    def load_sync_config(self, config_path: str) -> SyncConfig:
        """Load a YAML file straight into a SyncConfig."""
        return SyncConfig.from_dict(self.load_config(config_path))
