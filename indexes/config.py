"""
YAML configuration of indicator sets and logging.

Example ``indicators.yaml``::

    logging:
      version: 1
      root: {level: INFO}
    indicators:
      rsi_14: {type: rsi, period: 14}
      bands: {type: bollinger_bands, period: 20, k: 2.0}
"""

import logging
import logging.config
from typing import Any, Dict, Mapping, Union

import yaml

from .base import BaseIndicator
from .exceptions import ConfigError
from .factory import create

logger = logging.getLogger(__name__)


class ConfigLoader:
    """
    A utility class to load, manage, and provide access to configuration
    settings from a YAML file.
    """

    def __init__(self, config_path: str):
        """
        Initializes the ConfigLoader with the path to the configuration file.

        Args:
            config_path (str): The file path to the YAML configuration.
        """
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Loads the YAML configuration file.

        Returns:
            Dict[str, Any]: A dictionary containing the configuration settings
                (empty for an empty file).

        Raises:
            FileNotFoundError: If the configuration file cannot be found.
            yaml.YAMLError: If the configuration file is malformed.
            ConfigError: If the document is not a mapping.
        """
        try:
            with open(self.config_path, 'r') as f:
                config = yaml.safe_load(f)
        except FileNotFoundError:
            logger.error(f"Configuration file not found at '{self.config_path}'")
            raise
        except yaml.YAMLError as e:
            logger.error(f"Malformed YAML in configuration file '{self.config_path}': {e}")
            raise

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ConfigError("config", type(config).__name__, "YAML mapping at document root")

        logger.info(f"Loaded configuration from '{self.config_path}'")
        return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Retrieves a configuration value for a given key.

        Args:
            key (str): The configuration key to retrieve.
            default (Any, optional): A default value to return if the key is not found.

        Returns:
            Any: The value of the configuration setting.
        """
        return self.config.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """
        Allows dictionary-style access to configuration settings.
        e.g., config_loader['indicators']
        """
        return self.config[key]


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Sets up logging from a ``logging.config.dictConfig`` dictionary.

    A malformed dictionary falls back to a basic INFO configuration and a
    warning is logged.

    Args:
        config (Dict[str, Any]): A dictionary with the logging configuration,
            typically the ``logging`` section of the YAML file.
    """
    try:
        logging.config.dictConfig(config)
        logger.info("Logging configured successfully from config.")
    except (ValueError, TypeError, AttributeError, KeyError) as e:
        # Fallback to a basic configuration if the one provided is malformed
        logging.basicConfig(level=logging.INFO,
                            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        logger.warning(f"Could not configure logging from dict: {e}. Using basic config.")


def build_indicators(config: Union[ConfigLoader, Mapping[str, Any]]) -> Dict[str, BaseIndicator]:
    """
    Create the indicators declared under the ``indicators`` key.

    Each entry maps a user-chosen name to a mapping with a ``type`` (any
    factory name or alias) plus the constructor parameters.

    Args:
        config: A ConfigLoader or the already-parsed configuration mapping.

    Returns:
        Dict[str, BaseIndicator]: Indicators keyed by their configured name, in file order.

    Raises:
        ConfigError: If an entry is not a mapping, lacks ``type`` or has invalid parameters.
        IndicatorNotFoundError: If ``type`` names no known indicator.
    """
    section = config.get('indicators') or {}
    if not isinstance(section, Mapping):
        raise ConfigError("indicators", type(section).__name__, "mapping of name -> indicator spec")

    indicators: Dict[str, BaseIndicator] = {}
    for name, spec in section.items():
        if not isinstance(spec, Mapping):
            raise ConfigError(str(name), spec, "mapping with a 'type' key")
        if 'type' not in spec:
            raise ConfigError("type", None, f"indicator type for '{name}'")

        params = {key: value for key, value in spec.items() if key != 'type'}
        indicators[name] = create(spec['type'], **params)
        logger.debug(f"Built indicator '{name}' of type {spec['type']} with {params}")

    logger.info(f"Built {len(indicators)} indicators from configuration")
    return indicators
